"""Storage migration after identity-mapping changes."""

from podmanwsl.errors_catalog import remediation
from podmanwsl.services.podman_runtime import PodmanRuntimeService


class MigrationService:
    def __init__(self, logger, console, runtime: PodmanRuntimeService):
        self.logger = logger
        self.console = console
        self.runtime = runtime

    def migrate_if_needed(self, mappings_changed: bool) -> bool:
        """Run ``podman system migrate`` only after this run changed the mappings.

        Returns True when a migration was attempted.
        """
        if not mappings_changed:
            self.console.print("[dim]Mappings unchanged; skipping storage migration.[/dim]")
            return False

        self.console.print("[blue]Stopping any existing containers before migration...[/blue]")
        if not self.runtime.stop_all():
            self.logger.debug("podman stop --all failed; there may be no containers.")

        self.console.print("[blue]Running podman system migrate...[/blue]")
        if self.runtime.system_migrate():
            self.console.print("[green]Storage migration completed.[/green]")
        else:
            self.logger.warning(remediation("migrate_failed"))
        return True
