"""Rootless configuration and canary-container checks."""

from podmanwsl import constants
from podmanwsl.errors_catalog import remediation
from podmanwsl.models import VerificationResult
from podmanwsl.services.podman_runtime import PodmanRuntimeService


class VerificationService:
    def __init__(self, logger, console, runtime: PodmanRuntimeService):
        self.logger = logger
        self.console = console
        self.runtime = runtime

    def verify(self, canary_image: str = constants.CANARY_IMAGE) -> VerificationResult:
        if not self.runtime.info():
            self.logger.warning(remediation("info_failed"))
            return VerificationResult(info_ok=False, rootless=None, canary_ok=False)

        rootless = self.runtime.info_field(constants.ROOTLESS_FORMAT) or "unknown"
        if rootless == "true":
            self.console.print("[green]Podman reports rootless=true.[/green]")
        else:
            self.logger.warning(remediation("not_rootless", value=rootless))

        self.console.print(f"[blue]Running a quick container test ({canary_image})...[/blue]")
        canary_ok = self.runtime.run_container(canary_image)
        if canary_ok:
            self.console.print("[green]Container test succeeded.[/green]")
        else:
            self.logger.warning(remediation("canary_failed", image=canary_image))

        return VerificationResult(info_ok=True, rootless=rootless, canary_ok=canary_ok)
