"""Docker-compatible podman socket and DOCKER_HOST wiring."""

import os
from typing import MutableMapping, Optional

from podmanwsl import constants
from podmanwsl.errors_catalog import remediation
from podmanwsl.models import UserIdentity
from podmanwsl.services.filesystem import FileSystemService
from podmanwsl.services.host import HostService


class DockerSocketService:
    """Enables the user-scoped podman.socket and persists DOCKER_HOST."""

    def __init__(
        self,
        logger,
        console,
        host: HostService,
        filesystem: FileSystemService,
        environ: Optional[MutableMapping[str, str]] = None,
    ):
        self.logger = logger
        self.console = console
        self.host = host
        self.filesystem = filesystem
        self.environ = os.environ if environ is None else environ

    def enable_socket(self) -> bool:
        unit = constants.SOCKET_UNIT
        self.console.print(f"[blue]Enabling rootless {unit} (Docker-compatible socket)...[/blue]")
        if not self.host.enable_user_unit(unit):
            self.logger.warning(remediation("socket_failed", unit=unit))
            return False
        self.host.show_user_unit_status(unit)
        return True

    def persist_docker_host(self, shell_profile: str) -> bool:
        changed = self.filesystem.append_line_once(
            shell_profile,
            constants.DOCKER_HOST_PROFILE_LINE,
            comment=constants.DOCKER_HOST_PROFILE_COMMENT,
        )
        if changed:
            self.console.print(f"[green]Added DOCKER_HOST to {shell_profile}.[/green]")
        else:
            self.console.print(f"[dim]DOCKER_HOST already present in {shell_profile}.[/dim]")
        return changed

    def export_docker_host(self, identity: UserIdentity) -> str:
        value = constants.DOCKER_HOST_TEMPLATE.format(uid=identity.uid)
        self.environ[constants.DOCKER_HOST_VAR] = value
        self.console.print(f"DOCKER_HOST for current session: {value}", markup=False)
        return value

    def apply(self, identity: UserIdentity, shell_profile: str) -> bool:
        """Enable the socket, then wire DOCKER_HOST regardless of the unit outcome."""
        socket_ok = self.enable_socket()
        self.persist_docker_host(shell_profile)
        self.export_docker_host(identity)
        return socket_ok
