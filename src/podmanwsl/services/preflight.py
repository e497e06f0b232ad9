"""Environment and capability checks run before any change is made."""

import os
from typing import Dict, List, Optional

from packaging import version

from podmanwsl import constants
from podmanwsl.errors import SetupError
from podmanwsl.errors_catalog import remediation
from podmanwsl.models import UserIdentity
from podmanwsl.services.filesystem import FileSystemService
from podmanwsl.services.host import HostService


class PreflightService:
    """Read-only inspection of the WSL guest.

    Only the superuser and required-command checks raise; every other check
    returns an advisory message (or None) and leaves the decision to continue
    to the caller.
    """

    def __init__(
        self,
        logger,
        console,
        host: HostService,
        filesystem: FileSystemService,
        proc_version_file: str = constants.PROC_VERSION_FILE,
        cgroup_marker: str = constants.CGROUP_V2_MARKER,
        os_release_file: str = constants.OS_RELEASE_FILE,
    ):
        self.logger = logger
        self.console = console
        self.host = host
        self.filesystem = filesystem
        self.proc_version_file = proc_version_file
        self.cgroup_marker = cgroup_marker
        self.os_release_file = os_release_file

    def check_not_superuser(self, identity: UserIdentity):
        if identity.uid == 0:
            raise SetupError(remediation("superuser"))

    def check_required_commands(self):
        for command in constants.REQUIRED_COMMANDS:
            if not self.host.which(command):
                raise SetupError(remediation("command_missing", command=command))

    def check_wsl(self) -> Optional[str]:
        content = self.filesystem.read_text(self.proc_version_file) or ""
        if constants.WSL_MARKER in content.lower():
            self.console.print("[green]WSL environment detected.[/green]")
            return None
        return remediation("not_wsl")

    def check_systemd(self) -> Optional[str]:
        state = self.host.systemd_state()
        if state is None:
            return remediation("systemctl_missing")
        if state in constants.ACCEPTED_SYSTEMD_STATES:
            self.console.print(f"[green]systemd is {state}.[/green]")
            return None
        return remediation("systemd_not_running", state=state or "unknown")

    def check_cgroup_version(self) -> Optional[str]:
        if os.path.isfile(self.cgroup_marker):
            self.console.print("[green]cgroup v2 detected.[/green]")
            return None
        return remediation("cgroup_v1")

    def check_mount_propagation(self) -> Optional[str]:
        state = self.host.root_propagation()
        if state and "shared" in state.split(","):
            self.console.print("[green]Root mount propagation is shared.[/green]")
            return None
        return remediation("mount_not_shared", state=state or "unknown")

    def check_distribution(self) -> Optional[str]:
        release = self._parse_os_release(self.filesystem.read_text(self.os_release_file) or "")
        distro = release.get("ID", "")
        if not distro:
            self.logger.debug("Could not identify distribution from %s", self.os_release_file)
            return None
        if distro != "ubuntu":
            return remediation("not_ubuntu", distro=distro)

        version_id = release.get("VERSION_ID", "")
        try:
            current = version.parse(version_id)
        except version.InvalidVersion:
            self.logger.debug("Unparseable Ubuntu VERSION_ID: %r", version_id)
            return None

        if current < version.parse(constants.PASST_MIN_UBUNTU):
            return remediation(
                "old_ubuntu",
                version=version_id,
                minimum=constants.PASST_MIN_UBUNTU,
                package=constants.MODERN_NETWORK_PACKAGE,
            )
        return None

    def run_checks(self) -> List[str]:
        advisories = []
        for check in (
            self.check_wsl,
            self.check_systemd,
            self.check_cgroup_version,
            self.check_mount_propagation,
            self.check_distribution,
        ):
            message = check()
            if message:
                self.logger.warning(message)
                advisories.append(message)
        return advisories

    @staticmethod
    def _parse_os_release(content: str) -> Dict[str, str]:
        values = {}
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            values[key] = value.strip().strip('"').strip("'")
        return values
