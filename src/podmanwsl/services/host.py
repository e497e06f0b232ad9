"""Operating-system, package-manager and service-manager actions."""

import os
import shutil
from typing import Callable, Iterable, Optional

from podmanwsl.services.command_runner import CommandRunner


class HostService:
    """One method per host-level external action, so tests can substitute them."""

    def __init__(self, logger, runner: CommandRunner, which: Callable[[str], Optional[str]] = shutil.which):
        self.logger = logger
        self.runner = runner
        self._which = which

    def effective_uid(self) -> int:
        return os.geteuid()

    def which(self, command: str) -> Optional[str]:
        return self._which(command)

    def systemd_state(self) -> Optional[str]:
        """Return ``systemctl is-system-running`` output, or None without systemctl."""
        if not self.which("systemctl"):
            return None
        result = self.runner.run(["systemctl", "is-system-running"], check=False, capture_output=True)
        return (result.stdout or "").strip()

    def root_propagation(self) -> Optional[str]:
        if not self.which("findmnt"):
            return None
        result = self.runner.run(
            ["findmnt", "-no", "PROPAGATION", "/"],
            check=False,
            capture_output=True,
        )
        if result.returncode != 0:
            return None
        return (result.stdout or "").strip() or None

    def package_available(self, package: str) -> bool:
        result = self.runner.run(["apt-cache", "show", package], check=False, capture_output=True)
        return result.returncode == 0

    def package_installed(self, package: str) -> bool:
        result = self.runner.run(
            ["dpkg-query", "-W", "-f=${Status}", package],
            check=False,
            capture_output=True,
        )
        return result.returncode == 0 and "install ok installed" in (result.stdout or "")

    def update_package_index(self):
        self.runner.run(["sudo", "apt-get", "update"])

    def install_packages(self, packages: Iterable[str]):
        self.runner.run(["sudo", "apt-get", "install", "-y", *packages])

    def add_subordinate_ids(self, user: str, start: int, count: int):
        id_range = f"{start}-{start + count - 1}"
        self.runner.run(
            [
                "sudo",
                "usermod",
                "--add-subuids",
                id_range,
                "--add-subgids",
                id_range,
                user,
            ]
        )

    def enable_user_unit(self, unit: str) -> bool:
        if not self.which("systemctl"):
            return False
        result = self.runner.run(["systemctl", "--user", "enable", "--now", unit], check=False)
        return result.returncode == 0

    def show_user_unit_status(self, unit: str):
        if not self.which("systemctl"):
            return
        self.runner.run(["systemctl", "--user", "status", unit, "--no-pager"], check=False)
