"""Subordinate UID/GID range management."""

from typing import List

from podmanwsl import constants
from podmanwsl.models import UserIdentity
from podmanwsl.services.filesystem import FileSystemService
from podmanwsl.services.host import HostService


class IdentityMapperService:
    """Ensures /etc/subuid and /etc/subgid hold a range for the user."""

    def __init__(
        self,
        logger,
        console,
        host: HostService,
        filesystem: FileSystemService,
        subuid_file: str = constants.SUBUID_FILE,
        subgid_file: str = constants.SUBGID_FILE,
        start: int = constants.SUBID_START,
        count: int = constants.SUBID_COUNT,
    ):
        self.logger = logger
        self.console = console
        self.host = host
        self.filesystem = filesystem
        self.subuid_file = subuid_file
        self.subgid_file = subgid_file
        self.start = start
        self.count = count

    def has_entry(self, path: str, user: str) -> bool:
        return bool(self.filesystem.lines_with_prefix(path, f"{user}:"))

    def ensure_mappings(self, identity: UserIdentity) -> bool:
        """Add the range when either file lacks the user; return True if changed."""
        has_uid = self.has_entry(self.subuid_file, identity.name)
        has_gid = self.has_entry(self.subgid_file, identity.name)

        if has_uid and has_gid:
            self.console.print("[green]subuid/subgid mappings already exist.[/green]")
            return False

        last = self.start + self.count - 1
        self.console.print(
            f"[blue]Adding missing subuid/subgid mappings ({self.start}-{last}) for {identity.name}[/blue]"
        )
        self.logger.info(
            "Adding subordinate ids %s-%s for %s (subuid=%s, subgid=%s)",
            self.start,
            last,
            identity.name,
            has_uid,
            has_gid,
        )
        self.host.add_subordinate_ids(identity.name, self.start, self.count)
        return True

    def mapping_lines(self, identity: UserIdentity) -> List[str]:
        prefix = f"{identity.name}:"
        lines = []
        for path in (self.subuid_file, self.subgid_file):
            lines.extend(f"{path}:{line}" for line in self.filesystem.lines_with_prefix(path, prefix))
        return lines

    def show_mappings(self, identity: UserIdentity):
        lines = self.mapping_lines(identity)
        if not lines:
            self.console.print("[yellow]No mapping entries found to display.[/yellow]")
            return
        self.console.print("Current mapping entries:")
        for line in lines:
            self.console.print(f"  {line}", markup=False)
