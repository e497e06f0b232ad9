"""Filesystem helpers for podman-wsl-setup."""

import fcntl
import logging
import os
from typing import List, Optional


class FileSystemService:
    """Encapsulates reads of system files and the shell-profile append."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def read_text(self, path: str) -> Optional[str]:
        """Return the file contents, or None when it cannot be read."""
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as file_obj:
                return file_obj.read()
        except OSError as exc:
            self.logger.debug("Could not read %s: %s", path, exc)
            return None

    def lines_with_prefix(self, path: str, prefix: str) -> List[str]:
        content = self.read_text(path)
        if not content:
            return []
        return [line for line in content.splitlines() if line.startswith(prefix)]

    def append_line_once(self, path: str, line: str, comment: Optional[str] = None) -> bool:
        """Append ``line`` unless the file already contains it verbatim.

        Returns True when the file was modified.
        """
        path = os.path.expanduser(path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, "a+", encoding="utf-8") as file_obj:
            fcntl.flock(file_obj.fileno(), fcntl.LOCK_EX)
            try:
                file_obj.seek(0)
                if line in file_obj.read():
                    self.logger.debug("%s already contains: %s", path, line)
                    return False

                block = f"\n{comment}\n{line}\n" if comment else f"\n{line}\n"
                file_obj.write(block)
                file_obj.flush()
            finally:
                fcntl.flock(file_obj.fileno(), fcntl.LOCK_UN)

        self.logger.debug("Appended to %s: %s", path, line)
        return True
