"""Filesystem helpers for lxc-creator."""

import logging
import os
import tempfile
from typing import Optional

from rich.console import Console

from lxccreator.constants import PRIVATE_FILE_MODE


class FileSystemService:
    """Encapsulates temporary file side effects."""

    def __init__(self, logger: logging.Logger, console: Console, temp_dir: Optional[str] = None):
        self.logger = logger
        self.console = console
        self.temp_dir = temp_dir

    def create_private_file(self, content: str, prefix: str, suffix: str = "") -> str:
        """Write ``content`` to a new file readable only by the current user."""
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=self.temp_dir)
        try:
            os.fchmod(fd, PRIVATE_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as file_obj:
                file_obj.write(content)
                if not content.endswith("\n"):
                    file_obj.write("\n")
        except OSError:
            self.remove_file(path)
            raise
        self.logger.debug("Created private file: %s", path)
        return path

    def remove_file(self, path: Optional[str]):
        if not path or not os.path.exists(path):
            return

        try:
            os.remove(path)
            self.logger.debug("Removed file: %s", path)
        except OSError as exc:
            message = f"Warning: Could not remove {path}: {exc}"
            self.console.print(f"[yellow]{message}[/yellow]")
            self.logger.warning(message)
