"""Filesystem helpers for ndmig."""

import logging
import os
import sys
import tempfile


class FileSystemService:
    """Encapsulates file and directory side effects."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def set_permissions(self, path: str, mode: int):
        if sys.platform == "win32":
            return

        try:
            os.chmod(path, mode)
        except OSError as exc:
            self.logger.warning("Could not set permissions on %s: %s", path, exc)

    def ensure_dir(self, path: str, mode: int):
        os.makedirs(path, exist_ok=True)
        self.set_permissions(path, mode)

    def replace_file(self, path: str, content: bytes, mode: int):
        """Writes `content` next to `path` first, then swaps it into place."""
        directory = os.path.dirname(path) or "."
        fd, temp_path = tempfile.mkstemp(
            prefix=".ndmig-", suffix=".partial", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as file_obj:
                file_obj.write(content)
            self.set_permissions(temp_path, mode)
            os.replace(temp_path, path)
        finally:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass
