"""Persists captured dumps under the ndmig temp directory."""

import os
import tempfile
from typing import Optional

from ndmig.constants import DIR_MODE, DUMP_FILE_SUFFIX, FILE_MODE, TEMP_SUBDIR
from ndmig.errors import DumpWriteError
from ndmig.errors_catalog import actionable_error
from ndmig.models import DumpArtifact


class DumpWriter:
    """Writes one dump per container to `<temp root>/ndmig/<id>-export.sql`."""

    def __init__(self, logger, filesystem_service, temp_root: Optional[str] = None):
        self.logger = logger
        self.filesystem_service = filesystem_service
        self.temp_root = temp_root or tempfile.gettempdir()

    @property
    def dump_dir(self) -> str:
        return os.path.join(self.temp_root, TEMP_SUBDIR)

    def dump_path(self, container_id: str) -> str:
        return os.path.join(self.dump_dir, f"{container_id}{DUMP_FILE_SUFFIX}")

    def write(self, content: str, container_id: str, instance: str) -> DumpArtifact:
        path = self.dump_path(container_id)
        data = content.encode("utf-8")

        try:
            self.filesystem_service.ensure_dir(self.dump_dir, DIR_MODE)
            self.filesystem_service.replace_file(path, data, FILE_MODE)
        except OSError as exc:
            raise DumpWriteError(actionable_error("dump_write_failed", path=path, error=exc)) from exc

        self.logger.info("Wrote %s byte(s) for %s to %s", len(data), instance, path)
        return DumpArtifact(container_id=container_id, instance=instance, path=path, size=len(data))
