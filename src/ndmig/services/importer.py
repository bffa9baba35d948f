"""Import direction: local dump file into a Ballsdex database container."""

from ndmig.errors import ImportUnavailableError
from ndmig.errors_catalog import actionable_error


class ImportService:
    """
    Placeholder for restoring a dump by streaming it into `psql` over exec stdin.

    It mirrors the export side (a container id plus a local path) so the CLI can
    route to it once restore is implemented.
    """

    def __init__(self, runtime, logger):
        self.runtime = runtime
        self.logger = logger

    def import_dump(self, container_id: str, source_path: str):
        self.logger.debug("Import requested for %s from %s", container_id, source_path)
        raise ImportUnavailableError(actionable_error("import_unavailable"))
