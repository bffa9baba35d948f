"""Actionable error catalog for ndmig."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "docker_unreachable": {
        "what": "Could not reach the Docker daemon ({error}).",
        "next": "Make sure Docker is running and your user can access its socket, "
        "or point `--docker-host` at the right endpoint.",
    },
    "container_listing_failed": {
        "what": "Failed to list containers ({error}).",
        "next": "Check that the Docker daemon is healthy with `docker ps -a`.",
    },
    "invalid_operation": {
        "what": "Unknown choice '{operation}'.",
        "next": "Enter '1' (export) or '2' (import).",
    },
    "instance_not_found": {
        "what": "'{instance}' is not a detected Ballsdex instance.",
        "next": "Type one of the listed instance names exactly as shown.",
    },
    "dump_exit_code": {
        "what": "pg_dump exited with status {exit_code}.",
        "next": "Read the pg_dump stderr lines above and check the database user with `--db-user`.",
    },
    "dump_unfinished": {
        "what": "Docker still reports exec {exec_id} as running after its output ended.",
        "next": "Check `docker ps` for a stuck pg_dump process and retry the export.",
    },
    "dump_timeout": {
        "what": "pg_dump did not finish within {timeout}s.",
        "next": "Raise `--exec-timeout` (0 disables the deadline) for large databases.",
    },
    "dump_write_failed": {
        "what": "Could not write {path} ({error}).",
        "next": "Check free disk space and permissions, or choose another `--temp-dir`.",
    },
    "import_unavailable": {
        "what": "Importing a dump into an instance is not available yet.",
        "next": "Keep the exported `.sql` file; import will be added in a later release.",
    },
}


def actionable_error(code: str, **kwargs: object) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
