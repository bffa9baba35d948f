"""Fixed conventions shared across ndmig services."""

DEFAULT_IMAGE_SIGNATURE = "postgres"
DB_ROLE_SUFFIX = "postgres-db-1"

DEFAULT_DB_USER = "ballsdex"
DUMP_EXECUTABLE = "pg_dump"

TEMP_SUBDIR = "ndmig"
DUMP_FILE_SUFFIX = "-export.sql"

DEFAULT_DOCKER_TIMEOUT = 60
DEFAULT_EXEC_TIMEOUT = 3600

DIR_MODE = 0o700
FILE_MODE = 0o600
