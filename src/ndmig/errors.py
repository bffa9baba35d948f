"""Domain errors for ndmig."""


class NdmigError(RuntimeError):
    """Raised when the operation cannot continue safely."""

    label = "Error:"


class RuntimeConnectionError(NdmigError):
    label = "Failed to connect to Docker:"


class InvalidOperationError(NdmigError):
    label = "Invalid operation:"


class InstanceNotFoundError(NdmigError):
    label = "Instance not found:"


class ExportError(NdmigError):
    label = "Export failed:"


class DumpWriteError(NdmigError):
    label = "Failed to write dump:"


class ImportUnavailableError(NdmigError):
    label = "Import unavailable:"
