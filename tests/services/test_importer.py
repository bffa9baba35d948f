import pytest

from ndmig.errors import ImportUnavailableError
from ndmig.services.importer import ImportService


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


def test_import_is_not_available_yet():
    service = ImportService(runtime=None, logger=DummyLogger())

    with pytest.raises(ImportUnavailableError, match="not available yet"):
        service.import_dump("cid123", "/tmp/ndmig/cid123-export.sql")
