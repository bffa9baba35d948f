import pytest

from ndmig.services.docker_runtime import DockerRuntimeService
from ndmig.services.registry import InstanceRegistryBuilder
from ndmig.services.signature import SignatureMatcher


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None


def _builder(api):
    runtime = DockerRuntimeService(logger=DummyLogger(), api=api)
    matcher = SignatureMatcher(runtime=runtime, logger=DummyLogger(), signature="postgres")
    return InstanceRegistryBuilder(runtime=runtime, matcher=matcher, logger=DummyLogger())


def test_registry_keeps_only_matching_database_containers(fake_api):
    fake_api.add_container("cid1", "/acme-postgres-db-1", running=False)
    fake_api.add_container("cid2", "/acme-bot-1", image="ballsdex")
    fake_api.add_container("cid3", "/acme-postgres-db-2")
    fake_api.add_container("cid4", "/other-postgres-db-1", image="postgres:16")
    fake_api.add_container("cid5", "/zeta-postgres-db-1")

    instances = _builder(fake_api).build()

    assert instances == {"acme-postgres-db-1": "cid1", "zeta-postgres-db-1": "cid5"}


@pytest.mark.parametrize(
    "image,name,expected",
    [
        ("postgres", "/acme-postgres-db-1", True),
        ("postgres", "/acme-redis-1", False),
        ("redis", "/acme-postgres-db-1", False),
        ("redis", "/acme-redis-1", False),
    ],
)
def test_registry_is_intersection_of_image_and_suffix(fake_api, image, name, expected):
    fake_api.add_container("cid", name, image=image)

    instances = _builder(fake_api).build()

    assert ("acme-postgres-db-1" in instances) is expected


def test_container_without_id_is_skipped_without_inspection(fake_api):
    fake_api.summaries.append({"Id": None, "Names": ["/ghost-postgres-db-1"], "Image": "postgres"})

    instances = _builder(fake_api).build()

    assert instances == {}
    assert "inspect_container" not in fake_api.call_names()


def test_container_vanishing_between_list_and_inspect_does_not_abort(fake_api):
    fake_api.add_container("gone", "/gone-postgres-db-1")
    del fake_api.inspections["gone"]
    fake_api.add_container("cid1", "/acme-postgres-db-1")

    instances = _builder(fake_api).build()

    assert instances == {"acme-postgres-db-1": "cid1"}


def test_unnamed_container_falls_back_to_id(fake_api):
    fake_api.add_container("abc-postgres-db-1", "", names=[])

    instances = _builder(fake_api).build()

    assert instances == {"abc-postgres-db-1": "abc-postgres-db-1"}


def test_inspection_is_sequential_per_container(fake_api):
    fake_api.add_container("cid1", "/a-postgres-db-1")
    fake_api.add_container("cid2", "/b-postgres-db-1")

    _builder(fake_api).build()

    assert fake_api.calls == [
        ("containers", True),
        ("inspect_container", "cid1"),
        ("inspect_container", "cid2"),
    ]
