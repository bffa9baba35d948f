import threading
from types import SimpleNamespace

import pytest
from docker.errors import DockerException, NotFound


class FakeDockerAPI:
    """In-memory stand-in for `docker.APIClient` that records every call."""

    def __init__(self, frames=None, exit_code=0, stream_error=None):
        self.summaries = []
        self.inspections = {}
        self.frames = list(frames or [])
        self.exit_code = exit_code
        self.stream_error = stream_error
        self.list_error = None
        self.hang = None
        self.calls = []

    def add_container(self, container_id, name, image="postgres", running=True, names=None):
        self.summaries.append(
            {
                "Id": container_id,
                "Names": [name] if names is None else names,
                "Image": image,
                "State": "running" if running else "exited",
            }
        )
        self.inspections[container_id] = {
            "Id": container_id,
            "Config": {"Image": image},
            "State": {"Running": running},
        }

    def call_names(self):
        return [call[0] for call in self.calls]

    def containers(self, all=False):
        self.calls.append(("containers", all))
        if self.list_error is not None:
            raise self.list_error
        return list(self.summaries)

    def inspect_container(self, container_id):
        self.calls.append(("inspect_container", container_id))
        info = self.inspections.get(container_id)
        if info is None:
            raise NotFound(f"No such container: {container_id}")
        if isinstance(info, Exception):
            raise info
        return info

    def start(self, container_id):
        self.calls.append(("start", container_id))
        self.inspections[container_id]["State"]["Running"] = True

    def exec_create(self, container_id, cmd, stdout=True, stderr=True):
        self.calls.append(("exec_create", container_id, list(cmd), stdout, stderr))
        return {"Id": "exec-1"}

    def exec_start(self, exec_id, stream=False, demux=False):
        self.calls.append(("exec_start", exec_id, stream, demux))
        return self._stream()

    def _stream(self):
        for frame in self.frames:
            yield frame
        if self.hang is not None:
            self.hang.wait()
        if self.stream_error is not None:
            raise self.stream_error

    def exec_inspect(self, exec_id):
        self.calls.append(("exec_inspect", exec_id))
        if isinstance(self.exit_code, list):
            return {"ExitCode": self.exit_code.pop(0)}
        return {"ExitCode": self.exit_code}


class FakeDockerClient:
    def __init__(self, api, ping_error=None):
        self.api = api
        self.ping_error = ping_error
        self.closed = False

    def ping(self):
        if self.ping_error is not None:
            raise self.ping_error
        return True

    def close(self):
        self.closed = True


def build_docker_module(client, connect_calls=None):
    calls = connect_calls if connect_calls is not None else []

    def from_env(**kwargs):
        calls.append(("from_env", kwargs))
        return client

    def docker_client(**kwargs):
        calls.append(("DockerClient", kwargs))
        return client

    return SimpleNamespace(from_env=from_env, DockerClient=docker_client)


@pytest.fixture
def fake_api():
    return FakeDockerAPI()


@pytest.fixture
def fake_client(fake_api):
    return FakeDockerClient(fake_api)


@pytest.fixture
def fake_docker_module(fake_client):
    return build_docker_module(fake_client)


@pytest.fixture
def unreachable_docker_module():
    def from_env(**_kwargs):
        raise DockerException("Error while fetching server API version")

    return SimpleNamespace(from_env=from_env, DockerClient=from_env)


@pytest.fixture
def make_client():
    return FakeDockerClient


@pytest.fixture
def make_docker_module():
    return build_docker_module


@pytest.fixture
def hanging_stream(fake_api):
    """Makes the fake exec stream go silent until the test ends."""
    release = threading.Event()
    fake_api.hang = release
    yield fake_api
    release.set()
