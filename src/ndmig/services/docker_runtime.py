"""Docker runtime services for ndmig."""

from typing import Any, Dict, Iterator, List, Optional

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from ndmig.errors import RuntimeConnectionError
from ndmig.errors_catalog import actionable_error
from ndmig.models import ContainerDescriptor, ExecSession, StreamChunk


class DockerRuntimeService:
    """Thin wrapper over the Docker Engine API used by discovery and export."""

    def __init__(self, logger, docker_module=docker, api=None):
        self.logger = logger
        self.docker = docker_module
        self.client = None
        self.api = api

    def connect(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        kwargs: Dict[str, Any] = {}
        if timeout:
            kwargs["timeout"] = timeout

        try:
            if base_url:
                self.client = self.docker.DockerClient(base_url=base_url, **kwargs)
            else:
                self.client = self.docker.from_env(**kwargs)
            self.client.ping()
        except (DockerException, RequestException) as exc:
            self.client = None
            raise RuntimeConnectionError(
                actionable_error("docker_unreachable", error=exc)
            ) from exc

        self.api = self.client.api
        self.logger.debug("Connected to Docker daemon at %s", base_url or "local default")

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None

    def list_containers(self) -> List[ContainerDescriptor]:
        summaries = self.api.containers(all=True)
        self.logger.debug("Docker reported %s container(s)", len(summaries))
        return [ContainerDescriptor.from_summary(summary) for summary in summaries]

    def inspect_container(self, container_id: str) -> Dict[str, Any]:
        return self.api.inspect_container(container_id)

    def is_running(self, container_id: str) -> bool:
        state = self.inspect_container(container_id).get("State") or {}
        return bool(state.get("Running"))

    def start_container(self, container_id: str):
        self.api.start(container_id)

    def create_exec(self, container_id: str, command: List[str]) -> ExecSession:
        session = ExecSession(container_id=container_id, command=list(command))
        response = self.api.exec_create(
            container_id,
            session.command,
            stdout=session.attach_stdout,
            stderr=session.attach_stderr,
        )
        session.exec_id = response["Id"]
        return session

    def start_exec(self, session: ExecSession) -> Iterator[StreamChunk]:
        """Starts the exec and returns its attached stream of (stdout, stderr) frames."""
        session.stream = self.api.exec_start(session.exec_id, stream=True, demux=True)
        return session.stream

    def exec_exit_code(self, session: ExecSession) -> Optional[int]:
        return self.api.exec_inspect(session.exec_id).get("ExitCode")
