"""Shared domain models for ndmig."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

StreamChunk = Tuple[Optional[bytes], Optional[bytes]]


def strip_name(name: str) -> str:
    """Drops the leading `/` Docker puts in front of container names."""
    return name.lstrip("/")


@dataclass(frozen=True)
class ContainerDescriptor:
    """One entry of a container listing, fetched fresh on every discovery pass."""

    id: str
    name: str
    image: str
    running: bool

    @classmethod
    def from_summary(cls, summary: Dict[str, Any]) -> "ContainerDescriptor":
        container_id = summary.get("Id") or ""
        names = summary.get("Names") or []
        name = strip_name(names[0]) if names else ""
        return cls(
            id=container_id,
            name=name or container_id,
            image=summary.get("Image") or "",
            running=summary.get("State") == "running",
        )


@dataclass
class ExecSession:
    """A single remote command invocation against a container."""

    container_id: str
    command: List[str]
    attach_stdout: bool = True
    attach_stderr: bool = True
    exec_id: Optional[str] = None
    stream: Optional[Iterator[StreamChunk]] = field(default=None, repr=False)


@dataclass(frozen=True)
class DumpArtifact:
    """A dump persisted on disk."""

    container_id: str
    instance: str
    path: str
    size: int
