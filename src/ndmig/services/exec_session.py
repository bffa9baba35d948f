"""Runs pg_dump inside a database container and collects its output."""

import codecs
import queue
import threading
import time
from typing import Callable, Iterator, List, Optional

from rich.markup import escape

from ndmig.constants import DEFAULT_DB_USER, DUMP_EXECUTABLE
from ndmig.errors import ExportError
from ndmig.errors_catalog import actionable_error
from ndmig.models import ExecSession, StreamChunk

_END_OF_STREAM = object()


class _StreamFailure:
    def __init__(self, error: BaseException):
        self.error = error


def build_dump_command(db_user: str = DEFAULT_DB_USER) -> List[str]:
    return [DUMP_EXECUTABLE, "-U", db_user]


def _pump(stream: Iterator[StreamChunk], chunks: "queue.Queue"):
    try:
        for frame in stream:
            chunks.put(frame)
    except Exception as exc:
        chunks.put(_StreamFailure(exc))
    else:
        chunks.put(_END_OF_STREAM)


class ExecSessionDriver:
    """Makes sure the container runs, then drives one pg_dump exec session."""

    def __init__(
        self,
        runtime,
        logger,
        err_console,
        command: Optional[List[str]] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.runtime = runtime
        self.logger = logger
        self.err_console = err_console
        self.command = command or build_dump_command()
        self.timeout = timeout
        self.clock = clock

    def ensure_running(self, container_id: str) -> bool:
        """Starts the container when it is stopped. Returns True if a start was issued."""
        if self.runtime.is_running(container_id):
            return False

        self.logger.info("Container %s is stopped, starting it", container_id)
        self.runtime.start_container(container_id)
        return True

    def dump(self, container_id: str) -> str:
        """
        Returns the complete standard output of the dump command.

        Runtime and stream errors propagate to the caller untouched. Nothing is
        returned for a session that did not finish cleanly, so a partial dump
        can never reach the writer.
        """
        self.ensure_running(container_id)

        session = self.runtime.create_exec(container_id, self.command)
        self.logger.debug("Created exec %s: %s", session.exec_id, " ".join(session.command))

        stream = self.runtime.start_exec(session)
        output = self._drain(session, stream)

        exit_code = self._exit_code(session)
        if exit_code != 0:
            raise ExportError(actionable_error("dump_exit_code", exit_code=exit_code))

        self.logger.info("Captured %s character(s) of dump output", len(output))
        return output

    def _exit_code(self, session: ExecSession) -> int:
        # The daemon can report the exec as running for a moment after the stream ends.
        for _ in range(2):
            exit_code = self.runtime.exec_exit_code(session)
            if exit_code is not None:
                return exit_code
        raise ExportError(actionable_error("dump_unfinished", exec_id=session.exec_id))

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return max(0.0, deadline - self.clock())

    def _drain(self, session: ExecSession, stream: Iterator[StreamChunk]) -> str:
        """
        Reads the stream on a daemon thread so the deadline holds even when
        pg_dump goes silent; the Docker SDK blocks in poll() without a timeout.
        """
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        parts: List[str] = []
        deadline = self.clock() + self.timeout if self.timeout else None
        chunks: "queue.Queue" = queue.Queue()

        reader = threading.Thread(
            target=_pump,
            args=(stream, chunks),
            name=f"ndmig-exec-{session.exec_id}",
            daemon=True,
        )
        reader.start()

        try:
            while True:
                try:
                    item = chunks.get(timeout=self._remaining(deadline))
                except queue.Empty:
                    raise ExportError(actionable_error("dump_timeout", timeout=self.timeout)) from None

                if item is _END_OF_STREAM:
                    break
                if isinstance(item, _StreamFailure):
                    raise item.error

                stdout_chunk, stderr_chunk = item
                if stdout_chunk:
                    parts.append(decoder.decode(stdout_chunk))
                if stderr_chunk:
                    self._report_stderr(stderr_chunk)
                if deadline is not None and self.clock() > deadline:
                    raise ExportError(actionable_error("dump_timeout", timeout=self.timeout))
        finally:
            if not reader.is_alive():
                close = getattr(stream, "close", None)
                if close is not None:
                    close()
            else:
                self.logger.debug("Abandoning stalled reader for exec %s", session.exec_id)
            session.stream = None

        parts.append(decoder.decode(b"", final=True))
        return "".join(parts)

    def _report_stderr(self, chunk: bytes):
        message = chunk.decode("utf-8", errors="replace").rstrip("\n")
        self.logger.debug("pg_dump stderr: %s", message)
        self.err_console.print(
            f"[bold yellow]pg_dump stderr:[/bold yellow] {escape(message)}",
            emoji=False,
            highlight=False,
        )
