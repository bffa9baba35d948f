import logging
from typing import Dict, Optional

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException
from rich.console import Console
from rich.markup import escape

from .constants import (
    DB_ROLE_SUFFIX,
    DEFAULT_DB_USER,
    DEFAULT_DOCKER_TIMEOUT,
    DEFAULT_EXEC_TIMEOUT,
    DEFAULT_IMAGE_SIGNATURE,
)
from .errors import ExportError, ImportUnavailableError, InstanceNotFoundError, NdmigError
from .errors_catalog import actionable_error
from .models import DumpArtifact
from .services.docker_runtime import DockerRuntimeService
from .services.dump_writer import DumpWriter
from .services.exec_session import ExecSessionDriver, build_dump_command
from .services.filesystem import FileSystemService
from .services.importer import ImportService
from .services.registry import InstanceRegistryBuilder
from .services.selection import SelectionService
from .services.signature import SignatureMatcher

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("ndmig")


class Ndmig:
    """Discovers Ballsdex instances and exports one of them to a local SQL dump."""

    def __init__(
        self,
        operation: Optional[str] = None,
        instance: Optional[str] = None,
        docker_host: Optional[str] = None,
        docker_timeout: int = DEFAULT_DOCKER_TIMEOUT,
        exec_timeout: float = DEFAULT_EXEC_TIMEOUT,
        image: str = DEFAULT_IMAGE_SIGNATURE,
        db_user: str = DEFAULT_DB_USER,
        temp_dir: Optional[str] = None,
        clear_screen: bool = True,
    ):
        self.operation = operation
        self.instance = instance
        self.docker_host = docker_host
        self.docker_timeout = docker_timeout
        self.exec_timeout = exec_timeout
        self.clear_screen = clear_screen

        self.runtime_service = DockerRuntimeService(logger=logger, docker_module=docker)
        self.signature_matcher = SignatureMatcher(
            runtime=self.runtime_service,
            logger=logger,
            signature=image,
        )
        self.registry_builder = InstanceRegistryBuilder(
            runtime=self.runtime_service,
            matcher=self.signature_matcher,
            logger=logger,
            role_suffix=DB_ROLE_SUFFIX,
        )
        self.exec_driver = ExecSessionDriver(
            runtime=self.runtime_service,
            logger=logger,
            err_console=err_console,
            command=build_dump_command(db_user),
            timeout=exec_timeout or None,
        )
        self.filesystem_service = FileSystemService(logger=logger)
        self.dump_writer = DumpWriter(
            logger=logger,
            filesystem_service=self.filesystem_service,
            temp_root=temp_dir,
        )
        self.selection_service = SelectionService(console=console, role_suffix=DB_ROLE_SUFFIX)
        self.import_service = ImportService(runtime=self.runtime_service, logger=logger)

    def _clear(self):
        if self.clear_screen:
            console.clear()

    def connect(self):
        self.runtime_service.connect(base_url=self.docker_host, timeout=self.docker_timeout)

    def discover_instances(self) -> Dict[str, str]:
        try:
            return self.registry_builder.build()
        except (DockerException, RequestException) as exc:
            raise NdmigError(actionable_error("container_listing_failed", error=exc)) from exc

    def export(self, instances: Dict[str, str]) -> DumpArtifact:
        try:
            key, container_id = self.selection_service.choose_instance(instances, self.instance)
        except InstanceNotFoundError:
            self._clear()
            raise

        instance_name = self.selection_service.instance_label(key)
        console.print("[bold yellow]⧗ Exporting...[/bold yellow]")
        logger.info("Exporting %s from container %s", instance_name, container_id)

        try:
            sql = self.exec_driver.dump(container_id)
        except (DockerException, RequestException, OSError) as exc:
            raise ExportError(str(exc)) from exc

        artifact = self.dump_writer.write(sql, container_id, instance_name)
        console.print(
            f"[bold green]✓ {escape(instance_name)} has been successfully exported![/bold green]"
        )
        console.print(f"[dim]{escape(artifact.path)}[/dim]")
        return artifact

    def import_(self, instances: Dict[str, str]) -> int:
        _, container_id = self.selection_service.choose_instance(instances, self.instance)
        try:
            self.import_service.import_dump(container_id, self.dump_writer.dump_path(container_id))
        except ImportUnavailableError as exc:
            console.print(f"[yellow]{escape(str(exc))}[/yellow]")
            logger.info("Import requested but not available")
        return 0

    def run(self) -> int:
        try:
            self._clear()
            self.connect()
            instances = self.discover_instances()

            console.print(
                "[bold bright_white]Welcome to NDMIG, a Ballsdex to NationDex migration tool![/bold bright_white]\n"
            )
            operation = self.selection_service.choose_operation(self.operation)

            if operation == "import":
                return self.import_(instances)

            self.export(instances)
            return 0

        except KeyboardInterrupt:
            err_console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except NdmigError as exc:
            err_console.print(f"[bold red]✗ {exc.label}[/bold red] {escape(str(exc))}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            err_console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            return 1
        finally:
            self.runtime_service.close()
