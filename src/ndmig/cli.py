import logging
import os

import click
from rich.logging import RichHandler

from .constants import (
    DEFAULT_DB_USER,
    DEFAULT_DOCKER_TIMEOUT,
    DEFAULT_EXEC_TIMEOUT,
    DEFAULT_IMAGE_SIGNATURE,
)
from .core import Ndmig
from .errors import NdmigError
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .ndmig.yml if present.",
)
@click.option(
    "--operation",
    required=False,
    type=click.Choice(["export", "import"]),
    help="Operation to run. Prompts with a menu when omitted.",
)
@click.option(
    "--instance",
    required=False,
    help="Ballsdex instance name to use. Prompts with the detected list when omitted.",
)
@click.option(
    "--docker-host",
    required=False,
    help="Docker daemon URL (default: DOCKER_HOST or the local socket).",
)
@click.option(
    "--docker-timeout",
    required=False,
    type=int,
    default=None,
    help="Timeout in seconds for each Docker API request (default: 60).",
)
@click.option(
    "--exec-timeout",
    required=False,
    type=float,
    default=None,
    help="Deadline in seconds for the whole pg_dump session, 0 disables it (default: 3600).",
)
@click.option(
    "--image",
    required=False,
    help="Image reference identifying Ballsdex database containers (default: postgres).",
)
@click.option(
    "--db-user",
    required=False,
    help="PostgreSQL user passed to pg_dump (default: ballsdex).",
)
@click.option(
    "--temp-dir",
    required=False,
    type=click.Path(file_okay=False),
    help="Root directory for dumps (default: system temp directory).",
)
@click.option(
    "--clear-screen/--no-clear",
    "clear_screen",
    default=None,
    help="Clear the terminal before showing menus (default: clear).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(
    config,
    operation,
    instance,
    docker_host,
    docker_timeout,
    exec_timeout,
    image,
    db_user,
    temp_dir,
    clear_screen,
    verbose,
    log_file,
):
    """Export a Ballsdex PostgreSQL database from its Docker container."""
    logger = logging.getLogger("ndmig")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), ".ndmig.yml")
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except NdmigError as exc:
        raise click.ClickException(str(exc)) from exc

    operation = _resolve_option(operation, config_values, "operation")
    instance = _resolve_option(instance, config_values, "instance")
    docker_host = _resolve_option(docker_host, config_values, "docker_host")
    docker_timeout = int(
        _resolve_option(docker_timeout, config_values, "docker_timeout", default=DEFAULT_DOCKER_TIMEOUT)
    )
    exec_timeout = float(
        _resolve_option(exec_timeout, config_values, "exec_timeout", default=DEFAULT_EXEC_TIMEOUT)
    )
    image = str(_resolve_option(image, config_values, "image", default=DEFAULT_IMAGE_SIGNATURE))
    db_user = str(_resolve_option(db_user, config_values, "db_user", default=DEFAULT_DB_USER))
    temp_dir = _resolve_option(temp_dir, config_values, "temp_dir")
    clear_screen = bool(_resolve_option(clear_screen, config_values, "clear_screen", default=True))
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if operation is not None:
        operation = str(operation)
    if instance is not None:
        instance = str(instance)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    tool = Ndmig(
        operation=operation,
        instance=instance,
        docker_host=docker_host,
        docker_timeout=docker_timeout,
        exec_timeout=exec_timeout,
        image=image,
        db_user=db_user,
        temp_dir=temp_dir,
        clear_screen=clear_screen,
    )

    raise SystemExit(tool.run())


if __name__ == "__main__":
    main()
