"""Configuration loader for ndmig."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ndmig.errors import NdmigError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "operation",
        "instance",
        "docker_host",
        "docker_timeout",
        "exec_timeout",
        "image",
        "db_user",
        "temp_dir",
        "clear_screen",
        "verbose",
        "log_file",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise NdmigError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise NdmigError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise NdmigError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise NdmigError(f"Unknown configuration keys: {unknown_list}")

        return parsed
