"""Configuration loader for podman-wsl-setup."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from podmanwsl.errors import SetupError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    DEFAULT_FILENAME = ".podman-wsl-setup.yml"

    SUPPORTED_KEYS = {
        "skip_socket",
        "skip_docker_shim",
        "non_interactive",
        "verbose",
        "log_file",
        "canary_image",
        "shell_profile",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise SetupError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise SetupError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise SetupError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise SetupError(f"Unknown configuration keys: {unknown_list}")

        return parsed
