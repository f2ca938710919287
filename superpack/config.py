"""
Configuration management for superpack.

Precedence: env vars > .env file > superpack.yaml > defaults

Config file: $SUPERPACK_CONFIG, or ./superpack.yaml. Values may sit at the
top level or under a `superpack:` key.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "superpack.yaml"


def get_config_path() -> Path:
    """Resolve the YAML config path from env or default, before Settings init."""
    raw = os.environ.get("SUPERPACK_CONFIG", "")
    if raw:
        return Path(raw).expanduser().resolve()
    return (Path.cwd() / DEFAULT_CONFIG_FILENAME).resolve()


def load_yaml_config(config_file: Path) -> dict[str, Any]:
    """Load a YAML config file. Returns {} if missing or unreadable."""
    if not config_file.exists():
        return {}
    try:
        with open(config_file) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(f"{config_file.name} is not a dict, ignoring: {config_file}")
            return {}
        # Allow the settings to be namespaced under "superpack:"
        section = data.get("superpack")
        if isinstance(section, dict):
            return section
        return data
    except Exception as e:
        logger.warning(f"Error loading {config_file.name}: {e}")
        return {}


def save_yaml_config(config_file: Path, data: dict[str, Any]) -> Path:
    """Write config values to a YAML file."""
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    return config_file


class Settings(BaseSettings):
    """Runtime configuration. Precedence: env vars > .env > superpack.yaml > defaults."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # Plugins
    plugins_dir: Optional[Path] = Field(
        default=None,
        description="Directory scanned for plugin hook scripts",
    )

    # Hook runner
    max_recent_errors: int = Field(
        default=50,
        ge=1,
        description="Number of recent handler faults kept for introspection",
    )

    # Diagnostics
    diag_flags: list[str] = Field(
        default_factory=list,
        description="Diagnostic flags to enable (see superpack.lib.flags.FLAGS)",
    )
    diag_preset: Optional[str] = Field(
        default=None,
        description="Diagnostic preset (see superpack.lib.flags.PRESETS)",
    )

    model_config = {
        "env_prefix": "SUPERPACK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="before")
    @classmethod
    def _inject_yaml_config(cls, data: Any) -> Any:
        """Inject YAML values as fallbacks below env vars and .env."""
        if not isinstance(data, dict):
            data = {}

        yaml_config = load_yaml_config(get_config_path())

        for key, value in yaml_config.items():
            if key not in data or data[key] is None:
                env_val = os.environ.get(f"SUPERPACK_{key.upper()}")
                if env_val is None:
                    data[key] = value

        return data


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
