"""CLI configuration management.

Handles persistent CLI configuration stored in ~/.stitch-mcp/config.yaml.
Supports environment variable overrides and CLI flag precedence.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .shared.logging import LOG_LEVELS, get_logger
from .shared.paths import CONFIG_FILE, ensure_dirs

logger = get_logger(__name__)

# Default values
DEFAULT_BASE_URL = "https://stitch.googleapis.com/mcp"
DEFAULT_TIMEOUT = 30
DEFAULT_OUTPUT_FORMAT = "pretty"
DEFAULT_LOG_LEVEL = "warning"

# Environment variable mappings
ENV_VARS = {
    "base_url": "STITCH_BASE_URL",
    "api_key": "STITCH_API_KEY",
    "access_token": "STITCH_ACCESS_TOKEN",
    "project_id": "GOOGLE_CLOUD_PROJECT",
    "timeout": "STITCH_TIMEOUT",
    "output_format": "STITCH_OUTPUT_FORMAT",
    "log_level": "STITCH_LOG_LEVEL",
}

CONFIG_KEYS = tuple(ENV_VARS)

# Values never echoed back in full by `config show`
SECRET_KEYS = ("api_key", "access_token")


@dataclass
class CLIConfig:
    """CLI configuration."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    access_token: str | None = None
    project_id: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    output_format: str = DEFAULT_OUTPUT_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def to_display_dict(self) -> dict[str, Any]:
        """Config values with secrets masked."""
        values: dict[str, Any] = {}
        for key in CONFIG_KEYS:
            value = getattr(self, key)
            if key in SECRET_KEYS and value:
                value = f"{value[:4]}..." if len(value) > 8 else "***"
            values[key] = value
        return values


def get_config_path() -> Path:
    """Get the CLI config file path.

    Returns:
        Path to ~/.stitch-mcp/config.yaml
    """
    return CONFIG_FILE


def _coerce(key: str, value: Any) -> Any:
    if key == "timeout":
        return int(value)
    if key == "log_level":
        level = str(value).lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level
    return str(value)


def _read_config_file(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config file", path=str(config_path), error=str(e))
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring malformed config file", path=str(config_path))
        return {}
    return data


def load_config() -> CLIConfig:
    """Load CLI configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (~/.stitch-mcp/config.yaml)
    3. Defaults

    Returns:
        CLIConfig with values and sources
    """
    config = CLIConfig()
    sources: dict[str, str] = {key: "default" for key in CONFIG_KEYS}

    config_path = get_config_path()
    if config_path.exists():
        file_config = _read_config_file(config_path)
        for key in CONFIG_KEYS:
            if key not in file_config or file_config[key] is None:
                continue
            try:
                setattr(config, key, _coerce(key, file_config[key]))
                sources[key] = "config file"
            except ValueError:
                logger.warning("ignoring invalid config value", key=key)

    for key, env_var in ENV_VARS.items():
        raw = os.environ.get(env_var)
        if not raw:
            continue
        try:
            setattr(config, key, _coerce(key, raw))
            sources[key] = "environment"
        except ValueError:
            logger.warning("ignoring invalid environment value", env_var=env_var)

    config._sources = sources
    return config


def save_config(key: str, value: Any) -> None:
    """Save a config value to the config file.

    Args:
        key: Config key (one of CONFIG_KEYS)
        value: Value to save

    Raises:
        KeyError: If the key is unknown
        ValueError: If the value cannot be coerced
    """
    if key not in CONFIG_KEYS:
        raise KeyError(key)

    config_path = get_config_path()

    existing: dict[str, Any] = {}
    if config_path.exists():
        existing = _read_config_file(config_path)

    existing[key] = _coerce(key, value)

    ensure_dirs(config_path.parent)

    with open(config_path, "w") as f:
        yaml.dump(existing, f, default_flow_style=False)


def unset_config(key: str) -> bool:
    """Remove a config value from the config file.

    Args:
        key: Config key to remove

    Returns:
        True if key was removed, False if not found
    """
    config_path = get_config_path()
    if not config_path.exists():
        return False

    existing = _read_config_file(config_path)
    if key not in existing:
        return False

    del existing[key]

    with open(config_path, "w") as f:
        yaml.dump(existing, f, default_flow_style=False)

    return True
