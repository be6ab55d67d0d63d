"""Configuration file loader (critpath_config.yaml)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .scheduler import SchedulingConfig

CONFIG_FILENAME = "critpath_config.yaml"


class UnifiedConfig(BaseModel):
    """Top-level configuration file contents."""

    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the config file

    Returns:
        UnifiedConfig; sections missing from the file take their defaults

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e

    if data is None:
        return UnifiedConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config must contain a dictionary at the root level")

    try:
        return UnifiedConfig(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
