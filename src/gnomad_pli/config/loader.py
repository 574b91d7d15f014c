"""Configuration loading with YAML parsing and validation."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from .schema import PluginConfig


def load_config(config_path: Path | str) -> PluginConfig:
    """
    Load and validate plugin configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PluginConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        yaml_content = f.read()

    # Empty YAML document means all defaults
    if not yaml_content.strip():
        return PluginConfig()

    return pydantic_yaml.parse_yaml_raw_as(PluginConfig, yaml_content)


def load_config_with_overrides(
    config_path: Path | str,
    overrides: dict[str, Any],
) -> PluginConfig:
    """
    Load config from YAML and apply dictionary overrides.

    Used for CLI flags that override config file values.

    Args:
        config_path: Path to YAML configuration file
        overrides: Values to override; dotted keys address nested fields
                   (e.g. "source.timeout_seconds")

    Returns:
        Validated PluginConfig with overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If final config is invalid
    """
    config = load_config(config_path)
    config_dict = config.model_dump()

    for key, value in overrides.items():
        parts = key.split(".")
        target = config_dict
        for part in parts[:-1]:
            target = target[part]
        target[parts[-1]] = value

    return PluginConfig.model_validate(config_dict)
