"""Generator configuration: pydantic model plus YAML file loading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


class GeneratorConfig(BaseModel):
    """Naming conventions and output options for manifest generation."""

    archive_pattern: str = Field(
        default="scrubbler-plugin-*.zip",
        min_length=1,
        description="Glob matching plugin archives in the input directory",
    )
    module_pattern: str = Field(
        default="scrubbler_plugin_*.py",
        min_length=1,
        description="Glob matching the main plugin module inside an archive",
    )
    plugins_path: str = "plugins"  # URL segment between base URL and file name
    temp_prefix: str = "scrubbler_plugin_"
    default_version: str = "0.0.0"
    include_icons: bool = True


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping at the top of {path}")
            return data
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate a generator config, or return the defaults.

    Raises:
        ConfigError: If validation fails.
    """
    if path is None:
        return GeneratorConfig()

    data = load_yaml(path)
    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
