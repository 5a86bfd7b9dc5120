"""Configuration file I/O operations.

This module provides functions for loading the YAML configuration with
validation through Pydantic models, and for writing the commented
example configuration created by ``filekeeper init``.
"""

import logging
from importlib import resources
from pathlib import Path
from string import Template

import yaml
from pydantic import ValidationError

from filekeeper.core.paths import RuntimeContext
from filekeeper.models.config import Config

logger = logging.getLogger(__name__)

EXAMPLE_SUFFIX = ".example"


class ConfigError(Exception):
    """Base exception for configuration-related errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid YAML."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def load_config(path: Path) -> Config:
    """Load and validate a configuration from a YAML file.

    An empty file yields the default configuration.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated Config object.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the YAML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    if not path.exists():
        raise ConfigNotFoundError(f"Configuration not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read configuration: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Invalid configuration content: expected a mapping, got {type(data).__name__}"
        )

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration content: {e}") from e


def config_exists(path: Path) -> bool:
    """Check if a configuration file exists.

    Args:
        path: Path to check.

    Returns:
        True if the configuration file exists, False otherwise.
    """
    return path.exists()


def require_config(path: Path) -> Config:
    """Load configuration or exit with helpful error message.

    Convenience wrapper around load_config() that prints user-friendly
    messages and exits for the common failure cases.

    Args:
        path: Configuration file path.

    Returns:
        Loaded and validated Config.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from filekeeper.utils.formatting import print_error, print_info

    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Configuration not found: {path}")
        print_info("Run 'filekeeper init' to create a default configuration file.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Error loading configuration from {path}: {e}")
        print_info("Run 'filekeeper init' to create a default configuration file.")
        raise typer.Exit(code=1) from e


def render_example_config(context: RuntimeContext) -> str:
    """Render the commented example configuration.

    Args:
        context: Runtime context providing the default log file path.

    Returns:
        YAML text of the example configuration.
    """
    template = resources.files("filekeeper.data").joinpath("filekeeper.yaml.example").read_text(
        encoding="utf-8"
    )
    return Template(template).substitute(log_file=str(context.log_path))


def get_example_path(config_path: Path) -> Path:
    """Get the example file path written next to a configuration path.

    Returns:
        Path with ".example" appended, e.g. filekeeper.yaml.example.
    """
    return config_path.with_name(config_path.name + EXAMPLE_SUFFIX)


def write_example_config(config_path: Path, context: RuntimeContext) -> Path:
    """Write the example configuration next to the given config path.

    Creates the parent directory if necessary and overwrites an existing
    example file.

    Args:
        config_path: Target configuration path; ".example" is appended.
        context: Runtime context providing default paths.

    Returns:
        Path of the written example file.

    Raises:
        ConfigError: If the directory or file cannot be written.
    """
    example_path = get_example_path(config_path)

    try:
        example_path.parent.mkdir(parents=True, exist_ok=True)
        example_path.write_text(render_example_config(context), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to write example configuration: {e}") from e

    logger.debug("Wrote example configuration to %s", example_path)
    return example_path
