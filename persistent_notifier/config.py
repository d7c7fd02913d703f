"""Configuration file management for persistent_notifier.

This module handles loading and validation of optional configuration files
at `.persistent_notifier/config.toml`. Configuration files are discovered by
searching upward from the current working directory until a `.git` directory
(the project root) is found.

Example:

    [persistent_notifier]
    startup_notifications = true
    strict_remove = false
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Check Python version for tomllib support (Python 3.11+)
if sys.version_info < (3, 11):
    raise RuntimeError(
        "persistent_notifier requires Python 3.11 or greater for tomllib support. "
        f"Current version: {sys.version_info.major}.{sys.version_info.minor}"
    )

import tomllib  # Python 3.11+ standard library

from .errors import ConfigError

CONFIG_DIR_NAME = ".persistent_notifier"
CONFIG_FILE_NAME = "config.toml"
CONFIG_TABLE = "persistent_notifier"

DEFAULTS: Dict[str, Any] = {
    "startup_notifications": True,
    "strict_remove": True,
}


def find_config_file(cwd: Path) -> Optional[Path]:
    """Find the config file by searching upward from cwd.

    Stops after the directory containing `.git` (project boundary) or at the
    filesystem root.

    Args:
        cwd: Directory to start the search from

    Returns:
        Path to the config file if found, None otherwise
    """
    current = Path(cwd).resolve()
    root = Path(current.anchor)

    while True:
        config_file = current / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if config_file.is_file():
            return config_file
        if (current / ".git").exists() or current == root:
            return None
        current = current.parent


def validate_config(config: Dict[str, Any], source: Union[Path, str]) -> Dict[str, Any]:
    """Validate configuration values and filter out unknown keys.

    Args:
        config: Dictionary of configuration values
        source: Config file path, or a description of where the values came
            from (for error messages)

    Returns:
        Validated config dictionary with only known keys

    Raises:
        ConfigError: If any validation fails
    """
    # Unknown keys are dropped for forward compatibility
    validated_config = {k: v for k, v in config.items() if k in DEFAULTS}

    for key in ("startup_notifications", "strict_remove"):
        if key in validated_config and not isinstance(validated_config[key], bool):
            raise ConfigError(
                f"Invalid value for '{key}' in {source}: "
                f"expected boolean, got {type(validated_config[key]).__name__}"
            )

    return validated_config


def load_config(cwd: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration, returning an empty dict if no config file exists.

    Raises an exception if the config file exists but cannot be parsed, so
    users can fix errors.

    Args:
        cwd: Directory to start searching from. If None, uses Path.cwd()

    Raises:
        ConfigError: If the config file contains invalid TOML or values, or
            cannot be read
    """
    if cwd is None:
        cwd = Path.cwd()

    config_file = find_config_file(cwd)
    if config_file is None:
        return {}

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"Failed to parse {config_file}: Invalid TOML syntax - {e}"
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Failed to read {config_file}: {e}"
        ) from e

    config = data.get(CONFIG_TABLE, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"Invalid [{CONFIG_TABLE}] section in {config_file}: expected a table"
        )
    return validate_config(config, config_file)


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Validate config passed in code and fill in defaults for missing keys.

    Raises:
        ConfigError: If a known key has a value of the wrong type
    """
    resolved = dict(DEFAULTS)
    resolved.update(validate_config(config or {}, "notifier config"))
    return resolved
