"""User configuration management for reposcope.

Handles user-level configuration stored in ~/.reposcope/config.yaml:
- tool_path: The git executable to run
- path: Default repository to inspect
- options: Extra global git options applied to every command

Environment variables (optionally from a .env file) override the file:
- REPOSCOPE_TOOL_PATH
- REPOSCOPE_PATH
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from reposcope.git.runner import DEFAULT_TOOL_PATH

TOOL_PATH_ENV_VAR = "REPOSCOPE_TOOL_PATH"
PATH_ENV_VAR = "REPOSCOPE_PATH"


class ConfigError(Exception):
    """Raised when there's an error with reposcope configuration."""
    pass


class ReposcopeConfig(BaseModel):
    """Validated reposcope configuration."""

    tool_path: str = DEFAULT_TOOL_PATH
    path: Optional[str] = None
    options: Dict[str, str] = {}

    @field_validator("options", mode="before")
    @classmethod
    def normalize_options(cls, v):
        """Treat missing options as empty and flag values (null) as ''."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): "" if val is None else str(val) for k, val in v.items()}
        return v


_CONFIG_DIR = Path.home() / ".reposcope"


def get_config_dir() -> Path:
    """Get the reposcope configuration directory.

    Returns:
        Path to ~/.reposcope/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.reposcope/config.yaml
    """
    return get_config_dir() / "config.yaml"


def load_raw_config() -> Dict[str, Any]:
    """Load the configuration file as a plain dictionary.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Invalid config in {config_file}: expected a mapping")
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to ~/.reposcope/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    config_dir = get_config_dir()
    config_file = get_config_file_path()

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}")


def load_config() -> ReposcopeConfig:
    """Load the effective configuration.

    Values from config.yaml are overridden by environment variables,
    which may come from a .env file in the working directory.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    load_dotenv()
    data = load_raw_config()

    tool_path = os.getenv(TOOL_PATH_ENV_VAR)
    if tool_path:
        data["tool_path"] = tool_path
    repo_path = os.getenv(PATH_ENV_VAR)
    if repo_path:
        data["path"] = repo_path

    try:
        return ReposcopeConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")


def set_config_value(key: str, value: Any) -> None:
    """Set a top-level configuration value and save it.

    Args:
        key: Configuration key (tool_path, path).
        value: The value to store.
    """
    config = load_raw_config()
    config[key] = value
    save_config(config)


def set_option(name: str, value: str = "") -> None:
    """Add or update a global git option in the configuration.

    Args:
        name: Option name without leading dashes.
        value: Option value; empty for a flag.
    """
    config = load_raw_config()
    options = config.get("options") or {}
    options[name] = value
    config["options"] = options
    save_config(config)
