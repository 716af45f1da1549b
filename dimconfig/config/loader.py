"""TOML settings loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any


def get_config_dir() -> Path:
    """Get the settings directory path.

    The directory can be overridden with DIMCONFIG_CONFIG_DIR. Otherwise the
    nearest 'config/' directory from the current directory upwards is used.
    """
    config_dir_env = os.environ.get("DIMCONFIG_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):
        config_path = current / "config"
        if config_path.is_dir():
            return config_path
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Get the current environment from DIMCONFIG_ENV, defaulting to 'development'."""
    return os.environ.get("DIMCONFIG_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Nested dictionaries are merged recursively; any other value in
    override replaces the base value.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_settings_files() -> dict[str, Any]:
    """Load engine settings from TOML files.

    Loading order:
    1. config/default.toml (optional)
    2. config/{DIMCONFIG_ENV}.toml (optional)

    Both files are optional since every setting has a code default.
    """
    config_dir = get_config_dir()
    settings: dict[str, Any] = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        settings = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.exists():
        settings = deep_merge(settings, load_toml(env_path))

    return settings
