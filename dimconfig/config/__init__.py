"""Settings for dimconfig itself.

Usage:
    from dimconfig.config import get_settings

    settings = get_settings()
    engine = ConfigEngine(settings.engine)
"""

from functools import lru_cache

from dimconfig.config.loader import load_settings_files
from dimconfig.config.models import CacheConfig, EngineOptions, LoggingConfig
from dimconfig.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `reload_settings()` to pick up changed files or environment.
    """
    set_toml_config(load_settings_files())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "CacheConfig",
    "EngineOptions",
    "LoggingConfig",
    "Settings",
    "get_settings",
    "reload_settings",
]
