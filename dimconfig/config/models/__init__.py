"""Configuration model exports.

    from dimconfig.config.models import CacheConfig, EngineOptions
"""

from dimconfig.config.models.cache import CacheConfig
from dimconfig.config.models.engine import EngineOptions
from dimconfig.config.models.observability import LoggingConfig

__all__ = [
    "CacheConfig",
    "EngineOptions",
    "LoggingConfig",
]
