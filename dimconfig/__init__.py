"""dimconfig: context-sensitive configuration resolution with caching.

Usage:
    from dimconfig import ConfigEngine, EngineOptions

    engine = ConfigEngine(EngineOptions(base_context={"environment": "prod"}))
    await engine.add_config("app", "dimensions", "/srv/app/dimensions.json")
    await engine.add_config("app", "routes", "/srv/app/routes.yaml")
    routes = await engine.read("app", "routes", {"lang": "en"})
"""

from dimconfig.cache import MergeMode, NullResolutionCache, ResolutionCache
from dimconfig.config.models import CacheConfig, EngineOptions
from dimconfig.context import fingerprint, merge_base_context
from dimconfig.engine import ConfigEngine
from dimconfig.errors import (
    DimConfigError,
    MissingDimensionsError,
    ParseError,
    UnknownBundleError,
    UnknownCacheDataError,
    UnknownConfigError,
)
from dimconfig.formats import Flat, Sectioned, classify, is_sectioned

__all__ = [
    "CacheConfig",
    "ConfigEngine",
    "DimConfigError",
    "EngineOptions",
    "Flat",
    "MergeMode",
    "MissingDimensionsError",
    "NullResolutionCache",
    "ParseError",
    "ResolutionCache",
    "Sectioned",
    "UnknownBundleError",
    "UnknownCacheDataError",
    "UnknownConfigError",
    "classify",
    "fingerprint",
    "is_sectioned",
    "merge_base_context",
]
