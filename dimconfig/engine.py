"""ConfigEngine - context-sensitive config resolution with caching.

Registers config files per (bundle, config), resolves them against a
runtime context and memoizes the result:

- add_config / delete_config maintain the registry
- read returns the merged value for a context
- read_no_merge returns the applying sections, most specific first
- read_dimensions returns the authoritative dimensions document

Sectioned documents are resolved through a DimensionalResolver wrapped so
the engine-wide base context is merged under every call. Anything else is
returned verbatim.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from dimconfig.cache import MergeMode, ResolutionCache, create_resolution_cache
from dimconfig.config.models import EngineOptions
from dimconfig.config.settings import Settings
from dimconfig.context import Context
from dimconfig.dimensions import DimensionPathSelector
from dimconfig.errors import (
    MissingDimensionsError,
    ParseError,
    UnknownBundleError,
    UnknownCacheDataError,
    UnknownConfigError,
)
from dimconfig.formats import Sectioned, classify
from dimconfig.loaders import ContentLoader, FileContentLoader
from dimconfig.locks import KeyedLocks
from dimconfig.observability.logging import get_logger, setup_logging
from dimconfig.observability.metrics import REGISTERED_CONFIGS, RESOLVER_BUILDS
from dimconfig.registry import ConfigRegistry
from dimconfig.resolvers import (
    BaseContextResolver,
    FlatResolver,
    PriorityMergeResolver,
    ResolverFactory,
    ResolverHandle,
    SettingsCallback,
    build_dimensional_resolver,
)

logger = get_logger(__name__)


class ConfigEngine:
    """Resolve registered config files against runtime contexts.

    Values returned by read and read_no_merge may be shared with the cache
    and with other callers, so they must be treated as read-only.
    """

    def __init__(
        self,
        options: EngineOptions | None = None,
        *,
        loader: ContentLoader | None = None,
        resolver_factory: ResolverFactory | None = None,
        cache: ResolutionCache | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            options: Base context, dimensions selection and cache options
            loader: Reads config files (defaults to FileContentLoader)
            resolver_factory: Builds a DimensionalResolver from a bundle list
                (defaults to PriorityMergeResolver)
            cache: Resolution cache; pass NullResolutionCache to disable caching
        """
        self._options = options or EngineOptions()
        self._loader = loader or FileContentLoader()
        self._resolver_factory: ResolverFactory = resolver_factory or PriorityMergeResolver
        self._cache = cache if cache is not None else create_resolution_cache(self._options.cache)
        self._registry = ConfigRegistry()
        self._selector = DimensionPathSelector(
            dimensions_path=self._options.dimensions_path,
            dimensions_bundle=self._options.dimensions_bundle,
        )
        self._dimensions: list[Any] | None = None
        self._dimensions_lock = asyncio.Lock()
        self._registration_locks = KeyedLocks()
        self._build_locks = KeyedLocks()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        configure_logging: bool = False,
        **kwargs: Any,
    ) -> "ConfigEngine":
        """Create an engine from process settings (see dimconfig.config).

        With configure_logging, structlog is also set up from
        ``settings.logging``; embedding applications usually do this themselves.
        """
        if settings is None:
            from dimconfig.config import get_settings

            settings = get_settings()
        if configure_logging:
            setup_logging(level=settings.logging.level, format=settings.logging.format)
        return cls(settings.engine, **kwargs)

    @property
    def options(self) -> EngineOptions:
        return self._options

    @property
    def registry(self) -> ConfigRegistry:
        return self._registry

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def dimensions_path(self) -> str | None:
        return self._selector.path

    # Registration
    async def add_config(self, bundle: str, config: str, path: str) -> None:
        """Register (or re-register) a config file.

        The file is loaded before anything changes, so a failed load leaves
        any previous registration in place. Registrations of the same
        (bundle, config) are applied in the order they were issued.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        async with self._registration_locks.hold((bundle, config)):
            contents = await self._loader.load(path)

            previous = self._unregister(bundle, config)
            # a re-registered path may have changed on disk
            self._invalidate_path(path)

            self._registry.set_contents(path, contents)
            self._registry.set_path(bundle, config, path)
            if previous is None:
                REGISTERED_CONFIGS.inc()
            self._selector.consider(bundle, config, path)

        logger.info(
            "config_registered", bundle=bundle, config=config, path=path, previous=previous
        )

    def delete_config(self, bundle: str, config: str, path: str | None = None) -> None:  # noqa: ARG002
        """Deregister a config file; unknown entries are ignored.

        ``path`` is accepted for symmetry with add_config; the registered
        path is always the one removed.
        """
        previous = self._unregister(bundle, config)
        if previous is None:
            return

        REGISTERED_CONFIGS.dec()
        logger.info("config_deleted", bundle=bundle, config=config, path=previous)

    def _unregister(self, bundle: str, config: str) -> str | None:
        """Drop an entry and everything derived from it, returning its old path."""
        previous = self._registry.remove_path(bundle, config)
        self._cache.invalidate(bundle, config)
        if previous is not None:
            self._invalidate_path(previous)
        return previous

    def _invalidate_path(self, path: str) -> None:
        """Drop derived state of path, including cached reads of any entry using it."""
        self._registry.invalidate_path(path)
        for bundle, config in self._registry.entries_for_path(path):
            self._cache.invalidate(bundle, config)

    # Reads
    async def read(self, bundle: str, config: str, context: Context | None = None) -> Any:
        """Read the config merged for context.

        Raises:
            UnknownBundleError: If the bundle was never registered
            UnknownConfigError: If the config is not registered in the bundle
        """
        return await self._resolve(bundle, config, context, MergeMode.MERGE)

    async def read_no_merge(
        self, bundle: str, config: str, context: Context | None = None
    ) -> list[Any]:
        """Read the sections applying to context, most specific first.

        A config that is not sectioned yields a single-element list.

        Raises:
            UnknownBundleError: If the bundle was never registered
            UnknownConfigError: If the config is not registered in the bundle
        """
        return await self._resolve(bundle, config, context, MergeMode.NO_MERGE)

    async def _resolve(
        self,
        bundle: str,
        config: str,
        context: Context | None,
        mode: MergeMode,
    ) -> Any:
        try:
            return self._cache.get(bundle, config, mode, context)
        except UnknownCacheDataError as miss:
            logger.debug(
                "resolution_cache_miss",
                bundle=bundle,
                config=config,
                mode=mode.value,
                reason=miss.reason.value,
            )

        path = self._registry.lookup_path(bundle, config)
        generation = self._registry.generation(path)
        handle = await self._get_resolver(path)

        call_context: Mapping[str, Any] = context or {}
        if mode is MergeMode.MERGE:
            value = handle.resolve_merged(call_context)
        else:
            value = handle.resolve_ranked(call_context)

        if self._is_current(bundle, config, path, generation):
            self._cache.put(bundle, config, mode, context, value)
        return value

    def _is_current(self, bundle: str, config: str, path: str, generation: int) -> bool:
        try:
            current = self._registry.lookup_path(bundle, config)
        except (UnknownBundleError, UnknownConfigError):
            return False
        return current == path and self._registry.generation(path) == generation

    async def walk_settings(self, bundle: str, config: str, callback: SettingsCallback) -> None:
        """Visit every (settings, section) pair of a registered config."""
        path = self._registry.lookup_path(bundle, config)
        handle = await self._get_resolver(path)
        handle.walk_settings(callback)

    async def _get_resolver(self, path: str) -> ResolverHandle:
        handle = self._registry.get_resolver(path)
        if handle is not None:
            return handle

        # concurrent first reads of a path share one build
        async with self._build_locks.hold(path):
            handle = self._registry.get_resolver(path)
            if handle is not None:
                return handle
            return await self._build_resolver(path)

    async def _build_resolver(self, path: str) -> ResolverHandle:
        generation = self._registry.generation(path)
        if self._registry.has_contents(path):
            contents = self._registry.get_contents(path)
        else:
            contents = await self._loader.load(path)

        classified = classify(contents)
        if isinstance(classified, Sectioned):
            dimensions = await self.read_dimensions()
            resolver = build_dimensional_resolver(
                dimensions, classified.data, self._resolver_factory
            )
            handle = BaseContextResolver(resolver, self._options.base_context)
        else:
            handle = FlatResolver(classified.data)

        RESOLVER_BUILDS.labels(kind=handle.kind).inc()
        logger.debug("resolver_built", path=path, kind=handle.kind)

        # contents may have been invalidated while we were loading
        if self._registry.generation(path) == generation:
            self._registry.set_contents(path, contents)
            self._registry.set_resolver(path, handle)
        return handle

    # Dimensions
    async def read_dimensions(self) -> list[Any]:
        """Read the dimensions document.

        Uses ``dimensions_path`` if configured, otherwise the ``dimensions``
        config of ``dimensions_bundle``, otherwise the ``dimensions`` config
        with the shortest path. Loaded once and shared; do not modify it.

        Raises:
            MissingDimensionsError: If no dimensions file is known
            ParseError: If the dimensions file is malformed
        """
        path = self._selector.path
        if path is None:
            raise MissingDimensionsError()
        if self._dimensions is not None:
            return self._dimensions

        async with self._dimensions_lock:
            if self._dimensions is None:
                if self._registry.has_contents(path):
                    body = self._registry.get_contents(path)
                else:
                    body = await self._loader.load(path)
                self._dimensions = _extract_dimensions(path, body)
                logger.info("dimensions_loaded", path=path, count=len(self._dimensions))
        return self._dimensions


def _extract_dimensions(path: str, body: Any) -> list[Any]:
    """Pull the dimensions list out of ``[{"dimensions": [...]}, ...]``."""
    if isinstance(body, list) and body and isinstance(body[0], Mapping):
        dimensions = body[0].get("dimensions")
        if isinstance(dimensions, list):
            return dimensions
    raise ParseError(path, "expected a list whose first entry has a 'dimensions' list")
