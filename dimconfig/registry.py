"""Registry of config paths with per-path derived state."""

from typing import Any

from dimconfig.errors import UnknownBundleError, UnknownConfigError
from dimconfig.resolvers.base import ResolverHandle


class ConfigRegistry:
    """Map bundle -> config -> path, plus per-path loaded contents and handles.

    Every path also carries a generation counter that is bumped whenever
    its derived state is invalidated, so a handle built from stale contents
    can be detected and discarded. Counters are never dropped, so that
    table is bounded by the number of distinct paths ever invalidated.
    """

    def __init__(self) -> None:
        self._paths: dict[str, dict[str, str]] = {}
        self._contents: dict[str, Any] = {}
        self._resolvers: dict[str, ResolverHandle] = {}
        self._generations: dict[str, int] = {}

    # Path operations
    def set_path(self, bundle: str, config: str, path: str) -> str | None:
        """Commit path for (bundle, config), returning the previous path."""
        configs = self._paths.setdefault(bundle, {})
        previous = configs.get(config)
        configs[config] = path
        return previous

    def remove_path(self, bundle: str, config: str) -> str | None:
        """Forget (bundle, config); no-op for unknown entries.

        The bundle itself stays known, so later lookups of the removed
        config report an unknown config rather than an unknown bundle.
        """
        configs = self._paths.get(bundle)
        if configs is None:
            return None
        return configs.pop(config, None)

    def lookup_path(self, bundle: str, config: str) -> str:
        """Get the current path.

        Raises:
            UnknownBundleError: If nothing was ever registered under bundle
            UnknownConfigError: If bundle is known but config is not
        """
        configs = self._paths.get(bundle)
        if configs is None:
            raise UnknownBundleError(bundle)
        path = configs.get(config)
        if path is None:
            raise UnknownConfigError(bundle, config)
        return path

    def entries_for_path(self, path: str) -> list[tuple[str, str]]:
        """All (bundle, config) pairs currently registered with path."""
        return [
            (bundle, config)
            for bundle, configs in self._paths.items()
            for config, registered in configs.items()
            if registered == path
        ]

    def bundles(self) -> list[str]:
        return sorted(self._paths)

    def configs(self, bundle: str) -> list[str]:
        if bundle not in self._paths:
            raise UnknownBundleError(bundle)
        return sorted(self._paths[bundle])

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        bundle, config = key
        return config in self._paths.get(bundle, {})

    def __len__(self) -> int:
        return sum(len(configs) for configs in self._paths.values())

    # Per-path derived state
    def get_contents(self, path: str) -> Any:
        """Get loaded contents, raising KeyError if not loaded."""
        return self._contents[path]

    def has_contents(self, path: str) -> bool:
        return path in self._contents

    def set_contents(self, path: str, contents: Any) -> None:
        self._contents[path] = contents

    def get_resolver(self, path: str) -> ResolverHandle | None:
        return self._resolvers.get(path)

    def set_resolver(self, path: str, resolver: ResolverHandle) -> None:
        self._resolvers[path] = resolver

    def generation(self, path: str) -> int:
        return self._generations.get(path, 0)

    def invalidate_path(self, path: str) -> None:
        """Drop contents and handle derived from path."""
        self._contents.pop(path, None)
        self._resolvers.pop(path, None)
        self._generations[path] = self.generation(path) + 1
