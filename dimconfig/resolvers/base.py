"""Resolver interfaces.

A DimensionalResolver is the priority-merge engine that understands
sectioned documents. A ResolverHandle is what the engine keeps per config
path: it wraps either a DimensionalResolver or a flat document behind the
same contract.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from dimconfig.context import Context

SettingsCallback = Callable[[dict[str, Any], Any], bool | None]


class DimensionalResolver(Protocol):
    """Resolver constructed from ``[{"dimensions": D}, *sections]``."""

    def read(self, context: Context, options: Mapping[str, Any] | None = None) -> Any:
        """Merge all sections applying to context."""
        ...

    def read_no_merge(
        self, context: Context, options: Mapping[str, Any] | None = None
    ) -> list[Any]:
        """Return applying sections, most specific first."""
        ...

    def get_dimensions(self) -> list[Any]:
        """Return the dimensions document."""
        ...

    def walk_settings(self, callback: SettingsCallback) -> None:
        """Call callback(settings, section) for every section."""
        ...


ResolverFactory = Callable[[list[Any]], DimensionalResolver]


class ResolverHandle(ABC):
    """Uniform resolution contract for one config path."""

    kind: str

    @abstractmethod
    def resolve_merged(self, context: Context) -> Any:
        """Resolve a single merged value for context."""
        pass

    @abstractmethod
    def resolve_ranked(self, context: Context) -> list[Any]:
        """Resolve the applying values, most specific first."""
        pass

    @abstractmethod
    def get_dimensions(self) -> list[Any] | None:
        """Return the dimensions the handle resolves against."""
        pass

    @abstractmethod
    def walk_settings(self, callback: SettingsCallback) -> None:
        """Visit every (settings, section) pair of the document."""
        pass
