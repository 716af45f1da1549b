"""Resolver handles for sectioned and flat documents."""

from copy import deepcopy
from typing import Any

from dimconfig.context import Context, merge_base_context
from dimconfig.resolvers.base import (
    DimensionalResolver,
    ResolverFactory,
    ResolverHandle,
    SettingsCallback,
)


class BaseContextResolver(ResolverHandle):
    """Wrap a DimensionalResolver, merging the base context under every call.

    The wrapped resolver is never modified; the merge happens on each call,
    so passing an already expanded context is harmless since its keys win.
    """

    kind = "dimensional"

    def __init__(self, resolver: DimensionalResolver, base_context: Context | None = None) -> None:
        self._resolver = resolver
        self._base_context = dict(base_context or {})

    @property
    def resolver(self) -> DimensionalResolver:
        return self._resolver

    def resolve_merged(self, context: Context) -> Any:
        return self._resolver.read(merge_base_context(self._base_context, context), {})

    def resolve_ranked(self, context: Context) -> list[Any]:
        return self._resolver.read_no_merge(merge_base_context(self._base_context, context), {})

    def get_dimensions(self) -> list[Any]:
        return self._resolver.get_dimensions()

    def walk_settings(self, callback: SettingsCallback) -> None:
        self._resolver.walk_settings(callback)


class FlatResolver(ResolverHandle):
    """Passthrough handle for documents that are not sectioned.

    Context is accepted and ignored; the loaded document is returned as is.
    """

    kind = "flat"

    def __init__(self, contents: Any, dimensions: list[Any] | None = None) -> None:
        self._contents = contents
        self._dimensions = dimensions

    def resolve_merged(self, context: Context) -> Any:  # noqa: ARG002
        return self._contents

    def resolve_ranked(self, context: Context) -> list[Any]:  # noqa: ARG002
        return [self._contents]

    def get_dimensions(self) -> list[Any] | None:
        return self._dimensions

    def walk_settings(self, callback: SettingsCallback) -> None:
        callback({}, self._contents)


def build_dimensional_resolver(
    dimensions: list[Any],
    sections: list[Any],
    factory: ResolverFactory,
) -> DimensionalResolver:
    """Construct a resolver from the dimensions and a copy of the sections.

    The sections are deep-copied since resolvers may mutate their input.
    """
    bundle: list[Any] = [{"dimensions": dimensions}]
    bundle.extend(deepcopy(sections))
    return factory(bundle)
