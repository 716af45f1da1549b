"""Resolvers turning registered documents into context-specific values."""

from dimconfig.resolvers.adapters import (
    BaseContextResolver,
    FlatResolver,
    build_dimensional_resolver,
)
from dimconfig.resolvers.base import (
    DimensionalResolver,
    ResolverFactory,
    ResolverHandle,
    SettingsCallback,
)
from dimconfig.resolvers.priority_merge import PriorityMergeResolver

__all__ = [
    "BaseContextResolver",
    "DimensionalResolver",
    "FlatResolver",
    "PriorityMergeResolver",
    "ResolverFactory",
    "ResolverHandle",
    "SettingsCallback",
    "build_dimensional_resolver",
]
