"""Context helpers: base-context merging and cache-key fingerprints."""

from collections.abc import Mapping
from typing import Any

Context = Mapping[str, Any]

_EMPTY: Mapping[str, Any] = {}


def merge_base_context(
    base: Context | None,
    override: Context | None,
) -> Context:
    """Merge the base context under a per-call context.

    Keys present in ``override`` win over ``base`` keys of the same name.
    Neither input is mutated. When there is no base context the override is
    returned as is, so callers must treat the result as read-only.

    Args:
        base: Engine-wide default context
        override: Context supplied with the read call

    Returns:
        Expanded context
    """
    if not base:
        return override if override is not None else _EMPTY

    merged = dict(base)
    if override:
        merged.update(override)
    return merged


def stringify_value(value: Any) -> str:
    """Coerce a context value to the string form used for matching."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def fingerprint(context: Context | None) -> str:
    """Build a canonical string for a context, independent of key order.

    Values are compared by their string form, so ``1`` and ``"1"`` produce
    the same fingerprint.
    """
    if not context:
        return "{}"

    tokens = [f'"{key}":"{stringify_value(value)}"' for key, value in context.items()]
    tokens.sort()
    return "{" + ",".join(tokens) + "}"
