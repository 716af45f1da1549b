"""Shape-based classification of loaded config contents.

A document is "sectioned" when it is a non-empty list of sections, each
carrying a ``settings`` list that names the context it applies to. Anything
else is a flat, context-insensitive document.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class Sectioned:
    """Contents resolved by priority merge against a context."""

    data: list[Any]
    kind: Literal["sectioned"] = "sectioned"


@dataclass(frozen=True)
class Flat:
    """Contents returned verbatim regardless of context."""

    data: Any
    kind: Literal["flat"] = "flat"


def is_sectioned(contents: Any) -> bool:
    """Check whether contents have the dimension-sectioned shape."""
    if not isinstance(contents, (list, tuple)) or not contents:
        return False

    for section in contents:
        if not isinstance(section, Mapping):
            return False
        if not isinstance(section.get("settings"), (list, tuple)):
            return False
    return True


def classify(contents: Any) -> Sectioned | Flat:
    """Tag contents as Sectioned or Flat."""
    if is_sectioned(contents):
        return Sectioned(data=list(contents))
    return Flat(data=contents)
