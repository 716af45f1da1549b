"""Default dimensional resolver: longest-match-wins priority merge.

The bundle handed to the constructor is a list whose first entry is
``{"dimensions": [...]}`` followed by sections such as::

    {"settings": ["master"], "title": "Site"}
    {"settings": ["environment:prod", "lang:en,fr"], "title": "Prod site"}

Each dimension is a single-key mapping ``{name: tree}`` where the tree maps
a value to its children (or to None). A context value matches itself, then
its ancestors, then the implicit root ``"*"``. Dimensions declared later
weigh more when ranking sections.
"""

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from dimconfig.context import Context, stringify_value
from dimconfig.observability.logging import get_logger
from dimconfig.resolvers.base import SettingsCallback

logger = get_logger(__name__)

WILDCARD = "*"
MASTER = "master"


@dataclass(frozen=True)
class _Section:
    index: int
    settings: dict[str, tuple[str, ...]]
    body: dict[str, Any]


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            result[key] = _deep_merge(current, value)
        else:
            result[key] = deepcopy(value)
    return result


def _collect_chains(
    tree: Any,
    ancestors: list[str],
    chains: dict[str, list[str]],
) -> None:
    if not isinstance(tree, Mapping):
        return
    for value, subtree in tree.items():
        key = stringify_value(value)
        chain = [key, *ancestors]
        chains[key] = chain
        _collect_chains(subtree, chain, chains)


class PriorityMergeResolver:
    """Resolve sectioned config against a context."""

    def __init__(self, bundle: list[Any]) -> None:
        self._dimensions: list[Any] = []
        self._order: list[str] = []
        self._chains: dict[str, dict[str, list[str]]] = {}
        self._sections: list[_Section] = []

        dimensions_seen = False
        raw_sections: list[Mapping[str, Any]] = []
        for entry in bundle:
            if not isinstance(entry, Mapping):
                continue
            if "settings" in entry:
                raw_sections.append(entry)
            elif "dimensions" in entry and not dimensions_seen:
                self._load_dimensions(entry["dimensions"])
                dimensions_seen = True

        for index, entry in enumerate(raw_sections):
            section = self._parse_section(index, entry)
            if section is not None:
                self._sections.append(section)

    def _load_dimensions(self, dimensions: Any) -> None:
        self._dimensions = dimensions if isinstance(dimensions, list) else []
        for dimension in self._dimensions:
            if not isinstance(dimension, Mapping):
                continue
            for name, tree in dimension.items():
                chains: dict[str, list[str]] = {WILDCARD: [WILDCARD]}
                _collect_chains(tree, [WILDCARD], chains)
                self._order.append(str(name))
                self._chains[str(name)] = chains

    def _parse_section(self, index: int, entry: Mapping[str, Any]) -> _Section | None:
        settings: dict[str, tuple[str, ...]] = {}
        for item in entry["settings"]:
            item = str(item)
            if item == MASTER:
                continue
            name, sep, values = item.partition(":")
            if not sep or name not in self._chains:
                logger.warning("section_ignored", index=index, setting=item)
                return None
            settings[name] = tuple(v.strip() for v in values.split(",") if v.strip())

        body = {key: value for key, value in entry.items() if key != "settings"}
        return _Section(index=index, settings=settings, body=body)

    def _context_chains(self, context: Context) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for name in self._order:
            if name in context:
                value = stringify_value(context[name])
                result[name] = self._chains[name].get(value, [WILDCARD])
            else:
                result[name] = [WILDCARD]
        return result

    def _rank(self, context: Context | None) -> list[_Section]:
        chains = self._context_chains(context or {})
        scored: list[tuple[tuple[int, ...], int, _Section]] = []

        for section in self._sections:
            depths: list[int] = []
            for name in reversed(self._order):
                chain = chains[name]
                positions = [
                    chain.index(value)
                    for value in section.settings.get(name, (WILDCARD,))
                    if value in chain
                ]
                if not positions:
                    break
                depths.append(min(positions))
            else:
                scored.append((tuple(depths), -section.index, section))

        scored.sort(key=lambda item: (item[0], item[1]))
        return [section for _, _, section in scored]

    def read(self, context: Context | None, options: Mapping[str, Any] | None = None) -> Any:  # noqa: ARG002
        """Merge every applying section, least specific first."""
        result: dict[str, Any] = {}
        for section in reversed(self._rank(context)):
            result = _deep_merge(result, section.body)
        return result

    def read_no_merge(
        self, context: Context | None, options: Mapping[str, Any] | None = None  # noqa: ARG002
    ) -> list[Any]:
        """Return a copy of every applying section, most specific first."""
        return [deepcopy(section.body) for section in self._rank(context)]

    def get_dimensions(self) -> list[Any]:
        return self._dimensions

    def walk_settings(self, callback: SettingsCallback) -> None:
        """Visit sections in file order; a callback returning False stops the walk."""
        for section in self._sections:
            settings = {name: ",".join(values) for name, values in section.settings.items()}
            if callback(settings, deepcopy(section.body)) is False:
                break
