"""Shared test fixtures for the dimconfig test suite."""

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from dimconfig.resolvers import PriorityMergeResolver

DIMENSIONS = [
    {
        "dimensions": [
            {"environment": {"dev": {"dev-a": None}, "prod": None}},
            {"lang": {"en": {"en_US": None, "en_GB": None}, "fr": None}},
        ]
    }
]

SITE_SECTIONS = [
    {"settings": ["master"], "title": "Site", "db": {"host": "localhost", "port": 5432}},
    {"settings": ["environment:prod"], "db": {"host": "db.prod"}},
    {"settings": ["environment:dev"], "db": {"host": "db.dev"}},
    {"settings": ["lang:en"], "title": "Site (en)"},
    {"settings": ["lang:fr"], "title": "Site (fr)"},
    {"settings": ["environment:prod", "lang:en_US"], "banner": "prod-us"},
]


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, Any], str]:
    """Factory fixture writing data to a file under tmp_path.

    Strings are written verbatim; other data is serialised according to
    the extension (.json, .yaml/.yml).

    Usage:
        def test_something(write_config):
            path = write_config("app/site.json", [{"settings": ["master"]}])
    """

    def _write(relative: str, data: Any) -> str:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data)
        elif path.suffix == ".json":
            path.write_text(json.dumps(data))
        elif path.suffix in {".yaml", ".yml"}:
            path.write_text(yaml.safe_dump(data))
        else:
            raise ValueError(f"cannot serialise data for {relative}")
        return str(path)

    return _write


@pytest.fixture
def dimensions_file(write_config: Callable[[str, Any], str]) -> str:
    return write_config("app/dimensions.json", DIMENSIONS)


@pytest.fixture
def site_file(write_config: Callable[[str, Any], str]) -> str:
    return write_config("app/site.json", SITE_SECTIONS)


class CountingResolverFactory:
    """Resolver factory that counts constructions and resolutions."""

    def __init__(self) -> None:
        self.builds = 0
        self.reads = 0
        self.contexts: list[dict[str, Any]] = []

    def __call__(self, bundle: list[Any]) -> "CountingResolver":
        self.builds += 1
        return CountingResolver(self, bundle)


class CountingResolver(PriorityMergeResolver):
    def __init__(self, factory: CountingResolverFactory, bundle: list[Any]) -> None:
        super().__init__(bundle)
        self._factory = factory

    def read(self, context, options=None):
        self._factory.reads += 1
        self._factory.contexts.append(dict(context))
        return super().read(context, options)

    def read_no_merge(self, context, options=None):
        self._factory.reads += 1
        self._factory.contexts.append(dict(context))
        return super().read_no_merge(context, options)


@pytest.fixture
def counting_factory() -> CountingResolverFactory:
    return CountingResolverFactory()


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"DIMCONFIG_ENV": "test"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from dimconfig.config import get_settings
    from dimconfig.config.settings import set_toml_config

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    set_toml_config({})
