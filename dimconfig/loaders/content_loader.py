"""Content loaders: turn a config file path into parsed contents."""

import asyncio
import hashlib
import importlib.util
import json
import time
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import json5
import yaml

from dimconfig.errors import ParseError
from dimconfig.observability.logging import get_logger
from dimconfig.observability.metrics import CONFIG_LOAD_LATENCY, CONFIG_LOADS

logger = get_logger(__name__)

TEXT_FORMATS = {
    ".json": "json",
    ".json5": "json5",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}

MODULE_CONFIG_ATTRIBUTE = "config"


class ContentLoader(ABC):
    """Abstract interface for reading config files."""

    @abstractmethod
    async def load(self, path: str) -> Any:
        """Load and parse the file at path.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        pass


class FileContentLoader(ContentLoader):
    """Load config files from the local filesystem.

    The format is chosen by extension. Files with an unrecognised
    extension are executed as Python modules and their top-level
    ``config`` attribute is returned. Blocking I/O runs in a worker
    thread so the event loop is never blocked.
    """

    async def load(self, path: str) -> Any:
        fmt = TEXT_FORMATS.get(Path(path).suffix.lower(), "python")
        start = time.perf_counter()
        try:
            contents = await asyncio.to_thread(self._load_sync, path, fmt)
        except ParseError as exc:
            CONFIG_LOADS.labels(format=fmt, outcome="error").inc()
            logger.warning("config_load_failed", path=path, format=fmt, error=exc.detail)
            raise
        CONFIG_LOAD_LATENCY.labels(format=fmt).observe(time.perf_counter() - start)
        CONFIG_LOADS.labels(format=fmt, outcome="success").inc()
        logger.debug("config_loaded", path=path, format=fmt)
        return contents

    def _load_sync(self, path: str, fmt: str) -> Any:
        if fmt == "python":
            return self._load_module(path)

        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(path, str(exc)) from exc

        try:
            return parse_text(text, fmt)
        except (ValueError, yaml.YAMLError) as exc:
            raise ParseError(path, str(exc)) from exc

    def _load_module(self, path: str) -> Any:
        module_name = "dimconfig_module_" + hashlib.sha1(path.encode("utf-8")).hexdigest()
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ParseError(path, "not a loadable Python module")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise ParseError(path, f"{type(exc).__name__}: {exc}") from exc

        if not hasattr(module, MODULE_CONFIG_ATTRIBUTE):
            raise ParseError(path, f"module defines no '{MODULE_CONFIG_ATTRIBUTE}' attribute")
        return getattr(module, MODULE_CONFIG_ATTRIBUTE)


def parse_text(text: str, fmt: str) -> Any:
    """Parse text in one of the supported text formats."""
    if fmt == "json":
        return json.loads(text)
    if fmt == "json5":
        return json5.loads(text)
    if fmt == "yaml":
        return yaml.safe_load(text)
    if fmt == "toml":
        return tomllib.loads(text)
    raise ValueError(f"Unsupported format: {fmt}")
