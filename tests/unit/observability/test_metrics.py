"""Tests for Prometheus metrics."""

import pytest
from prometheus_client import REGISTRY

from dimconfig.cache import MergeMode, ResolutionCache
from dimconfig.errors import ParseError, UnknownCacheDataError
from dimconfig.loaders import FileContentLoader


def sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestCacheLookups:
    """Tests for dimconfig_cache_lookups_total."""

    def test_hit_and_miss_counted(self) -> None:
        hits = sample("dimconfig_cache_lookups_total", mode="merge", outcome="hit")
        misses = sample("dimconfig_cache_lookups_total", mode="no-merge", outcome="unknown_bundle")

        cache = ResolutionCache()
        cache.put("metrics", "site", MergeMode.MERGE, {}, "v")
        cache.get("metrics", "site", MergeMode.MERGE, {})
        with pytest.raises(UnknownCacheDataError):
            cache.get("missing", "site", MergeMode.NO_MERGE, {})

        assert sample("dimconfig_cache_lookups_total", mode="merge", outcome="hit") == hits + 1
        assert (
            sample("dimconfig_cache_lookups_total", mode="no-merge", outcome="unknown_bundle")
            == misses + 1
        )


class TestConfigLoads:
    """Tests for dimconfig_config_loads_total."""

    @pytest.mark.asyncio
    async def test_success_and_error_counted(self, tmp_path) -> None:
        ok = sample("dimconfig_config_loads_total", format="json", outcome="success")
        failed = sample("dimconfig_config_loads_total", format="json", outcome="error")

        good = tmp_path / "good.json"
        good.write_text("{}")
        await FileContentLoader().load(str(good))
        with pytest.raises(ParseError):
            await FileContentLoader().load(str(tmp_path / "missing.json"))

        assert sample("dimconfig_config_loads_total", format="json", outcome="success") == ok + 1
        assert sample("dimconfig_config_loads_total", format="json", outcome="error") == failed + 1
