"""Prometheus metrics for config loading, resolution and caching."""

from prometheus_client import Counter, Gauge, Histogram

CACHE_LOOKUPS = Counter(
    "dimconfig_cache_lookups_total",
    "Resolution cache lookups",
    labelnames=["mode", "outcome"],
)

CONFIG_LOADS = Counter(
    "dimconfig_config_loads_total",
    "Config file loads by format and outcome",
    labelnames=["format", "outcome"],
)

CONFIG_LOAD_LATENCY = Histogram(
    "dimconfig_config_load_latency_seconds",
    "Time spent reading and parsing a config file",
    labelnames=["format"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

RESOLVER_BUILDS = Counter(
    "dimconfig_resolver_builds_total",
    "Resolver handles built, by kind",
    labelnames=["kind"],
)

REGISTERED_CONFIGS = Gauge(
    "dimconfig_registered_configs",
    "Number of (bundle, config) entries currently registered",
)
