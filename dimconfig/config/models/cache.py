"""Resolution cache configuration models."""

from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    """Resolution cache configuration."""

    enabled: bool = Field(
        default=True,
        description="Memoize resolved output; disabled means every read resolves",
    )
    max_entries: int = Field(
        default=250,
        gt=0,
        description="Maximum contexts kept per (bundle, config, mode) before LRU eviction",
    )
