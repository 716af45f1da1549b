"""Engine construction options."""

from typing import Any

from pydantic import BaseModel, Field

from dimconfig.config.models.cache import CacheConfig


class EngineOptions(BaseModel):
    """Options accepted by ConfigEngine at construction."""

    base_context: dict[str, Any] = Field(
        default_factory=dict,
        description="Context merged under every read; per-call keys win",
    )
    dimensions_bundle: str | None = Field(
        default=None,
        description="Only a 'dimensions' config from this bundle is authoritative",
    )
    dimensions_path: str | None = Field(
        default=None,
        description="Full path to the dimensions file; disables automatic selection",
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig,
        description="Resolution cache options",
    )
