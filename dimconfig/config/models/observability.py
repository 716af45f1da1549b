"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging output configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="json for production, console for development",
    )
