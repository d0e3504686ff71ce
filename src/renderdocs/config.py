"""Configuration management for the RenderDocs SDK."""

import logging
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.renderdocs.com"


class Settings(BaseSettings):
    """RenderDocs configuration loaded from environment variables.

    All settings can be overridden via environment variables with
    the RENDERDOCS_ prefix. For example:
        RENDERDOCS_API_KEY=rd_live_...
        RENDERDOCS_POLL_INTERVAL_MS=500

    Arguments passed explicitly to the client take precedence over
    anything loaded here.
    """

    # API access
    api_key: str | None = Field(
        default=None,
        description="API key sent as a bearer token",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the RenderDocs API",
    )
    timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="HTTP request timeout in milliseconds",
    )

    # Job polling
    poll_interval_ms: int = Field(
        default=1000,
        gt=0,
        description="Delay between job status polls in milliseconds",
    )
    poll_timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="Maximum time to wait for a job to finish in milliseconds",
    )

    # Webhooks
    webhook_tolerance_seconds: int = Field(
        default=300,
        ge=0,
        description="Accepted clock difference for signed webhook timestamps",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    model_config = {
        "env_prefix": "RENDERDOCS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def normalize_base_url(self) -> "Settings":
        """Strip trailing slashes so request paths join cleanly."""
        stripped = self.base_url.rstrip("/")
        if stripped != self.base_url:
            object.__setattr__(self, "base_url", stripped)
            logger.debug("Normalized base_url to %s", stripped)
        return self

    @property
    def timeout_seconds(self) -> float:
        """HTTP timeout converted for httpx."""
        return self.timeout_ms / 1000
