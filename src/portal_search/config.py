"""Centralized configuration for portal-search using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable is read with the ``PORTAL_SEARCH_`` prefix. The engine never
    reads these values itself; callers pass a Settings instance into the
    search service explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Pagination
    default_page_size: int = Field(default=20, ge=1, description="Page size used when a request does not set one")
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Upper bound for page sizes so a caller cannot fetch the whole dataset as one page",
    )

    # Matching
    case_sensitive: bool = Field(
        default=False,
        description="Match terms against field values case-sensitively (default mirrors SQL LIKE lookups)",
    )
    default_term_mode: Literal["all", "any"] = Field(
        default="all",
        description="Term combination used when neither the request nor the entity chooses one",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Observability
    metrics_enabled: bool = Field(default=True, description="Record Prometheus/OpenTelemetry search metrics")
    tracing_enabled: bool = Field(default=True, description="Wrap each search in an OpenTelemetry span")
    service_name: str = Field(default="portal-search", description="Service name reported to telemetry")

    @model_validator(mode="after")
    def _check_page_bounds(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                "PORTAL_SEARCH_DEFAULT_PAGE_SIZE must not exceed PORTAL_SEARCH_MAX_PAGE_SIZE "
                f"({self.default_page_size} > {self.max_page_size})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
