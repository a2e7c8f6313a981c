"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP) and services read the same settings consistently.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.style import AggregationStyle


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without polluting the Core.
    - A single configuration contract for CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SWAPI_AGG_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://swapi.dev/api",
        min_length=8,
        description="Base URL of the SWAPI-compatible REST API.",
    )
    person_id: int = Field(
        default=1,
        ge=1,
        description="Id of the person used as root entity.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="swapi-aggregate/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    default_style: AggregationStyle = Field(
        default=AggregationStyle.SEQUENTIAL,
        description="Aggregation style used when the CLI gets no --style.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level installed by the CLI.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def root_url(self) -> str:
        """URL of the root entity (`{base_url}/people/{person_id}`)."""

        return f"{self.base_url}/people/{self.person_id}"
