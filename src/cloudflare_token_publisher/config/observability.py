"""Observability configuration for the publisher."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Flags controlling logging/tracing behavior."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    json_logs: bool = Field(default=False, alias="TOKEN_PUBLISHER_JSON_LOGS")
    service_name: str = Field(default="cloudflare-token-publisher", alias="OTEL_SERVICE_NAME")
    traces_exporter: str = Field(default="", alias="OTEL_TRACES_EXPORTER")
    otlp_endpoint: str | None = Field(default=None, alias="OTEL_EXPORTER_OTLP_ENDPOINT")


__all__ = ["ObservabilitySettings"]
