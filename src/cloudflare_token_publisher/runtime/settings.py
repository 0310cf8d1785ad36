"""Configuration helpers for publisher runtime wiring."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudflare_token_publisher.config.cloudflare import CloudflareKvSettings
from cloudflare_token_publisher.config.observability import ObservabilitySettings

logger = logging.getLogger("cloudflare_token_publisher.settings")


class Settings(BaseSettings):
    """Publisher runtime configuration resolved from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    cloudflare: CloudflareKvSettings = Field(default_factory=CloudflareKvSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @property
    def api_token_value(self) -> str:
        return self.cloudflare.api_token_value

    @classmethod
    def load(cls) -> Settings:
        instance = cls()
        logger.info("publisher settings loaded: %r", instance)
        return instance


__all__ = ["CloudflareKvSettings", "ObservabilitySettings", "Settings"]
