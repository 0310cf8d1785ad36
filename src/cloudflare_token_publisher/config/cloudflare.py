"""Cloudflare Workers KV connection settings."""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudflare_token_publisher.application.config import CLOUDFLARE_API_URL, DEFAULT_TIMEOUT_SECONDS
from cloudflare_token_publisher.domain.key_derivation import DEFAULT_DIGEST_ALGORITHM, KeyEncoding


class CloudflareKvSettings(BaseSettings):
    """Account, namespace and credentials for the revocation KV namespace."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    account_id: str = Field(default="", alias="CLOUDFLARE_ACCOUNT_ID")
    kv_namespace: str = Field(default="", alias="CLOUDFLARE_KV_NAMESPACE")
    api_token: SecretStr = Field(default_factory=lambda: SecretStr(""), alias="CLOUDFLARE_API_TOKEN")
    api_base_url: str = Field(default=CLOUDFLARE_API_URL, alias="CLOUDFLARE_API_BASE_URL")
    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        alias="CLOUDFLARE_HTTP_TIMEOUT_SECONDS",
        gt=0,
    )
    key_encoding: KeyEncoding = Field(default=KeyEncoding.HEX, alias="CLOUDFLARE_KV_KEY_ENCODING")
    digest_algorithm: str = Field(
        default=DEFAULT_DIGEST_ALGORITHM, alias="CLOUDFLARE_KV_DIGEST_ALGORITHM"
    )

    @field_validator("account_id", "kv_namespace", "api_base_url", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def api_token_value(self) -> str:
        return self.api_token.get_secret_value()


__all__ = ["CloudflareKvSettings"]
