"""Configuration value objects injected into the token publisher."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from cloudflare_token_publisher.application.ports.kv_store import KvClientFactoryPort
from cloudflare_token_publisher.domain.key_derivation import DEFAULT_DIGEST_ALGORITHM, KeyEncoding
from cloudflare_token_publisher.errors import ConfigurationError

CLOUDFLARE_API_URL = "https://api.cloudflare.com/client/v4/"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class HttpClientConfig:
    """A pre-configured HTTP client supplied by the host.

    ``scheme`` is the protocol the client was set up for and must match the
    scheme of the KV endpoint.
    """

    scheme: str = "https"
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")


@dataclass(frozen=True, slots=True)
class PublisherConfig:
    """Read-only settings shared by every event a listener handles."""

    account_id: str
    kv_namespace: str
    api_token: str = field(repr=False)
    client_factory: KvClientFactoryPort
    api_base_url: str = CLOUDFLARE_API_URL
    http_client: HttpClientConfig | None = None
    key_encoding: KeyEncoding = KeyEncoding.HEX
    digest_algorithm: str = DEFAULT_DIGEST_ALGORITHM

    def __post_init__(self) -> None:
        if not self.account_id:
            raise ConfigurationError("account_id must not be empty")
        if not self.kv_namespace:
            raise ConfigurationError("kv_namespace must not be empty")
        if not self.api_token:
            raise ConfigurationError("api_token must not be empty")
        if not self.api_base_url:
            raise ConfigurationError("api_base_url must not be empty")


__all__ = ["CLOUDFLARE_API_URL", "DEFAULT_TIMEOUT_SECONDS", "HttpClientConfig", "PublisherConfig"]
