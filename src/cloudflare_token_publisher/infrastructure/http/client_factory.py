"""HTTPX-backed implementation of the KV client ports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from cloudflare_token_publisher.application.config import DEFAULT_TIMEOUT_SECONDS, HttpClientConfig
from cloudflare_token_publisher.application.ports.kv_store import (
    KvClientFactoryPort,
    KvClientPort,
    KvResponse,
)
from cloudflare_token_publisher.errors import RemoteWriteFailure


@dataclass
class HttpxKvClient(KvClientPort):
    """Client bound to one KV value URL; opens a fresh connection per call."""

    url: httpx.URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    transport: httpx.BaseTransport | None = None

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_seconds, transport=self.transport)

    def put(self, content: bytes, *, headers: Mapping[str, str]) -> KvResponse:
        try:
            with self._client() as client:
                response = client.put(self.url, content=content, headers=dict(headers))
        except httpx.HTTPError as exc:
            raise RemoteWriteFailure(None, f"{type(exc).__name__}: {exc}") from exc
        return KvResponse(status_code=response.status_code, body=response.text)


@dataclass(frozen=True)
class HttpxKvClientFactory(KvClientFactoryPort):
    """Builds ``HttpxKvClient`` instances.

    ``transport`` is used when no pre-configured client is supplied, which
    lets tests substitute ``httpx.MockTransport``.
    """

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    transport: httpx.BaseTransport | None = None

    def create(self, url: httpx.URL, *, http_client: HttpClientConfig | None) -> KvClientPort:
        if http_client is None:
            return HttpxKvClient(url=url, timeout_seconds=self.timeout_seconds, transport=self.transport)
        return HttpxKvClient(
            url=url,
            timeout_seconds=http_client.timeout_seconds,
            transport=http_client.transport,
        )


__all__ = ["HttpxKvClient", "HttpxKvClientFactory"]
