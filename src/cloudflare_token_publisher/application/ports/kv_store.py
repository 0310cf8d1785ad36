"""Ports describing the KV store and the HTTP clients used to reach it."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

from cloudflare_token_publisher.domain.records import DerivedRecord

if TYPE_CHECKING:
    from cloudflare_token_publisher.application.config import HttpClientConfig


@dataclass(frozen=True, slots=True)
class KvResponse:
    status_code: int
    body: str


class KvClientPort(Protocol):
    """HTTP client bound to a single KV value URL."""

    def put(self, content: bytes, *, headers: Mapping[str, str]) -> KvResponse:
        """Issue a PUT to the bound URL and return status and body."""


class KvClientFactoryPort(Protocol):
    """Creates clients bound to a host, path and query."""

    def create(self, url: httpx.URL, *, http_client: HttpClientConfig | None) -> KvClientPort:
        """Return a client for ``url``, reusing ``http_client`` settings when supplied."""


class KvWriterPort(Protocol):
    """Writes derived token records to the remote KV store."""

    def write(self, record: DerivedRecord) -> None:
        """Persist ``record``; raise ``RemoteWriteFailure`` when the store rejects it."""


__all__ = ["KvClientFactoryPort", "KvClientPort", "KvResponse", "KvWriterPort"]
