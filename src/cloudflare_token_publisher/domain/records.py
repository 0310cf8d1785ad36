"""Per-event records built while publishing a token."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx


class PublishOutcome(str, Enum):
    """Terminal states of a single publish attempt."""

    ACKNOWLEDGED = "acknowledged"
    FAILED_LOGGED = "failed_logged"
    DROPPED = "dropped"


@dataclass(frozen=True, slots=True)
class DerivedRecord:
    """Lookup key and value to be written for one issued token."""

    lookup_key: str
    stored_value: str
    expiration_seconds: int


@dataclass(frozen=True, slots=True)
class KvTarget:
    account_id: str
    namespace_id: str
    lookup_key: str
    expiration: int

    @property
    def path(self) -> str:
        return (
            f"accounts/{self.account_id}/storage/kv/namespaces/"
            f"{self.namespace_id}/values/{self.lookup_key}"
        )

    def url(self, api_base_url: str) -> httpx.URL:
        base = api_base_url.rstrip("/") + "/"
        return httpx.URL(f"{base}{self.path}", params={"expiration": self.expiration})


__all__ = ["DerivedRecord", "KvTarget", "PublishOutcome"]
