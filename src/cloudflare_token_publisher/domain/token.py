"""Issued-token events and compact token parsing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from cloudflare_token_publisher.errors import MalformedTokenError

_SEGMENT_COUNT = 3


@dataclass(frozen=True, slots=True)
class IssuedTokenEvent:
    """An access token emitted by the issuer together with its expiry."""

    access_token_value: str
    expires_at: int

    @classmethod
    def from_datetime(cls, access_token_value: str, expires: datetime) -> IssuedTokenEvent:
        if expires.tzinfo is None:
            raise ValueError("expires must be timezone-aware")
        return cls(access_token_value=access_token_value, expires_at=int(expires.timestamp()))

    def __repr__(self) -> str:
        # Token values are bearer credentials.
        return f"IssuedTokenEvent(access_token_value=<redacted>, expires_at={self.expires_at})"


@dataclass(frozen=True, slots=True)
class TokenParts:
    header: str
    payload: str
    signature: str

    @property
    def signed_payload(self) -> str:
        return f"{self.header}.{self.payload}"


def split_token(access_token_value: str) -> TokenParts:
    """Split a compact ``header.payload.signature`` token.

    Raises ``MalformedTokenError`` unless the value has exactly three
    non-empty segments that encode as UTF-8.
    """

    parts = access_token_value.split(".")
    if len(parts) != _SEGMENT_COUNT or not all(parts):
        raise MalformedTokenError(len(parts))
    try:
        for part in parts:
            part.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedTokenError(len(parts)) from exc
    header, payload, signature = parts
    return TokenParts(header=header, payload=payload, signature=signature)


__all__ = ["IssuedTokenEvent", "TokenParts", "split_token"]
