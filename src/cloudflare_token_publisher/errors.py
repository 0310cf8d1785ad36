"""Exceptions raised while publishing issued tokens to the KV store."""

from __future__ import annotations


class TokenPublisherError(Exception):
    """Base class for token publisher failures."""


class MalformedTokenError(TokenPublisherError, ValueError):
    """Raised when an access token is not a three-part compact token."""

    def __init__(self, segment_count: int) -> None:
        super().__init__(
            f"expected the token to have 3 non-empty parts but found {segment_count} part(s)"
        )
        self.segment_count = segment_count


class DigestUnavailableError(TokenPublisherError, RuntimeError):
    """Raised when the runtime cannot provide the configured digest algorithm."""


class ConfigurationError(TokenPublisherError, ValueError):
    """Raised when publisher configuration cannot be used safely."""


class RemoteWriteFailure(TokenPublisherError, RuntimeError):
    """Raised when the KV store rejects a write or cannot be reached."""

    def __init__(self, status_code: int | None, body: str) -> None:
        status = status_code if status_code is not None else "transport error"
        super().__init__(f"kv write failed ({status}): {body}")
        self.status_code = status_code
        self.body = body


__all__ = [
    "ConfigurationError",
    "DigestUnavailableError",
    "MalformedTokenError",
    "RemoteWriteFailure",
    "TokenPublisherError",
]
