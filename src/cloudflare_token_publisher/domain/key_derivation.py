"""Lookup-key derivation from token signatures."""

from __future__ import annotations

import base64
import hashlib
import logging
from enum import Enum

from cloudflare_token_publisher.domain.token import split_token
from cloudflare_token_publisher.errors import ConfigurationError, DigestUnavailableError

logger = logging.getLogger("cloudflare_token_publisher.key_derivation")

DEFAULT_DIGEST_ALGORITHM = "sha256"

_WEAK_ALGORITHMS = frozenset({"md4", "md5", "md5-sha1", "ripemd160", "sha1"})


class KeyEncoding(str, Enum):
    """Textual encodings for digest bytes that are safe in a URL path segment."""

    HEX = "hex"
    BASE64URL = "base64url"


class KeyDeriver:
    """Hashes a signature into a stable, URL-safe KV key.

    The key is a one-way digest of the signature so that the stored token can
    only be looked up by someone who already holds the full token.
    """

    def __init__(
        self,
        *,
        algorithm: str = DEFAULT_DIGEST_ALGORITHM,
        encoding: KeyEncoding = KeyEncoding.HEX,
    ) -> None:
        normalized = algorithm.strip().lower()
        if not normalized:
            raise ConfigurationError("digest algorithm must not be empty")
        if normalized in _WEAK_ALGORITHMS:
            raise ConfigurationError(
                f"digest algorithm {algorithm!r} is not collision resistant; use sha256 or stronger"
            )
        if normalized.startswith("shake_"):
            raise ConfigurationError(f"digest algorithm {algorithm!r} has no fixed output length")
        self._algorithm = normalized
        self._encoding = KeyEncoding(encoding)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def encoding(self) -> KeyEncoding:
        return self._encoding

    def derive(self, signature: str) -> str:
        try:
            digest = hashlib.new(self._algorithm, signature.encode("utf-8"))
        except ValueError as exc:
            logger.warning(
                "digest algorithm unavailable",
                extra={"data": {"algorithm": self._algorithm}},
            )
            raise DigestUnavailableError(
                f"{self._algorithm} must be available in order to publish tokens to the kv store"
            ) from exc
        if self._encoding is KeyEncoding.BASE64URL:
            return base64.urlsafe_b64encode(digest.digest()).rstrip(b"=").decode("ascii")
        return digest.hexdigest()


def derive_lookup_key(access_token_value: str, *, deriver: KeyDeriver | None = None) -> str:
    """Return the KV key under which ``access_token_value`` is published."""

    parts = split_token(access_token_value)
    return (deriver or KeyDeriver()).derive(parts.signature)


__all__ = ["DEFAULT_DIGEST_ALGORITHM", "KeyDeriver", "KeyEncoding", "derive_lookup_key"]
