"""Listener that publishes issued access tokens to the revocation KV store."""

from __future__ import annotations

import logging

from cloudflare_token_publisher.application.ports.kv_store import KvWriterPort
from cloudflare_token_publisher.domain.key_derivation import KeyDeriver
from cloudflare_token_publisher.domain.records import DerivedRecord, PublishOutcome
from cloudflare_token_publisher.domain.token import IssuedTokenEvent, split_token
from cloudflare_token_publisher.errors import MalformedTokenError, RemoteWriteFailure

logger = logging.getLogger("cloudflare_token_publisher.listener")


class AccessTokenIssuedListener:
    """Maps each issued token's hashed signature to its header and payload.

    Every event is attempted once. Malformed tokens and failed writes are
    logged and dropped so that event dispatch for other listeners carries on;
    missing digests and unusable configuration propagate.
    """

    event_type = IssuedTokenEvent

    def __init__(
        self,
        *,
        writer: KvWriterPort,
        key_deriver: KeyDeriver | None = None,
    ) -> None:
        self._writer = writer
        self._key_deriver = key_deriver or KeyDeriver()

    def derive_record(self, event: IssuedTokenEvent) -> DerivedRecord:
        parts = split_token(event.access_token_value)
        return DerivedRecord(
            lookup_key=self._key_deriver.derive(parts.signature),
            stored_value=parts.signed_payload,
            expiration_seconds=event.expires_at,
        )

    def handle(self, event: IssuedTokenEvent) -> PublishOutcome:
        try:
            record = self.derive_record(event)
        except MalformedTokenError as exc:
            logger.debug(
                "access token has unexpected format",
                extra={"data": {"segment_count": exc.segment_count}},
            )
            return PublishOutcome.DROPPED

        try:
            self._writer.write(record)
        except RemoteWriteFailure as exc:
            logger.warning(
                "token posted to cloudflare kv but response was not successful: %s",
                exc.body,
                extra={
                    "data": {
                        "status_code": exc.status_code,
                        "lookup_key": record.lookup_key,
                        "expires_at": record.expiration_seconds,
                    }
                },
            )
            return PublishOutcome.FAILED_LOGGED

        logger.debug(
            "token published to cloudflare kv",
            extra={
                "data": {
                    "lookup_key": record.lookup_key,
                    "expires_at": record.expiration_seconds,
                    "event": repr(event),
                }
            },
        )
        return PublishOutcome.ACKNOWLEDGED


__all__ = ["AccessTokenIssuedListener"]
