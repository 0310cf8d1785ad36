"""Runtime wiring for the token publisher."""

from __future__ import annotations

import logging

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter

from cloudflare_token_publisher.application.config import HttpClientConfig, PublisherConfig
from cloudflare_token_publisher.application.ports.kv_store import KvClientFactoryPort
from cloudflare_token_publisher.application.publish_token import AccessTokenIssuedListener
from cloudflare_token_publisher.domain.key_derivation import KeyDeriver
from cloudflare_token_publisher.infrastructure.cloudflare.kv_writer import CloudflareKvWriter
from cloudflare_token_publisher.infrastructure.http.client_factory import HttpxKvClientFactory
from cloudflare_token_publisher.observability.logging import configure_logging
from cloudflare_token_publisher.observability.tracing import configure_tracing
from cloudflare_token_publisher.runtime.settings import Settings

logger = logging.getLogger("cloudflare_token_publisher.runtime")


def init_logging(settings: Settings) -> None:
    """Apply the console logging config, forcing JSON lines when requested."""

    configure_logging(json_payload=True if settings.observability.json_logs else None)


def build_publisher_config(
    settings: Settings,
    *,
    http_client: HttpClientConfig | None = None,
    client_factory: KvClientFactoryPort | None = None,
) -> PublisherConfig:
    cloudflare = settings.cloudflare
    return PublisherConfig(
        account_id=cloudflare.account_id,
        kv_namespace=cloudflare.kv_namespace,
        api_token=settings.api_token_value,
        client_factory=client_factory
        or HttpxKvClientFactory(timeout_seconds=cloudflare.http_timeout_seconds),
        api_base_url=cloudflare.api_base_url,
        http_client=http_client,
        key_encoding=cloudflare.key_encoding,
        digest_algorithm=cloudflare.digest_algorithm,
    )


def create_listener(
    config: PublisherConfig,
    *,
    tracer_provider: TracerProvider | None = None,
) -> AccessTokenIssuedListener:
    return AccessTokenIssuedListener(
        writer=CloudflareKvWriter(config, tracer_provider=tracer_provider),
        key_deriver=KeyDeriver(
            algorithm=config.digest_algorithm,
            encoding=config.key_encoding,
        ),
    )


def build_listener(
    settings: Settings,
    *,
    http_client: HttpClientConfig | None = None,
    client_factory: KvClientFactoryPort | None = None,
    span_exporter: SpanExporter | None = None,
    setup_logging: bool = False,
) -> AccessTokenIssuedListener:
    """Create a listener wired to Cloudflare KV from ``settings``.

    ``setup_logging`` applies the publisher logging config first; hosts that
    own logging leave it off. ``span_exporter`` overrides the OTLP exporter
    resolved from the OTEL_* settings.
    """

    if setup_logging:
        init_logging(settings)
    config = build_publisher_config(settings, http_client=http_client, client_factory=client_factory)
    tracer_provider = configure_tracing(
        settings.observability,
        kv_namespace=config.kv_namespace,
        exporter=span_exporter,
    )
    logger.info(
        "token publisher configured",
        extra={
            "data": {
                "account_id": config.account_id,
                "kv_namespace": config.kv_namespace,
                "api_base_url": config.api_base_url,
                "prebound_http_client": http_client is not None,
                "key_encoding": config.key_encoding.value,
                "digest_algorithm": config.digest_algorithm,
                "tracing": tracer_provider is not None,
            }
        },
    )
    return create_listener(config, tracer_provider=tracer_provider)


__all__ = ["build_listener", "build_publisher_config", "create_listener", "init_logging"]
