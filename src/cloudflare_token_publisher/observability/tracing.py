"""Tracer provider for spans around KV writes."""

from __future__ import annotations

import logging

from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from cloudflare_token_publisher.config.observability import ObservabilitySettings
from cloudflare_token_publisher.errors import ConfigurationError

logger = logging.getLogger("cloudflare_token_publisher.observability.tracing")


def _otlp_exporter(observability: ObservabilitySettings) -> SpanExporter | None:
    exporter_name = observability.traces_exporter.strip().lower()
    if exporter_name == "none":
        return None
    endpoint = (observability.otlp_endpoint or "").strip()
    if not endpoint:
        if exporter_name:
            raise ConfigurationError(
                f"OTEL_TRACES_EXPORTER={exporter_name} requires OTEL_EXPORTER_OTLP_ENDPOINT; "
                "set it or use OTEL_TRACES_EXPORTER=none"
            )
        return None
    return OTLPSpanExporter(endpoint=f"{endpoint.rstrip('/')}/v1/traces")


def configure_tracing(
    observability: ObservabilitySettings,
    *,
    kv_namespace: str,
    exporter: SpanExporter | None = None,
) -> TracerProvider | None:
    """Build the provider the KV writer records ``cloudflare.kv.put`` spans on.

    Returns ``None`` when no exporter is configured, in which case spans go to
    the global (normally no-op) provider.
    """

    if exporter is None:
        exporter = _otlp_exporter(observability)
    if exporter is None:
        return None

    resource = Resource.create(
        {
            "service.name": observability.service_name,
            "cloudflare.kv.namespace": kv_namespace,
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    logger.info(
        "kv write tracing enabled",
        extra={
            "data": {
                "service_name": observability.service_name,
                "kv_namespace": kv_namespace,
                "exporter": type(exporter).__name__,
            }
        },
    )
    return provider


__all__ = ["configure_tracing"]
