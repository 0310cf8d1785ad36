"""Writes token records to a Cloudflare Workers KV namespace."""

from __future__ import annotations

import logging

import httpx
from opentelemetry import trace
from opentelemetry.trace import SpanKind

from cloudflare_token_publisher.application.config import PublisherConfig
from cloudflare_token_publisher.application.ports.kv_store import KvClientPort, KvWriterPort
from cloudflare_token_publisher.domain.records import DerivedRecord, KvTarget
from cloudflare_token_publisher.errors import ConfigurationError, RemoteWriteFailure

TRACER_NAME = "cloudflare_token_publisher.cloudflare.kv"

logger = logging.getLogger("cloudflare_token_publisher.cloudflare.kv")


class CloudflareKvWriter(KvWriterPort):
    """Idempotent PUT of ``header.payload`` under the hashed-signature key."""

    def __init__(
        self,
        config: PublisherConfig,
        *,
        tracer_provider: trace.TracerProvider | None = None,
    ) -> None:
        self._config = config
        self._tracer = trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)

    def target_for(self, record: DerivedRecord) -> KvTarget:
        return KvTarget(
            account_id=self._config.account_id,
            namespace_id=self._config.kv_namespace,
            lookup_key=record.lookup_key,
            expiration=record.expiration_seconds,
        )

    def write(self, record: DerivedRecord) -> None:
        url = self.target_for(record).url(self._config.api_base_url)
        client = self._client_for(url)
        headers = {
            "Authorization": f"Bearer {self._config.api_token}",
            "Content-Type": "text/plain; charset=utf-8",
        }

        with self._tracer.start_as_current_span(
            "cloudflare.kv.put",
            kind=SpanKind.CLIENT,
            attributes={
                "http.method": "PUT",
                "cloudflare.kv.namespace": self._config.kv_namespace,
            },
        ) as span:
            response = client.put(record.stored_value.encode("utf-8"), headers=headers)
            span.set_attribute("http.status_code", response.status_code)

        if response.status_code != httpx.codes.OK:
            raise RemoteWriteFailure(response.status_code, response.body)

    def _client_for(self, url: httpx.URL) -> KvClientPort:
        http_client = self._config.http_client
        if http_client is not None:
            configured_scheme = http_client.scheme.lower()
            required_scheme = url.scheme
            if configured_scheme != required_scheme:
                logger.debug(
                    "http client scheme does not match kv endpoint; check the configuration",
                    extra={
                        "data": {
                            "configured_scheme": configured_scheme,
                            "required_scheme": required_scheme,
                        }
                    },
                )
                raise ConfigurationError(
                    "HTTP scheme of client is not acceptable; "
                    f"{required_scheme} is required but {configured_scheme} was found"
                )
        return self._config.client_factory.create(url, http_client=http_client)


__all__ = ["TRACER_NAME", "CloudflareKvWriter"]
