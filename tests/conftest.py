from __future__ import annotations

import pytest


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    # Keep a developer's .env, CLOUDFLARE_* and OTEL_* variables out of settings tests.
    monkeypatch.chdir(tmp_path)
    for name in (
        "CLOUDFLARE_ACCOUNT_ID",
        "CLOUDFLARE_KV_NAMESPACE",
        "CLOUDFLARE_API_TOKEN",
        "CLOUDFLARE_API_BASE_URL",
        "CLOUDFLARE_HTTP_TIMEOUT_SECONDS",
        "CLOUDFLARE_KV_KEY_ENCODING",
        "CLOUDFLARE_KV_DIGEST_ALGORITHM",
        "TOKEN_PUBLISHER_JSON_LOGS",
        "OTEL_SERVICE_NAME",
        "OTEL_TRACES_EXPORTER",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
