from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from cloudflare_token_publisher.application.config import CLOUDFLARE_API_URL
from cloudflare_token_publisher.domain.key_derivation import KeyEncoding
from cloudflare_token_publisher.runtime.settings import Settings


def test_settings_loads_from_environment(isolated_env: pytest.MonkeyPatch) -> None:
    """Settings loads from environment variables."""
    isolated_env.setenv("CLOUDFLARE_ACCOUNT_ID", " acct-123 ")
    isolated_env.setenv("CLOUDFLARE_KV_NAMESPACE", "ns-456")
    isolated_env.setenv("CLOUDFLARE_API_TOKEN", "cf-secret")
    isolated_env.setenv("CLOUDFLARE_KV_KEY_ENCODING", "base64url")
    isolated_env.setenv("CLOUDFLARE_HTTP_TIMEOUT_SECONDS", "2.5")
    isolated_env.setenv("TOKEN_PUBLISHER_JSON_LOGS", "true")

    settings = Settings.load()

    assert settings.cloudflare.account_id == "acct-123"
    assert settings.cloudflare.kv_namespace == "ns-456"
    assert settings.api_token_value == "cf-secret"
    assert settings.cloudflare.key_encoding is KeyEncoding.BASE64URL
    assert settings.cloudflare.http_timeout_seconds == 2.5
    assert settings.observability.json_logs is True


def test_settings_defaults(isolated_env: pytest.MonkeyPatch) -> None:
    settings = Settings.load()

    assert settings.cloudflare.api_base_url == CLOUDFLARE_API_URL
    assert settings.cloudflare.digest_algorithm == "sha256"
    assert settings.cloudflare.key_encoding is KeyEncoding.HEX
    assert settings.observability.json_logs is False


def test_settings_repr_hides_api_token(isolated_env: pytest.MonkeyPatch) -> None:
    isolated_env.setenv("CLOUDFLARE_API_TOKEN", "cf-secret")

    settings = Settings.load()

    assert "cf-secret" not in repr(settings)


def test_settings_reject_non_positive_timeout(isolated_env: pytest.MonkeyPatch) -> None:
    isolated_env.setenv("CLOUDFLARE_HTTP_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        Settings.load()


def test_settings_load_logs_on_settings_logger(
    isolated_env: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    isolated_env.setenv("CLOUDFLARE_API_TOKEN", "cf-secret-token")
    caplog.set_level(logging.INFO, logger="cloudflare_token_publisher.settings")

    Settings.load()

    [record] = [r for r in caplog.records if r.name == "cloudflare_token_publisher.settings"]
    assert record.getMessage().startswith("publisher settings loaded")
    assert "cf-secret-token" not in record.getMessage()
