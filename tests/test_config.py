from __future__ import annotations

import pytest

from loyalty_client_sdk.config import ConfigError, load_config
from loyalty_dashboard.config import load_dashboard_config


def test_load_config_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOYALTY_API_BASE_URL", raising=False)
    monkeypatch.delenv("LOYALTY_API_BASE_URL_DEV", raising=False)
    with pytest.raises(ConfigError, match="LOYALTY_API_BASE_URL"):
        load_config()


def test_load_config_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_ENV", "staging")
    monkeypatch.setenv("LOYALTY_API_BASE_URL_STAGING", "https://staging.example.com/")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com"
    assert cfg.env_name == "staging"


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOYALTY_RETRIES", raising=False)
    cfg = load_config()
    assert cfg.retries == 3
    assert cfg.verify_ssl is True
    assert cfg.connect_timeout_seconds == 5.0
    assert cfg.read_timeout_seconds == 10.0


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("LOYALTY_TIMEOUT_SECONDS", "0"),
        ("LOYALTY_CONNECT_TIMEOUT_SECONDS", "0"),
        ("LOYALTY_READ_TIMEOUT_SECONDS", "0"),
        ("LOYALTY_RETRIES", "-1"),
        ("LOYALTY_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("LOYALTY_MAX_CONNECTIONS", "0"),
    ],
)
def test_load_config_rejects_invalid_ranges(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()


@pytest.mark.parametrize("key", ["LOYALTY_TIMEOUT_SECONDS", "LOYALTY_RETRIES", "LOYALTY_MAX_CONNECTIONS"])
def test_load_config_rejects_invalid_types(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv(key, "abc")

    with pytest.raises(ConfigError, match=key):
        load_config()


def test_verify_ssl_can_be_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_VERIFY_SSL", "false")
    assert load_config().verify_ssl is False


def test_dashboard_config_defaults() -> None:
    cfg = load_dashboard_config()
    assert cfg.language == "ar"
    assert cfg.payment_poll_attempts == 10
    assert cfg.payment_poll_interval_seconds == 2.0
    assert cfg.telemetry_enabled is False


def test_dashboard_config_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_LANGUAGE", "EN")
    monkeypatch.setenv("LOYALTY_PAYMENT_POLL_ATTEMPTS", "3")
    monkeypatch.setenv("LOYALTY_TELEMETRY_ENABLED", "yes")
    monkeypatch.setenv("LOYALTY_TELEMETRY_FILE", "/tmp/telemetry.jsonl")

    cfg = load_dashboard_config()

    assert cfg.language == "en"
    assert cfg.payment_poll_attempts == 3
    assert cfg.telemetry_enabled is True
    assert cfg.telemetry_file == "/tmp/telemetry.jsonl"


def test_dashboard_config_rejects_unknown_language(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_LANGUAGE", "fr")
    with pytest.raises(ConfigError, match="LOYALTY_LANGUAGE"):
        load_dashboard_config()


def test_dashboard_config_rejects_negative_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_PAYMENT_POLL_ATTEMPTS", "-1")
    with pytest.raises(ConfigError, match="LOYALTY_PAYMENT_POLL_ATTEMPTS"):
        load_dashboard_config()
