from __future__ import annotations

import io
import json
from datetime import datetime, timezone

import pytest

from loyalty_dashboard.services.errors import ServiceError
from loyalty_dashboard.telemetry import TelemetryCategory, TelemetryLogger, build_event
from loyalty_dashboard.ui import ErrorBanner, ViewStateStatus, resolve_state


def test_build_event_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        build_event(category="billing", name="x", module="m", action="a")


def test_build_event_rejects_pii_context() -> None:
    with pytest.raises(ValueError) as exc_info:
        build_event(
            category="auth",
            name="x",
            module="auth",
            action="login",
            context={"Owner_Phone": "+966500000000", "admin_access_token": "t", "route": "dashboard"},
        )

    assert "['Owner_Phone', 'admin_access_token']" in str(exc_info.value)


def test_build_event_accepts_enum_category() -> None:
    event = build_event(category=TelemetryCategory.PAYMENT, name="x", module="subscription", action="callback")

    assert event.category == "payment"


def test_event_drops_empty_fields() -> None:
    event = build_event(
        category="navigation",
        name="screen_view",
        module="dashboard",
        action="dashboard",
        now=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )

    assert event.to_dict() == {
        "category": "navigation",
        "name": "screen_view",
        "module": "dashboard",
        "action": "dashboard",
        "timestamp_utc": "2026-01-01T00:00:00+00:00",
    }


def test_logger_writes_jsonl_and_echo(tmp_path) -> None:
    stream = io.StringIO()
    sink = TelemetryLogger(
        app_name="loyalty_dashboard",
        enabled=True,
        log_file=tmp_path / "events.jsonl",
        language="ar",
        env_name="staging",
        echo=stream,
    )

    assert sink.emit(build_event(category="error", name="api_error", module="branches", action="list")) is True

    line = json.loads((tmp_path / "events.jsonl").read_text(encoding="utf-8"))
    assert line["app_name"] == "loyalty_dashboard"
    assert line["language"] == "ar"
    assert line["env"] == "staging"
    assert json.loads(stream.getvalue()) == line


def test_disabled_logger_writes_nothing(tmp_path) -> None:
    sink = TelemetryLogger(app_name="loyalty_dashboard", enabled=False, log_file=tmp_path / "events.jsonl")

    assert sink.emit(build_event(category="auth", name="x", module="auth", action="login")) is False
    assert not (tmp_path / "events.jsonl").exists()


def test_logger_reads_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_TELEMETRY_ENABLED", "true")

    assert TelemetryLogger(app_name="loyalty_dashboard").enabled is True


def test_resolve_state_precedence() -> None:
    assert resolve_state(authenticated=False, is_loading=True, error=None, has_data=True).status is ViewStateStatus.SIGNED_OUT
    stale = resolve_state(authenticated=True, is_loading=False, error="boom", has_data=True)
    assert stale.status is ViewStateStatus.STALE
    assert stale.is_error is True
    assert stale.show_data is True
    failed = resolve_state(authenticated=True, is_loading=False, error="boom", has_data=False)
    assert failed.status is ViewStateStatus.FAILED
    empty = resolve_state(authenticated=True, is_loading=False, error=None, has_data=False, empty_message="No branches")
    assert empty.render()["message"] == "No branches"
    assert resolve_state(authenticated=True, is_loading=False, error=None, has_data=True).status is ViewStateStatus.READY


def test_resolve_state_messages_follow_language() -> None:
    signed_out = resolve_state(authenticated=False, is_loading=False, error=None, has_data=False, language="en")
    assert signed_out.message == "Please sign in to your business account"
    loading = resolve_state(authenticated=True, is_loading=True, error=None, has_data=True)
    assert loading.message == "جاري التحميل..."
    assert loading.show_data is True


def test_error_banner_shows_service_error() -> None:
    banner = ErrorBanner()

    banner.show_error(ServiceError(message="Request failed", details="SERVER_ERROR (HTTP 500)", trace_id="t-1"))

    assert banner.visible is True
    assert banner.trace_id == "t-1"
    banner.clear()
    assert banner.visible is False
