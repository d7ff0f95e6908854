from __future__ import annotations

import json
from pathlib import Path

import responses
from conftest import BASE_URL, BUSINESS_ID

from loyalty_client_sdk import ApiSession
from loyalty_dashboard.app import DashboardBootstrap, Route
from loyalty_dashboard.config import DashboardConfig
from loyalty_dashboard.telemetry import TelemetryLogger

HEALTH_URL = f"{BASE_URL}/health"


def _bootstrap(session: ApiSession, telemetry_file: Path | None = None, **config) -> DashboardBootstrap:
    telemetry = TelemetryLogger(app_name="loyalty_dashboard", enabled=telemetry_file is not None, log_file=telemetry_file)
    return DashboardBootstrap(
        config=session.config,
        session=session,
        dashboard_config=DashboardConfig(**config),
        telemetry=telemetry,
    )


def _events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_start_without_session_routes_to_auth(session: ApiSession) -> None:
    result = _bootstrap(session).start()

    assert result.route is Route.AUTH


@responses.activate
def test_start_with_session_checks_health(business_session: ApiSession) -> None:
    responses.add(responses.GET, HEALTH_URL, json={"status": "ok"}, status=200)
    bootstrap = _bootstrap(business_session)

    result = bootstrap.start()

    assert result.route is Route.DASHBOARD
    assert bootstrap.state.session.business_id == BUSINESS_ID
    assert bootstrap.state.session.business_name == "Cafe Riyadh"


@responses.activate
def test_unreachable_api_keeps_auth_route(business_session: ApiSession) -> None:
    responses.add(responses.GET, HEALTH_URL, json={"message": "down"}, status=503)

    result = _bootstrap(business_session).start()

    assert result.route is Route.AUTH
    assert result.error_message == "Cannot connect to the loyalty API. Check your network and try again."


@responses.activate
def test_unhealthy_api_reports_message(business_session: ApiSession) -> None:
    responses.add(responses.GET, HEALTH_URL, json={"status": "unhealthy"}, status=200)

    result = _bootstrap(business_session).start()

    assert result.error_message == "The loyalty API is reachable but unhealthy. Please retry in a moment."


def test_admin_session_restores_admin_dashboard(admin_session: ApiSession) -> None:
    bootstrap = _bootstrap(admin_session)

    result = bootstrap.start()

    assert result.route is Route.ADMIN_DASHBOARD


@responses.activate
def test_login_failure_emits_auth_telemetry(session: ApiSession, tmp_path: Path) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/login",
        json={"success": False, "message": "Invalid credentials", "errorCode": "INVALID_CREDENTIALS"},
        status=401,
    )
    telemetry_file = tmp_path / "telemetry.jsonl"
    bootstrap = _bootstrap(session, telemetry_file)

    result = bootstrap.login("owner@example.com", "wrong")

    assert result.route is Route.AUTH
    assert result.error_message == "Invalid credentials"
    event = _events(telemetry_file)[0]
    assert event["category"] == "auth"
    assert event["success"] is False
    assert event["error_code"] == "INVALID_CREDENTIALS"
    assert "owner@example.com" not in telemetry_file.read_text(encoding="utf-8")


@responses.activate
def test_login_success_enters_dashboard(session: ApiSession, tmp_path: Path) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/login",
        json={"success": True, "data": {"session_token": "tok", "business": {"public_id": BUSINESS_ID, "status": "active"}}},
        status=200,
    )
    responses.add(responses.GET, HEALTH_URL, json={"status": "ok"}, status=200)
    telemetry_file = tmp_path / "telemetry.jsonl"
    bootstrap = _bootstrap(session, telemetry_file)

    result = bootstrap.login("owner@example.com", "secret")

    assert result.route is Route.DASHBOARD
    assert [event["category"] for event in _events(telemetry_file)] == ["auth", "navigation"]


def test_logout_resets_context(business_session: ApiSession) -> None:
    bootstrap = _bootstrap(business_session)
    bootstrap.state.session.business_id = BUSINESS_ID

    result = bootstrap.logout()

    assert result.route is Route.AUTH
    assert bootstrap.state.session.business_id is None
    assert business_session.is_business_authenticated() is False


@responses.activate
def test_verify_payment_routes_and_syncs(business_session: ApiSession, tmp_path: Path) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/subscription/reactivate",
        json={"success": True, "subscription": {"plan_type": "starter", "status": "active"}},
        status=200,
    )
    telemetry_file = tmp_path / "telemetry.jsonl"
    bootstrap = _bootstrap(business_session, telemetry_file, language="en")

    result = bootstrap.verify_payment({"id": "pay_1", "status": "paid", "reactivation": "true"})

    assert result.success is True
    assert bootstrap.state.route is Route.PAYMENT_CALLBACK
    assert bootstrap.state.session.business_status == "active"
    event = _events(telemetry_file)[-1]
    assert event["category"] == "payment"
    assert event["action"] == "reactivation"
