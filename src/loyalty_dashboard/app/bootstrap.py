from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from loyalty_client_sdk import ApiSession, ClientConfig, load_config

from ..config import DashboardConfig, load_dashboard_config
from ..services.auth_service import AuthService
from ..services.errors import ServiceError, normalize_error
from ..services.payment_verification import PaymentResult, PaymentVerifier
from ..telemetry.events import build_event
from ..telemetry.logger import TelemetryLogger
from .state import AppState, Route, SessionContext

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class DashboardBootstrap:
    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        dashboard_config: DashboardConfig | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.dashboard_config = dashboard_config or load_dashboard_config()
        self.state = AppState(language=self.dashboard_config.language)
        self.auth_service = AuthService(self.session)
        self.telemetry = telemetry or TelemetryLogger(
            app_name="loyalty_dashboard",
            enabled=self.dashboard_config.telemetry_enabled,
            log_file=self.dashboard_config.telemetry_file,
            language=self.dashboard_config.language,
            env_name=self.config.env_name,
        )

    def start(self) -> BootstrapResult:
        if self.auth_service.has_admin_session():
            return self._enter(Route.ADMIN_DASHBOARD, "Admin session restored")
        if not self.auth_service.has_active_session():
            self._navigate(Route.AUTH, "No active session")
            return BootstrapResult(route=self.state.route)
        return self._load_dashboard()

    def login(self, email: str, password: str) -> BootstrapResult:
        started = perf_counter()
        try:
            self.auth_service.login(email, password)
        except Exception as exc:
            failure = normalize_error(exc)
            self.state.error_message = failure.message
            self.state.trace_id = failure.trace_id
            self._emit_auth_result(False, "login", started=started, trace_id=failure.trace_id, error_code=failure.code)
            self._navigate(Route.AUTH, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        self._emit_auth_result(True, "login", started=started)
        return self._load_dashboard()

    def admin_login(self, email: str, password: str) -> BootstrapResult:
        started = perf_counter()
        try:
            self.auth_service.admin_login(email, password)
        except Exception as exc:
            failure = normalize_error(exc)
            self.state.error_message = failure.message
            self._emit_auth_result(False, "admin_login", started=started, trace_id=failure.trace_id, error_code=failure.code)
            self._navigate(Route.ADMIN_LOGIN, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        self._emit_auth_result(True, "admin_login", started=started)
        return self._enter(Route.ADMIN_DASHBOARD, "Admin authenticated")

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.state.session = SessionContext()
        self._navigate(Route.AUTH, "Session cleared")
        return BootstrapResult(route=self.state.route)

    def admin_logout(self) -> BootstrapResult:
        self.auth_service.admin_logout()
        self.state.session.admin_email = None
        self._navigate(Route.ADMIN_LOGIN, "Admin session cleared")
        return BootstrapResult(route=self.state.route)

    def verify_payment(self, query: dict[str, Any], verifier: PaymentVerifier | None = None) -> PaymentResult:
        self._navigate(Route.PAYMENT_CALLBACK, "Verifying payment")
        verifier = verifier or PaymentVerifier(
            self.session,
            language=self.state.language,
            max_poll_attempts=self.dashboard_config.payment_poll_attempts,
            poll_interval_seconds=self.dashboard_config.payment_poll_interval_seconds,
        )
        result = verifier.verify(query)
        self._emit(
            category="payment",
            name="payment_verification_result",
            module="subscription",
            action=result.flow.value,
            success=result.success,
            error_code=result.error_code,
        )
        if result.success:
            self._sync_session_context()
        return result

    def _load_dashboard(self) -> BootstrapResult:
        try:
            self.state.status_message = "Checking API connectivity..."
            self._ensure_api_connectivity()
        except ServiceError as exc:
            self.state.error_message = exc.message
            self._navigate(Route.AUTH, "Failed to initialize dashboard")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        self._sync_session_context()
        self.state.error_message = None
        return self._enter(Route.DASHBOARD, "Authenticated")

    def _enter(self, route: Route, status_message: str) -> BootstrapResult:
        self._navigate(route, status_message)
        self._emit(category="navigation", name="screen_view", module="dashboard", action=route.value, success=True)
        return BootstrapResult(route=self.state.route)

    def _sync_session_context(self) -> None:
        data = self.session.state
        if data is None:
            return
        self.state.session.business_id = data.business_id
        self.state.session.business_name = data.business_name
        self.state.session.business_status = data.business_status
        if data.admin_info:
            self.state.session.admin_email = data.admin_info.get("email")

    def _ensure_api_connectivity(self) -> None:
        try:
            payload = self.session.health_client().health() or {}
        except Exception as exc:
            raise ServiceError(
                message="Cannot connect to the loyalty API. Check your network and try again.",
                code="HEALTH_UNREACHABLE",
            ) from exc
        if payload.get("ok") is False or payload.get("status") in {"error", "unhealthy"}:
            raise ServiceError(
                message="The loyalty API is reachable but unhealthy. Please retry in a moment.",
                code="HEALTH_UNHEALTHY",
            )

    def _emit_auth_result(
        self,
        success: bool,
        action: str,
        *,
        started: float,
        trace_id: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self._emit(
            category="auth",
            name="auth_login_result",
            module="auth",
            action=action,
            success=success,
            duration_ms=int((perf_counter() - started) * 1000),
            trace_id=trace_id,
            error_code=error_code,
        )

    def _emit(self, **fields: Any) -> None:
        if not self.telemetry.enabled:
            return
        self.telemetry.emit(build_event(**fields))

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message
