from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Route(str, Enum):
    AUTH = "auth"
    DASHBOARD = "dashboard"
    ADMIN_LOGIN = "admin_login"
    ADMIN_DASHBOARD = "admin_dashboard"
    REGISTER = "register"
    REGISTRATION_SUCCESS = "registration_success"
    PAYMENT_CALLBACK = "payment_callback"


@dataclass
class SessionContext:
    business_id: str | None = None
    business_name: str | None = None
    business_status: str | None = None
    admin_email: str | None = None


@dataclass
class AppState:
    route: Route = Route.AUTH
    error_message: str | None = None
    status_message: str = "Ready"
    trace_id: str | None = None
    language: str = "ar"
    session: SessionContext = field(default_factory=SessionContext)
