from __future__ import annotations

import logging

from loyalty_client_sdk import ApiSession, SessionData

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return self.session.is_business_authenticated()

    def has_admin_session(self) -> bool:
        return self.session.is_admin_authenticated()

    def login(self, email: str, password: str) -> SessionData:
        logger.info("login_attempt")
        if not email.strip() or not password:
            raise ServiceError(message="Email and password are required", code="CLIENT_VALIDATION")
        try:
            result = self.session.business_auth_client().login(email.strip(), password)
        except Exception as exc:
            logger.warning("login_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc) from exc
        state = self.session.establish_business(result, user_email=email.strip())
        logger.info("login_success", extra={"business_id": state.business_id})
        return state

    def admin_login(self, email: str, password: str) -> SessionData:
        logger.info("admin_login_attempt")
        try:
            result = self.session.admin_auth_client().login(email.strip(), password)
        except Exception as exc:
            logger.warning("admin_login_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc) from exc
        return self.session.establish_admin(result)

    def logout(self) -> None:
        logger.info("logout")
        self.session.logout_business()

    def admin_logout(self) -> None:
        logger.info("admin_logout")
        self.session.logout_admin()

    def whoami(self) -> dict[str, object]:
        state = self.session.state or SessionData()
        return {
            "authenticated": self.has_active_session(),
            "business_id": state.business_id,
            "business_name": state.business_name,
            "business_status": state.business_status,
            "admin": state.admin_info if self.has_admin_session() else None,
            "env": state.env_name,
        }
