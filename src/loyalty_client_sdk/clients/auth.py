from __future__ import annotations

from typing import Any, Mapping

from .. import endpoints
from ..envelope import extract_list, unwrap
from ..models import (
    AdminInfo,
    AdminLoginResult,
    BusinessCategory,
    BusinessLoginResult,
    RegistrationRequest,
)
from .base import AdminBaseClient, BaseClient


class BusinessAuthClient(BaseClient):
    def login(self, email: str, password: str) -> BusinessLoginResult:
        payload = {"email": email, "password": password}
        data = unwrap(
            self.http.request(
                "POST",
                endpoints.BUSINESS_LOGIN,
                json_body=payload,
                module="auth",
                operation="business_login",
            )
        )
        return BusinessLoginResult.model_validate(data)

    def register(self, payload: RegistrationRequest | Mapping[str, Any]) -> dict[str, Any]:
        request = payload if isinstance(payload, RegistrationRequest) else RegistrationRequest.model_validate(payload)
        data = unwrap(
            self.http.request(
                "POST",
                endpoints.BUSINESS_REGISTER,
                json_body=request.model_dump(mode="json", exclude_none=True),
                module="auth",
                operation="business_register",
            )
        )
        return data if isinstance(data, dict) else {}

    def categories(self) -> list[BusinessCategory]:
        data = unwrap(self.http.request("GET", endpoints.BUSINESS_CATEGORIES, module="auth", operation="categories"))
        return [BusinessCategory.model_validate(row) for row in extract_list(data, "categories")]


class AdminAuthClient(AdminBaseClient):
    def login(self, email: str, password: str) -> AdminLoginResult:
        payload = {"email": email, "password": password}
        data = unwrap(
            self.http.request(
                "POST",
                endpoints.ADMIN_LOGIN,
                json_body=payload,
                module="admin_auth",
                operation="login",
            )
        )
        return AdminLoginResult.model_validate(data)

    def logout(self) -> None:
        self._request("POST", endpoints.ADMIN_LOGOUT, module="admin_auth", operation="logout")

    def verify(self) -> AdminInfo:
        self._require_auth()
        data = self._data("GET", endpoints.ADMIN_VERIFY, use_get_cache=False, module="admin_auth", operation="verify")
        admin = data.get("admin") if isinstance(data, dict) else None
        return AdminInfo.model_validate(admin or {})

    def refresh(self) -> str:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.ADMIN_REFRESH,
            json_body={"session_token": self.admin_session_token},
            module="admin_auth",
            operation="refresh",
        )
        if not isinstance(data, dict) or not data.get("access_token"):
            raise ValueError("Expected refresh response to include access_token")
        return str(data["access_token"])
