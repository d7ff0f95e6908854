from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ..envelope import unwrap
from ..exceptions import AuthError
from ..http_client import HttpClient

BUSINESS_SCOPE = "business"
ADMIN_SCOPE = "admin"


@dataclass
class BaseClient:
    scope: ClassVar[str] = BUSINESS_SCOPE

    http: HttpClient
    session_token: str | None = None
    business_id: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.session_token:
            headers["x-session-token"] = self.session_token
        if self.business_id:
            headers["x-business-id"] = self.business_id
        return headers

    def _require_auth(self) -> None:
        if not self.session_token or not self.business_id:
            raise AuthError.local("NOT_AUTHENTICATED", "Business session is required")

    def _request(self, method: str, path: str, **kwargs: Any):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        kwargs.setdefault("scope", self.scope)
        return self.http.request(method, path, headers=merged, **kwargs)

    def _data(self, method: str, path: str, **kwargs: Any) -> Any:
        payload = self._request(method, path, **kwargs)
        return unwrap(payload, trace_id=self.http.trace.trace_id if self.http.trace else None)


@dataclass
class AdminBaseClient(BaseClient):
    scope: ClassVar[str] = ADMIN_SCOPE

    access_token: str | None = None
    admin_session_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.admin_session_token:
            headers["X-Session-Token"] = self.admin_session_token
        return headers

    def _require_auth(self) -> None:
        if not self.access_token:
            raise AuthError.local("NOT_AUTHENTICATED", "Admin session is required")
