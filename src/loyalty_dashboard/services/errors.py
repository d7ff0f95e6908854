from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loyalty_client_sdk import ClientValidationError, to_user_facing_error
from loyalty_client_sdk.exceptions import ApiError


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    code: str | None = None

    def __str__(self) -> str:
        return self.message


def issues_text(issues: list[Any]) -> str:
    return "; ".join(f"{issue.field}: {issue.reason}" for issue in issues)


def normalize_error(exc: Exception, *, fallback: str = "Unexpected client error") -> ServiceError:
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, ApiError):
        friendly = to_user_facing_error(exc)
        return ServiceError(
            message=friendly.message,
            details=str(exc.details) if exc.details is not None else None,
            trace_id=exc.trace_id,
            code=exc.code,
        )
    if isinstance(exc, ClientValidationError):
        first = exc.issues[0].reason if exc.issues else str(exc)
        return ServiceError(message=first, details=issues_text(exc.issues), code="CLIENT_VALIDATION")
    return ServiceError(message=str(exc) or fallback)
