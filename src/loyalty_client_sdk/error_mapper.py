from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}

# the backend has used all of these spellings across releases
_CODE_KEYS = ("errorCode", "code", "error_code")
_MESSAGE_KEYS = ("message", "error")
_DETAIL_KEYS = ("details", "verificationDetails", "issues")


def _first(payload: Mapping[str, object], keys: tuple[str, ...]) -> object | None:
    return next((payload[key] for key in keys if payload.get(key)), None)


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return STATUS_ERRORS.get(status_code, ApiError)


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    body = dict(payload or {})
    message = _first(body, _MESSAGE_KEYS)
    if not isinstance(message, str) or not message.strip():
        message = "Request failed"
    code = _first(body, _CODE_KEYS)
    body_trace = body.get("trace_id")
    return error_class_for(status_code)(
        code=str(code) if code else "HTTP_ERROR",
        message=message,
        details=_first(body, _DETAIL_KEYS),
        trace_id=str(body_trace) if body_trace is not None else trace_id,
        status_code=status_code,
        raw_payload=body,
    )
