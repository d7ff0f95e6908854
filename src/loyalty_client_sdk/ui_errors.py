from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, AuthError, PermissionError, RateLimitError, ServerError, TransportError

_FALLBACKS: dict[str, dict[type[ApiError], str]] = {
    "en": {
        TransportError: "Unable to reach the server. Please check your connection and try again.",
        RateLimitError: "Too many requests. Please wait a moment and try again.",
        AuthError: "Your session has expired. Please sign in again.",
        PermissionError: "You do not have access to this business resource.",
        ServerError: "The server could not complete the request.",
        ApiError: "Request failed",
    },
    "ar": {
        TransportError: "تعذر الاتصال بالخادم. يرجى التحقق من الاتصال والمحاولة مرة أخرى.",
        RateLimitError: "طلبات كثيرة جداً. يرجى الانتظار قليلاً ثم المحاولة مرة أخرى.",
        AuthError: "انتهت صلاحية الجلسة. يرجى تسجيل الدخول مرة أخرى.",
        PermissionError: "ليس لديك صلاحية الوصول إلى هذا المورد.",
        ServerError: "تعذر على الخادم إكمال الطلب.",
        ApiError: "فشل الطلب",
    },
}

# these never surface the raw backend text
_FIXED = (TransportError, RateLimitError)


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        return self.details or None


def _fallback(exc: ApiError, language: str) -> str:
    table = _FALLBACKS.get(language, _FALLBACKS["en"])
    for error_type in type(exc).__mro__:
        if error_type in table:
            return table[error_type]
    return table[ApiError]


def to_user_facing_error(exc: ApiError, *, language: str = "en") -> UserFacingError:
    """Banner text for an API failure plus a ``CODE (HTTP n)`` detail line."""
    backend_text = exc.message.strip()
    if isinstance(exc, _FIXED) or not backend_text:
        message = _fallback(exc, language)
    else:
        message = backend_text
    summary = f"{exc.code} (HTTP {exc.status_code})"
    return UserFacingError(
        message=message,
        details=f"{summary}: {exc.details}" if exc.details else summary,
        trace_id=exc.trace_id,
    )
