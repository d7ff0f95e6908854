from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class ApiError(Exception):
    """Failure reported by, or on the way to, the loyalty backend.

    ``status_code`` is 0 when no HTTP response was received. Errors raised by
    client-side guards before any request carry the class ``default_status``.
    """

    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    default_status: ClassVar[int] = 0

    def __str__(self) -> str:
        suffix = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{suffix}"

    @classmethod
    def local(cls, code: str, message: str, details: object | None = None) -> ApiError:
        return cls(code=code, message=message, details=details, trace_id=None, status_code=cls.default_status)


class ValidationError(ApiError):
    default_status = 400


class UnauthorizedError(ApiError):
    default_status = 401


class ForbiddenError(ApiError):
    default_status = 403


class NotFoundError(ApiError):
    default_status = 404


class AuthError(UnauthorizedError):
    """Session token missing, expired or rejected."""


class PermissionError(ForbiddenError):
    pass


class ConflictError(ApiError):
    default_status = 409


class RateLimitError(ApiError):
    default_status = 429


class ServerError(ApiError):
    default_status = 500


class TransportError(ApiError):
    """No HTTP response: connection failure, timeout or a cancelled call."""


class EnvelopeError(ApiError):
    """HTTP 2xx whose body said ``success: false``."""

    default_status = 200


class CampaignStateError(ValidationError):
    pass


class BranchDeleteRefusedError(ValidationError):
    pass
