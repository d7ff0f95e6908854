from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class TelemetryCategory(str, Enum):
    AUTH = "auth"
    NAVIGATION = "navigation"
    API_CALL_RESULT = "api_call_result"
    ERROR = "error"
    NOTIFICATION = "notification"
    PAYMENT = "payment"


TELEMETRY_CATEGORIES = frozenset(item.value for item in TelemetryCategory)

# matched as substrings so owner_phone, admin_access_token etc. are caught too
_PII_MARKERS = ("email", "password", "phone", "token", "pin", "owner", "address", "card", "authorization")


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    module: str
    action: str
    timestamp_utc: str
    trace_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def pii_keys(context: dict[str, Any] | None) -> list[str]:
    if not context:
        return []
    return sorted(key for key in context if any(marker in key.lower() for marker in _PII_MARKERS))


def build_event(
    *,
    category: TelemetryCategory | str,
    name: str,
    module: str,
    action: str,
    trace_id: str | None = None,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    try:
        resolved = TelemetryCategory(category)
    except ValueError:
        raise ValueError(f"Unsupported telemetry category: {category}") from None
    blocked = pii_keys(context)
    if blocked:
        raise ValueError(f"Telemetry context must not carry customer or credential data: {blocked}")
    return TelemetryEvent(
        category=resolved.value,
        name=name,
        module=module,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        trace_id=trace_id,
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        context=dict(context) if context else None,
    )
