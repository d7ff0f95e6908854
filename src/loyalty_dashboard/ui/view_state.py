from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    SIGNED_OUT = "signed_out"
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"
    STALE = "stale"
    FAILED = "failed"


STATUS_MESSAGES: dict[str, dict[ViewStateStatus, str]] = {
    "en": {
        ViewStateStatus.SIGNED_OUT: "Please sign in to your business account",
        ViewStateStatus.LOADING: "Loading...",
        ViewStateStatus.EMPTY: "Nothing here yet",
    },
    "ar": {
        ViewStateStatus.SIGNED_OUT: "يرجى تسجيل الدخول إلى حساب نشاطك التجاري",
        ViewStateStatus.LOADING: "جاري التحميل...",
        ViewStateStatus.EMPTY: "لا توجد بيانات بعد",
    },
}


@dataclass(frozen=True)
class ViewState:
    """What a dashboard tab should show; ``STALE`` keeps old data under an error."""

    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None
    show_data: bool = False

    @property
    def is_error(self) -> bool:
        return self.status in (ViewStateStatus.STALE, ViewStateStatus.FAILED)

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "show_data": self.show_data,
        }


def resolve_state(
    *,
    authenticated: bool,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    language: str = "ar",
    empty_message: str | None = None,
    trace_id: str | None = None,
) -> ViewState:
    messages = STATUS_MESSAGES.get(language, STATUS_MESSAGES["en"])
    if not authenticated:
        return ViewState(ViewStateStatus.SIGNED_OUT, messages[ViewStateStatus.SIGNED_OUT])
    if is_loading:
        # keep rendering the previous rows while a refresh is in flight
        return ViewState(ViewStateStatus.LOADING, messages[ViewStateStatus.LOADING], show_data=has_data)
    if error:
        status = ViewStateStatus.STALE if has_data else ViewStateStatus.FAILED
        return ViewState(status, error, trace_id=trace_id, show_data=has_data)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, empty_message or messages[ViewStateStatus.EMPTY])
    return ViewState(ViewStateStatus.READY, show_data=True)
