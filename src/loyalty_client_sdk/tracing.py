from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Request-ID"

# requests' CaseInsensitiveDict makes one spelling enough for response headers
_RESPONSE_HEADERS = (TRACE_HEADER, "X-Trace-ID")
_PAYLOAD_KEYS = ("trace_id", "requestId")


@dataclass
class TraceContext:
    """Correlation id shared by every call a session makes.

    The client mints one on first use and switches to whatever id the backend
    echoes back, so banners show the id the server logged.
    """

    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = uuid.uuid4().hex
        return self.trace_id

    def adopt(self, *, headers: Mapping[str, str] | None = None, payload: Mapping[str, object] | None = None) -> str | None:
        candidates = [headers.get(name) for name in _RESPONSE_HEADERS] if headers else []
        if payload:
            candidates += [payload.get(key) for key in _PAYLOAD_KEYS]
        for value in candidates:
            if isinstance(value, str) and value:
                self.trace_id = value
                break
        return self.trace_id
