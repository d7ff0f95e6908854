from __future__ import annotations

from typing import Any

from .exceptions import EnvelopeError


def unwrap(payload: Any, *, trace_id: str | None = None, status_code: int = 200) -> Any:
    """Return ``data`` from a ``{success, data, message}`` envelope.

    Payloads without a ``success`` flag are returned unchanged.
    """
    if not isinstance(payload, dict) or "success" not in payload:
        return payload
    if payload.get("success"):
        return payload.get("data")
    code = payload.get("errorCode") or payload.get("code") or "REQUEST_UNSUCCESSFUL"
    message = payload.get("message") or payload.get("error") or "Request was not successful"
    raise EnvelopeError(
        code=str(code),
        message=str(message),
        details=payload.get("details"),
        trace_id=trace_id,
        status_code=status_code,
        raw_payload=payload,
    )


def extract_list(data: Any, key: str) -> list[dict[str, Any]]:
    """Accept both ``[...]`` and ``{key: [...]}`` response shapes."""
    rows: Any = data
    if isinstance(data, dict):
        rows = data.get(key)
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, dict)]


def extract_object(data: Any, key: str) -> dict[str, Any]:
    """Accept both ``{...}`` and ``{key: {...}}`` response shapes."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected {key} response to be a JSON object")
    nested = data.get(key)
    if isinstance(nested, dict):
        return nested
    return data
