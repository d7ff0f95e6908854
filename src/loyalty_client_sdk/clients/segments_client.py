from __future__ import annotations

from typing import Any, Mapping

from .. import endpoints
from ..envelope import extract_list, extract_object
from ..models_campaigns import Segment
from ..models_offers import Customer
from .base import BaseClient


class SegmentsClient(BaseClient):
    def list(self, *, active_only: bool = True) -> list[Segment]:
        self._require_auth()
        data = self._data("GET", endpoints.SEGMENTS, module="segments", operation="list")
        segments = [Segment.model_validate(row) for row in extract_list(data, "segments")]
        if active_only:
            return [segment for segment in segments if segment.is_active]
        return segments

    def get(self, segment_id: str) -> Segment:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.SEGMENTS, segment_id),
            module="segments",
            operation="get",
        )
        return Segment.model_validate(extract_object(data, "segment"))

    def create(self, payload: Mapping[str, Any]) -> Segment:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.SEGMENTS,
            json_body=dict(payload),
            module="segments",
            operation="create",
            invalidate_paths=[endpoints.SEGMENTS],
        )
        return Segment.model_validate(extract_object(data, "segment"))

    def update(self, segment_id: str, payload: Mapping[str, Any]) -> Segment:
        self._require_auth()
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.SEGMENTS, segment_id),
            json_body=dict(payload),
            module="segments",
            operation="update",
            invalidate_paths=[endpoints.SEGMENTS],
        )
        return Segment.model_validate(extract_object(data, "segment"))

    def delete(self, segment_id: str) -> None:
        self._require_auth()
        self._data(
            "DELETE",
            endpoints.resource(endpoints.SEGMENTS, segment_id),
            module="segments",
            operation="delete",
            invalidate_paths=[endpoints.SEGMENTS],
        )

    def customers(self, segment_id: str, *, page: int = 1, limit: int = 50) -> list[Customer]:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.SEGMENTS, segment_id, "customers"),
            params={"page": page, "limit": limit},
            module="segments",
            operation="customers",
        )
        return [Customer.model_validate(row) for row in extract_list(data, "customers")]

    def refresh(self, segment_id: str | None = None) -> dict[str, Any]:
        """Recalculate one segment, or every segment when no id is given."""
        self._require_auth()
        path = (
            endpoints.resource(endpoints.SEGMENTS, segment_id, "refresh")
            if segment_id
            else endpoints.SEGMENTS_REFRESH_ALL
        )
        data = self._data(
            "POST",
            path,
            module="segments",
            operation="refresh",
            invalidate_paths=[endpoints.SEGMENTS],
        )
        return data if isinstance(data, dict) else {}

    def analytics(self, segment_id: str) -> dict[str, Any]:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.SEGMENTS, segment_id, "analytics"),
            module="segments",
            operation="analytics",
        )
        return data if isinstance(data, dict) else {}

    def create_predefined(self) -> list[Segment]:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.SEGMENTS_PREDEFINED,
            module="segments",
            operation="create_predefined",
            invalidate_paths=[endpoints.SEGMENTS],
        )
        return [Segment.model_validate(row) for row in extract_list(data, "segments")]

    def send_notification(self, segment_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.resource(endpoints.SEGMENTS, segment_id, "send-notification"),
            json_body=dict(payload),
            module="segments",
            operation="send_notification",
        )
        return data if isinstance(data, dict) else {}
