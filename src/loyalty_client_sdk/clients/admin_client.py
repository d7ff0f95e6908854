from __future__ import annotations

import logging
from typing import Any, Iterable

from .. import endpoints
from ..envelope import extract_object
from ..models import Business
from ..models_admin import (
    AdminBusinessFilters,
    AdminBusinessList,
    BulkAction,
    BulkUpdateResult,
    BusinessStats,
)
from .base import AdminBaseClient

logger = logging.getLogger(__name__)


class AdminBusinessesClient(AdminBaseClient):
    def list(self, filters: AdminBusinessFilters | None = None, *, page: int | None = None, limit: int | None = None) -> AdminBusinessList:
        self._require_auth()
        params: dict[str, Any] = (filters or AdminBusinessFilters()).to_params()
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        data = self._data(
            "GET",
            endpoints.ADMIN_BUSINESSES,
            params=params or None,
            use_get_cache=False,
            module="admin_businesses",
            operation="list",
        )
        if isinstance(data, list):
            return AdminBusinessList(businesses=[Business.model_validate(row) for row in data])
        return AdminBusinessList.model_validate(data or {})

    def get(self, business_id: str) -> Business:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.ADMIN_BUSINESSES, business_id),
            module="admin_businesses",
            operation="get",
        )
        return Business.model_validate(extract_object(data, "business"))

    def update_status(self, business_id: str, status: str, *, reason: str | None = None) -> Business | None:
        self._require_auth()
        body: dict[str, Any] = {"status": status}
        if reason:
            body["reason"] = reason
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.ADMIN_BUSINESSES, business_id, "status"),
            json_body=body,
            module="admin_businesses",
            operation="update_status",
            invalidate_paths=[endpoints.ADMIN_BUSINESSES],
        )
        logger.info("admin_business_status_updated", extra={"business_id": business_id, "status": status})
        if isinstance(data, dict) and data:
            return Business.model_validate(extract_object(data, "business"))
        return None

    def delete(self, business_id: str) -> None:
        self._require_auth()
        self._data(
            "DELETE",
            endpoints.resource(endpoints.ADMIN_BUSINESSES, business_id),
            module="admin_businesses",
            operation="delete",
            invalidate_paths=[endpoints.ADMIN_BUSINESSES],
        )

    def bulk_update(
        self,
        business_ids: Iterable[str],
        action: BulkAction | str,
        *,
        reason: str | None = None,
    ) -> BulkUpdateResult:
        self._require_auth()
        body: dict[str, Any] = {"business_ids": list(business_ids), "action": BulkAction(action).value}
        if reason:
            body["reason"] = reason
        data = self._data(
            "POST",
            endpoints.ADMIN_BUSINESSES_BULK,
            json_body=body,
            module="admin_businesses",
            operation="bulk_update",
            invalidate_paths=[endpoints.ADMIN_BUSINESSES],
        )
        return BulkUpdateResult.model_validate(data if isinstance(data, dict) else {})

    def stats(self) -> BusinessStats:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.ADMIN_BUSINESSES_STATS,
            module="admin_businesses",
            operation="stats",
        )
        return BusinessStats.model_validate(data if isinstance(data, dict) else {})

    def analytics_overview(self) -> dict[str, Any]:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.ADMIN_ANALYTICS_OVERVIEW,
            module="admin_businesses",
            operation="analytics_overview",
        )
        return data if isinstance(data, dict) else {}
