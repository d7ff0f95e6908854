from __future__ import annotations

import logging
from typing import Iterable

from loyalty_client_sdk import ApiSession, Business
from loyalty_client_sdk.models_admin import AdminBusinessFilters, BulkAction, BulkUpdateResult, BusinessStats

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

STATUS_BADGES = {
    "active": "Active - نشط",
    "pending": "Pending - معلق",
    "suspended": "Suspended - معلق",
}

REGION_LABELS = {
    "Central": "Central - الوسطى",
    "Western": "Western - الغربية",
    "Eastern": "Eastern - الشرقية",
}

BUSINESS_TYPE_OPTIONS = ("Restaurant & Cafe", "Coffee Shop", "Bakery & Sweets")


def status_badge(status: str | None) -> str:
    return STATUS_BADGES.get(status or "", STATUS_BADGES["pending"])


def region_label(region: str | None) -> str:
    if not region:
        return ""
    for key, label in REGION_LABELS.items():
        if region.startswith(key):
            return label
    return region


class AdminBusinessesService:
    """Platform-admin business table: filters, row selection, status changes."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.filters = AdminBusinessFilters()
        self.businesses: list[Business] = []
        self.selected: set[str] = set()

    def set_filters(self, **values: str) -> AdminBusinessFilters:
        self.filters = self.filters.model_copy(update=values)
        return self.filters

    def load(self) -> list[Business]:
        try:
            listing = self.session.admin_businesses_client().list(self.filters)
        except Exception as exc:
            raise normalize_error(exc) from exc
        self.businesses = listing.businesses
        known = {business.secure_id for business in self.businesses}
        self.selected &= known
        logger.info("admin_businesses_loaded", extra={"count": len(self.businesses)})
        return self.businesses

    def stats(self) -> BusinessStats:
        try:
            return self.session.admin_businesses_client().stats()
        except Exception as exc:
            raise normalize_error(exc) from exc

    def toggle(self, business_id: str) -> set[str]:
        if business_id in self.selected:
            self.selected.discard(business_id)
        else:
            self.selected.add(business_id)
        return self.selected

    def toggle_all(self) -> set[str]:
        ids = {business.secure_id for business in self.businesses if business.secure_id}
        if ids and self.selected == ids:
            self.selected = set()
        else:
            self.selected = ids
        return self.selected

    def rows(self) -> list[dict[str, object]]:
        return [
            {
                "id": business.secure_id,
                "business_name": business.business_name,
                "business_name_ar": business.business_name_ar,
                "business_type": business.business_type,
                "region": region_label(business.region),
                "status": status_badge(business.status),
                "selected": business.secure_id in self.selected,
            }
            for business in self.businesses
        ]

    def update_status(self, business_id: str, status: str, *, reason: str | None = None) -> None:
        try:
            self.session.admin_businesses_client().update_status(business_id, status, reason=reason)
        except Exception as exc:
            raise normalize_error(exc) from exc
        self.load()

    def bulk(self, action: BulkAction | str, *, business_ids: Iterable[str] | None = None, reason: str | None = None) -> BulkUpdateResult:
        ids = sorted(business_ids if business_ids is not None else self.selected)
        if not ids:
            raise ServiceError(message="No businesses selected", code="CLIENT_VALIDATION")
        try:
            result = self.session.admin_businesses_client().bulk_update(ids, action, reason=reason)
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("admin_bulk_update", extra={"action": BulkAction(action).value, "count": len(ids)})
        self.selected = set()
        self.load()
        return result

    def bulk_approve(self) -> BulkUpdateResult:
        return self.bulk(BulkAction.APPROVE)
