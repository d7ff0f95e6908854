from __future__ import annotations

from typing import Any, Mapping

from .. import endpoints
from ..envelope import extract_list, extract_object
from ..models_analytics import OfferAnalytics
from ..models_offers import Offer
from .base import BaseClient


class OffersClient(BaseClient):
    def list(self, *, active_only: bool = False) -> list[Offer]:
        self._require_auth()
        data = self._data("GET", endpoints.MY_OFFERS, module="offers", operation="list")
        offers = [Offer.model_validate(row) for row in extract_list(data, "offers")]
        if active_only:
            return [offer for offer in offers if offer.active]
        return offers

    def create(self, payload: Mapping[str, Any]) -> Offer:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.MY_OFFERS,
            json_body=dict(payload),
            module="offers",
            operation="create",
            invalidate_paths=[endpoints.MY_OFFERS],
        )
        return Offer.model_validate(extract_object(data, "offer"))

    def update(self, offer_id: str, payload: Mapping[str, Any]) -> Offer:
        self._require_auth()
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.MY_OFFERS, offer_id),
            json_body=dict(payload),
            module="offers",
            operation="update",
            invalidate_paths=[endpoints.MY_OFFERS],
        )
        return Offer.model_validate(extract_object(data, "offer"))

    def delete(self, offer_id: str) -> None:
        self._require_auth()
        self._data(
            "DELETE",
            endpoints.resource(endpoints.MY_OFFERS, offer_id),
            module="offers",
            operation="delete",
            invalidate_paths=[endpoints.MY_OFFERS],
        )

    def toggle_status(self, offer_id: str) -> Offer:
        self._require_auth()
        data = self._data(
            "PATCH",
            endpoints.resource(endpoints.MY_OFFERS, offer_id, "status"),
            module="offers",
            operation="toggle_status",
            invalidate_paths=[endpoints.MY_OFFERS],
        )
        return Offer.model_validate(extract_object(data, "offer"))

    def analytics(self, offer_id: str) -> OfferAnalytics:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.MY_OFFERS, offer_id, "analytics"),
            module="offers",
            operation="analytics",
        )
        if not isinstance(data, dict):
            raise ValueError("Expected offer analytics response to be a JSON object")
        return OfferAnalytics.model_validate(data)
