from __future__ import annotations

from typing import Any

from .. import endpoints
from ..envelope import unwrap
from ..models_subscription import PaymentCallbackResponse, SubscriptionDetails
from .base import BaseClient


def _response(payload: Any) -> PaymentCallbackResponse:
    # these endpoints answer with a flat body, not a {success, data} envelope
    return PaymentCallbackResponse.model_validate(payload if isinstance(payload, dict) else {})


class SubscriptionClient(BaseClient):
    """Payment verification endpoints hit after the gateway redirect."""

    def payment_callback(self, payment_id: str, *, status: str | None = None, message: str | None = None) -> PaymentCallbackResponse:
        self._require_auth()
        body = {"moyasarPaymentId": payment_id, "status": status, "message": message}
        payload = self._request(
            "POST",
            endpoints.SUBSCRIPTION_PAYMENT_CALLBACK,
            json_body=body,
            module="subscription",
            operation="payment_callback",
            invalidate_paths=[endpoints.SUBSCRIPTION_DETAILS],
        )
        return _response(payload)

    def reactivate(self, payment_id: str, *, plan_type: str | None = None, location_count: int = 1) -> PaymentCallbackResponse:
        self._require_auth()
        body = {"moyasarPaymentId": payment_id, "planType": plan_type, "locationCount": location_count}
        payload = self._request(
            "POST",
            endpoints.SUBSCRIPTION_REACTIVATE,
            json_body=body,
            module="subscription",
            operation="reactivate",
            invalidate_paths=[endpoints.SUBSCRIPTION_DETAILS],
        )
        return _response(payload)

    def update_payment_method(self, payment_id: str) -> PaymentCallbackResponse:
        self._require_auth()
        payload = self._request(
            "PUT",
            endpoints.SUBSCRIPTION_PAYMENT_METHOD,
            json_body={"moyasarPaymentId": payment_id},
            module="subscription",
            operation="update_payment_method",
            invalidate_paths=[endpoints.SUBSCRIPTION_DETAILS],
        )
        return _response(payload)

    def details(self) -> SubscriptionDetails:
        self._require_auth()
        data = unwrap(
            self._request(
                "GET",
                endpoints.SUBSCRIPTION_DETAILS,
                use_get_cache=False,
                module="subscription",
                operation="details",
            )
        )
        return SubscriptionDetails.model_validate(data if isinstance(data, dict) else {})
