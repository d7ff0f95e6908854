from __future__ import annotations

from typing import Any, Iterable

from .. import endpoints
from ..envelope import unwrap
from ..models_notifications import BulkSendResult, NotificationLogList, WalletSendResult
from .base import BaseClient


def _send_result(data: Any, customer_id: str) -> WalletSendResult:
    payload = dict(data) if isinstance(data, dict) else {}
    payload.setdefault("customer_id", customer_id)
    return WalletSendResult.model_validate(payload)


class NotificationsClient(BaseClient):
    """Wallet push notifications and the notification log."""

    def _send(self, path: str, body: dict[str, Any], operation: str) -> Any:
        self._require_auth()
        return self._data("POST", path, json_body=body, module="notifications", operation=operation)

    def send_offer(
        self,
        customer_id: str,
        offer_id: str,
        *,
        offer_title: str,
        offer_description: str,
    ) -> WalletSendResult:
        body = {
            "customer_id": customer_id,
            "offer_id": offer_id,
            "offer_title": offer_title,
            "offer_description": offer_description,
        }
        return _send_result(self._send(endpoints.WALLET_NOTIFICATION_OFFER, body, "send_offer"), customer_id)

    def send_reminder(self, customer_id: str, offer_id: str) -> WalletSendResult:
        body = {"customer_id": customer_id, "offer_id": offer_id}
        return _send_result(self._send(endpoints.WALLET_NOTIFICATION_REMINDER, body, "send_reminder"), customer_id)

    def send_birthday(self, customer_id: str) -> WalletSendResult:
        body = {"customer_id": customer_id}
        return _send_result(self._send(endpoints.WALLET_NOTIFICATION_BIRTHDAY, body, "send_birthday"), customer_id)

    def send_milestone(self, customer_id: str, *, milestone_title: str, milestone_message: str = "") -> WalletSendResult:
        body = {
            "customer_id": customer_id,
            "milestone_title": milestone_title,
            "milestone_message": milestone_message,
        }
        return _send_result(self._send(endpoints.WALLET_NOTIFICATION_MILESTONE, body, "send_milestone"), customer_id)

    def send_reengagement(self, customer_id: str, *, incentive_header: str, incentive_body: str) -> WalletSendResult:
        body = {
            "customer_id": customer_id,
            "incentive_header": incentive_header,
            "incentive_body": incentive_body,
        }
        return _send_result(
            self._send(endpoints.WALLET_NOTIFICATION_REENGAGEMENT, body, "send_reengagement"),
            customer_id,
        )

    def send_bulk(
        self,
        customer_ids: Iterable[str],
        *,
        message_header: str,
        message_body: str,
        message_type: str = "custom",
    ) -> BulkSendResult:
        self._require_auth()
        body = {
            "customer_ids": list(customer_ids),
            "message_header": message_header,
            "message_body": message_body,
            "message_type": message_type,
        }
        payload = self._request(
            "POST",
            endpoints.WALLET_NOTIFICATION_BULK,
            json_body=body,
            module="notifications",
            operation="send_bulk",
        )
        # success is false when no recipient was reached; the per-customer details still apply
        if isinstance(payload, dict) and payload.get("success") is False and isinstance(payload.get("data"), dict):
            return BulkSendResult.model_validate(payload["data"])
        data = unwrap(payload, trace_id=self.http.trace.trace_id)
        return BulkSendResult.model_validate(data if isinstance(data, dict) else {})

    def send_custom(
        self,
        wallet_pass_id: str | int,
        *,
        message_header: str,
        message_body: str,
        message_type: str = "custom",
    ) -> WalletSendResult:
        """Push a free-form message to one wallet pass rather than a customer."""
        body = {
            "wallet_pass_id": wallet_pass_id,
            "message_header": message_header,
            "message_body": message_body,
            "message_type": message_type,
        }
        data = self._send(endpoints.WALLET_NOTIFICATION_CUSTOM, body, "send_custom")
        return WalletSendResult.model_validate(data if isinstance(data, dict) else {})

    def logs(self, *, page: int = 1, limit: int = 20, **filters: Any) -> NotificationLogList:
        self._require_auth()
        params: dict[str, Any] = {"page": page, "limit": limit}
        params.update({key: value for key, value in filters.items() if value not in (None, "", "all")})
        data = self._data(
            "GET",
            endpoints.NOTIFICATION_LOGS,
            params=params,
            module="notifications",
            operation="logs",
        )
        if isinstance(data, list):
            return NotificationLogList.model_validate({"logs": data})
        return NotificationLogList.model_validate(data or {})

    def analytics(self, **params: Any) -> dict[str, Any]:
        self._require_auth()
        query = {key: value for key, value in params.items() if value not in (None, "")}
        data = self._data(
            "GET",
            endpoints.NOTIFICATION_ANALYTICS,
            params=query or None,
            module="notifications",
            operation="analytics",
        )
        return data if isinstance(data, dict) else {}
