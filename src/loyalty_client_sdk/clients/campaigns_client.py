from __future__ import annotations

import logging
from typing import Any, Mapping

from .. import endpoints
from ..envelope import extract_object
from ..exceptions import CampaignStateError
from ..models_campaigns import (
    Campaign,
    CampaignDraft,
    CampaignListResponse,
    CampaignSendResult,
    CampaignStatus,
)
from .base import BaseClient

logger = logging.getLogger(__name__)

_LIST_FILTERS = ("status", "campaign_type", "sort", "order")


def _draft_body(draft: CampaignDraft | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(draft, CampaignDraft):
        return draft.model_dump(mode="json")
    return dict(draft)


def _state_error(code: str, message: str, campaign_id: str) -> CampaignStateError:
    return CampaignStateError.local(code, message, {"campaign_id": campaign_id})


class CampaignsClient(BaseClient):
    def list(self, filters: Mapping[str, Any] | None = None, *, page: int = 1, limit: int = 20) -> CampaignListResponse:
        self._require_auth()
        params: dict[str, Any] = {"page": page, "limit": limit}
        for key in _LIST_FILTERS:
            value = (filters or {}).get(key)
            if value not in (None, "", "all"):
                params[key] = value
        data = self._data(
            "GET",
            endpoints.NOTIFICATION_CAMPAIGNS,
            params=params,
            module="campaigns",
            operation="list",
        )
        if isinstance(data, list):
            return CampaignListResponse(campaigns=[Campaign.model_validate(row) for row in data])
        return CampaignListResponse.model_validate(data or {})

    def get(self, campaign_id: str) -> Campaign:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.NOTIFICATION_CAMPAIGNS, campaign_id),
            module="campaigns",
            operation="get",
        )
        return Campaign.model_validate(extract_object(data, "campaign"))

    def create_promotional(self, draft: CampaignDraft | Mapping[str, Any]) -> Campaign:
        self._require_auth()
        data = self._data(
            "POST",
            endpoints.NOTIFICATION_CAMPAIGNS_PROMOTIONAL,
            json_body=_draft_body(draft),
            module="campaigns",
            operation="create_promotional",
            invalidate_paths=[endpoints.NOTIFICATION_CAMPAIGNS],
        )
        campaign = Campaign.model_validate(extract_object(data, "campaign"))
        logger.info("campaign_create_success", extra={"campaign_id": campaign.campaign_id})
        return campaign

    def update(
        self,
        campaign_id: str,
        draft: CampaignDraft | Mapping[str, Any],
        *,
        current_status: str | None = None,
    ) -> Campaign:
        self._require_auth()
        if current_status == CampaignStatus.SENT.value:
            raise _state_error("CAMPAIGN_ALREADY_SENT", "Cannot update a campaign that has already been sent", campaign_id)
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.NOTIFICATION_CAMPAIGNS, campaign_id),
            json_body=_draft_body(draft),
            module="campaigns",
            operation="update",
            invalidate_paths=[endpoints.NOTIFICATION_CAMPAIGNS],
        )
        return Campaign.model_validate(extract_object(data, "campaign"))

    def delete(self, campaign_id: str, *, current_status: str | None = None) -> None:
        self._require_auth()
        if current_status == CampaignStatus.SENT.value:
            raise _state_error("CAMPAIGN_ALREADY_SENT", "Cannot delete a campaign that has already been sent", campaign_id)
        self._data(
            "DELETE",
            endpoints.resource(endpoints.NOTIFICATION_CAMPAIGNS, campaign_id),
            module="campaigns",
            operation="delete",
            invalidate_paths=[endpoints.NOTIFICATION_CAMPAIGNS],
        )

    def send(
        self,
        campaign_id: str,
        *,
        test_mode: bool = False,
        test_recipients: list[str] | None = None,
        current_status: str | None = None,
    ) -> CampaignSendResult:
        self._require_auth()
        if current_status is not None and current_status != CampaignStatus.DRAFT.value:
            raise _state_error("CAMPAIGN_NOT_DRAFT", "Only draft campaigns can be sent", campaign_id)
        body: dict[str, Any] = {"test_mode": test_mode}
        if test_recipients:
            body["test_recipients"] = list(test_recipients)
        data = self._data(
            "POST",
            endpoints.resource(endpoints.NOTIFICATION_CAMPAIGNS, campaign_id, "send"),
            json_body=body,
            module="campaigns",
            operation="send",
            invalidate_paths=[endpoints.NOTIFICATION_CAMPAIGNS],
        )
        return CampaignSendResult.model_validate(data if isinstance(data, dict) else {})
