from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from loyalty_client_sdk import ApiSession, Campaign, ValidationResult
from loyalty_client_sdk.campaign_validation import (
    CAMPAIGN_STEPS,
    truncate_body,
    truncate_header,
    validate_campaign_step,
)
from loyalty_client_sdk.models_campaigns import Segment, TargetType
from loyalty_client_sdk.models_offers import Offer

from .errors import ServiceError, issues_text, normalize_error

logger = logging.getLogger(__name__)

FIELD_LIMITERS: dict[str, Callable[[str | None], str]] = {
    "message_header": truncate_header,
    "message_body": truncate_body,
}


def default_form() -> dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "campaign_type": "",
        "target_type": TargetType.ALL_CUSTOMERS.value,
        "target_segment_id": None,
        "target_criteria": {},
        "linked_offer_id": None,
        "message_header": "",
        "message_body": "",
        "channels": ["wallet"],
        "send_immediately": True,
        "scheduled_at": None,
        "tags": [],
    }


def form_from_campaign(campaign: Campaign) -> dict[str, Any]:
    form = default_form()
    template = campaign.message_template
    form.update(
        {
            "name": campaign.name or "",
            "description": campaign.description or "",
            "campaign_type": campaign.campaign_type or campaign.type or "",
            "target_type": campaign.target_type or TargetType.ALL_CUSTOMERS.value,
            "target_segment_id": campaign.target_segment_id,
            "target_criteria": dict(campaign.target_criteria or {}),
            "linked_offer_id": campaign.linked_offer_id,
            "message_header": truncate_header(template.header if template else ""),
            "message_body": truncate_body(template.body if template else ""),
            "channels": list(campaign.channels or ["wallet"]),
            "send_immediately": campaign.send_immediately if campaign.send_immediately is not None else True,
            "scheduled_at": campaign.scheduled_at,
            "tags": list(campaign.tags or []),
        }
    )
    return form


class CampaignBuilder:
    """Four-step promotional campaign wizard: type, target, message, schedule."""

    def __init__(
        self,
        session: ApiSession,
        *,
        campaign: Campaign | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.session = session
        self.editing = campaign
        self.now = now
        self.step = 1
        self.errors: dict[str, str] = {}
        self.form = form_from_campaign(campaign) if campaign else default_form()

    @property
    def is_edit(self) -> bool:
        return self.editing is not None

    @property
    def campaign_id(self) -> str | None:
        if self.editing is None:
            return None
        return self.editing.campaign_id or (str(self.editing.id) if self.editing.id is not None else None)

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        if name == "campaign_type" and self.is_edit:
            raise ServiceError(message="Campaign type cannot be changed while editing", code="CAMPAIGN_TYPE_LOCKED")
        limiter = FIELD_LIMITERS.get(name)
        self.form[name] = limiter(value) if limiter else value
        self.errors.pop(name, None)
        if name == "send_immediately" and value:
            self.form["scheduled_at"] = None
            self.errors.pop("scheduled_at", None)

    def update(self, **fields: Any) -> None:
        for name, value in fields.items():
            self.set_field(name, value)

    def validate(self, step: int | None = None) -> ValidationResult:
        check = validate_campaign_step(
            step or self.step,
            self.form,
            now=self.now() if self.now else None,
        )
        self.errors = check.by_field()
        return check

    def next(self) -> bool:
        if not self.validate().ok:
            return False
        self.step = min(self.step + 1, CAMPAIGN_STEPS)
        return True

    def back(self) -> None:
        self.step = max(self.step - 1, 1)
        self.errors = {}

    def payload(self) -> dict[str, Any]:
        form = self.form
        return {
            "name": form["name"],
            "description": form["description"],
            "campaign_type": form["campaign_type"],
            "message_header": form["message_header"],
            "message_body": form["message_body"],
            "target_type": form["target_type"],
            "target_segment_id": form["target_segment_id"],
            "target_criteria": form["target_criteria"],
            "linked_offer_id": form["linked_offer_id"],
            "channels": form["channels"],
            "send_immediately": form["send_immediately"],
            "scheduled_at": form["scheduled_at"],
            "tags": form["tags"],
        }

    def submit(self) -> Campaign:
        for step in range(1, CAMPAIGN_STEPS + 1):
            check = self.validate(step)
            if not check.ok:
                self.step = step
                raise ServiceError(
                    message=check.first_message or "Invalid campaign",
                    details=issues_text(check.issues),
                    code="CLIENT_VALIDATION",
                )
        client = self.session.campaigns_client()
        try:
            if self.is_edit:
                campaign = client.update(
                    self.campaign_id or "",
                    self.payload(),
                    current_status=self.editing.status if self.editing else None,
                )
            else:
                campaign = client.create_promotional(self.payload())
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info(
            "campaign_submit_success",
            extra={"campaign_id": campaign.campaign_id, "mode": "edit" if self.is_edit else "create"},
        )
        return campaign

    def reset(self) -> None:
        self.editing = None
        self.step = 1
        self.errors = {}
        self.form = default_form()

    def offer_choices(self) -> list[Offer]:
        try:
            return self.session.offers_client().list(active_only=True)
        except Exception as exc:
            raise normalize_error(exc) from exc

    def segment_choices(self) -> list[Segment]:
        try:
            return self.session.segments_client().list(active_only=True)
        except Exception as exc:
            raise normalize_error(exc) from exc
