from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CampaignType(str, Enum):
    NEW_OFFER_ANNOUNCEMENT = "new_offer_announcement"
    CUSTOM_PROMOTION = "custom_promotion"
    SEASONAL_CAMPAIGN = "seasonal_campaign"


class TargetType(str, Enum):
    ALL_CUSTOMERS = "all_customers"
    SEGMENT = "segment"
    CUSTOM_FILTER = "custom_filter"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SENT = "sent"


class MessageTemplate(BaseModel):
    model_config = ConfigDict(extra="allow")

    header: str | None = None
    body: str | None = None


class Campaign(BaseModel):
    model_config = ConfigDict(extra="allow")

    campaign_id: str | None = None
    id: int | str | None = None
    business_id: str | None = None
    name: str = ""
    description: str | None = None
    type: str | None = None
    campaign_type: str | None = None
    status: str | None = None
    channels: list[str] = Field(default_factory=list)
    target_type: str | None = None
    target_segment_id: str | None = None
    target_criteria: dict[str, Any] | None = None
    linked_offer_id: str | None = None
    message_template: MessageTemplate | None = None
    send_immediately: bool | None = None
    scheduled_at: str | None = None
    tags: list[str] = Field(default_factory=list)
    total_recipients: int | None = None
    total_sent: int | None = None
    total_delivered: int | None = None
    total_failed: int | None = None
    created_at: str | None = None

    @field_validator("channels", "tags", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        # nullable JSON columns
        return [] if value is None else value


class CampaignDraft(BaseModel):
    """Payload sent when creating or updating a promotional campaign."""

    name: str
    description: str = ""
    campaign_type: CampaignType
    message_header: str
    message_body: str
    target_type: TargetType = TargetType.ALL_CUSTOMERS
    target_segment_id: str | None = None
    target_criteria: dict[str, Any] = Field(default_factory=dict)
    linked_offer_id: str | None = None
    channels: list[str] = Field(default_factory=lambda: ["wallet"])
    send_immediately: bool = True
    scheduled_at: str | None = None
    tags: list[str] = Field(default_factory=list)


class CampaignPagination(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_page: int = 1
    total_pages: int = 0
    total_campaigns: int = 0
    per_page: int = 20
    has_next_page: bool = False
    has_prev_page: bool = False


class CampaignListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    campaigns: list[Campaign] = Field(default_factory=list)
    pagination: CampaignPagination = Field(default_factory=CampaignPagination)


class CampaignSendResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    campaign_id: str | None = None
    total_recipients: int | None = None
    total_sent: int | None = None
    total_failed: int | None = None
    test_mode: bool | None = None


class Segment(BaseModel):
    model_config = ConfigDict(extra="allow")

    segment_id: str
    business_id: str | None = None
    name: str = ""
    description: str | None = None
    color: str | None = None
    type: str | None = None
    is_predefined: bool | None = None
    auto_update: bool | None = None
    criteria: dict[str, Any] | None = None
    customer_count: int | None = None
    last_calculated_at: str | None = None
    is_active: bool = True
    tags: list[str] | None = None
