from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class NotificationType(str, Enum):
    CUSTOM = "custom"
    OFFER = "offer"
    REMINDER = "reminder"
    BIRTHDAY = "birthday"
    MILESTONE = "milestone"
    REENGAGEMENT = "reengagement"


class WalletSendResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = True
    customer_id: str | None = None
    passes_notified: int | None = None
    message: str | None = None


class BulkRecipient(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer_id: str | None = Field(default=None, validation_alias=AliasChoices("customerId", "customer_id"))
    success: bool = False
    error: str | None = None
    passes_sent: int | None = None

    @field_validator("customer_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class BulkSendResult(BaseModel):
    """Per-customer outcome of one bulk wallet push; ``details`` lists every recipient."""

    model_config = ConfigDict(extra="allow")

    success: bool = True
    total_customers: int | None = None
    successful_customers: int | None = None
    failed_customers: int | None = None
    total_passes: int | None = None
    successful_passes: int | None = None
    failed_passes: int | None = None
    details: list[BulkRecipient] = Field(default_factory=list)

    @property
    def failures(self) -> list[BulkRecipient]:
        return [row for row in self.details if not row.success]


class NotificationLog(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    campaign_id: str | None = None
    customer_id: str | None = None
    channel: str | None = None
    status: str | None = None
    subject: str | None = None
    message_content: str | None = None
    sent_at: str | None = None
    created_at: str | None = None


class NotificationLogList(BaseModel):
    model_config = ConfigDict(extra="allow")

    logs: list[NotificationLog] = Field(default_factory=list)
    pagination: dict[str, Any] = Field(default_factory=dict)
