from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Offer(BaseModel):
    model_config = ConfigDict(extra="allow")

    public_id: str | None = None
    id: int | str | None = None
    business_id: str | None = None
    title: str = ""
    description: str | None = None
    branch: str | None = None
    type: str | None = None
    stamps_required: int | None = None
    status: str | None = None
    is_active: bool | None = None
    is_time_limited: bool | None = None
    start_date: str | None = None
    end_date: str | None = None
    customers: int | None = None
    redeemed: int | None = None

    @property
    def secure_id(self) -> str | None:
        if self.public_id:
            return self.public_id
        return str(self.id) if self.id is not None else None

    @property
    def active(self) -> bool:
        if self.is_active is not None:
            return self.is_active
        return self.status == "active"


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer_id: str
    first_name: str | None = None
    last_name: str | None = None
    name: str | None = None
    status: str | None = None
    lifecycle_stage: str | None = None
    total_visits: int | None = None
    total_spent: float | None = None
    last_activity_date: str | None = None
    wallet_pass_id: str | None = None


class CustomerProgress(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer_id: str | None = None
    offer_id: str | None = None
    current_stamps: int | None = None
    max_stamps: int | None = None
    is_completed: bool | None = None
    rewards_claimed: int | None = None


class CustomerAnalytics(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_customers: int | None = None
    active_customers: int | None = None
    new_customers: int | None = None
    lifecycle_breakdown: dict[str, Any] | None = None
