from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BranchStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CLOSED = "closed"


class Branch(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | int | None = None
    public_id: str | None = None
    business_id: str | int | None = None
    name: str = ""
    address: str | None = None
    street_name: str | None = None
    city: str | None = None
    region: str | None = None
    district: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    manager_name: str | None = None
    manager_pin_enabled: bool | None = None
    status: str = BranchStatus.ACTIVE.value
    is_main: bool = Field(default=False, validation_alias=AliasChoices("is_main", "isMain"))
    location_id: str | None = None
    location_type: str | None = None
    location_hierarchy: str | None = None
    operating_hours: dict[str, Any] | None = None
    latitude: float | None = None
    longitude: float | None = None
    customers: int = 0
    active_offers: int = Field(default=0, validation_alias=AliasChoices("active_offers", "activeOffers"))
    monthly_revenue: float = Field(default=0, validation_alias=AliasChoices("monthly_revenue", "monthlyRevenue"))
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def secure_id(self) -> str | None:
        if self.public_id:
            return self.public_id
        return str(self.id) if self.id is not None else None


class LocationSelection(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    type: str | None = None
    name_ar: str | None = None
    name_en: str | None = None
    hierarchy: str | None = None
    display_text: str | None = Field(default=None, alias="displayText")
    region: str | None = None
    city: str | None = None
    district: str | None = None


class BranchAnalytics(BaseModel):
    model_config = ConfigDict(extra="allow")

    branch_id: str | None = None
    total_customers: int | None = None
    total_scans: int | None = None
    rewards_redeemed: int | None = None
    revenue: float | None = None
