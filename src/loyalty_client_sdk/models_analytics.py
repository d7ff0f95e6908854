from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DashboardAnalytics(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_customers: int | None = None
    active_offers: int | None = None
    total_scans: int | None = None
    rewards_redeemed: int | None = None
    growth_percentage: str | float | None = None


class ActivityItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    type: str | None = None
    description: str | None = None
    customer_name: str | None = None
    offer_title: str | None = None
    timestamp: str | None = None
    created_at: str | None = None


class DashboardOverview(BaseModel):
    analytics: DashboardAnalytics
    activity: list[ActivityItem] = Field(default_factory=list)


class OfferAnalytics(BaseModel):
    model_config = ConfigDict(extra="allow")

    offer_id: str | None = None
    total_customers: int | None = None
    completion_rate: float | None = None
    rewards_redeemed: int | None = None
    daily_scans: list[dict[str, Any]] | None = None


class LogoInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    has_logo: bool = False
    logo_url: str | None = None
    logo_filename: str | None = None
    logo_file_size: int | None = None
    logo_uploaded_at: str | None = None
