from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BusinessStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


class SubscriptionSnapshot(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_plan: str | None = None
    subscription_status: str | None = None
    trial_info: dict[str, Any] | None = None
    limits: dict[str, Any] = Field(default_factory=dict)
    usage: dict[str, Any] = Field(default_factory=dict)
    retry_count: int = 0
    grace_period_end: str | None = None
    next_retry_date: str | None = None


class SessionData(BaseModel):
    """Persisted dashboard identity for the business owner and platform admin."""

    session_token: str | None = None
    business_id: str | None = None
    business_name: str | None = None
    user_email: str | None = None
    business_status: str | None = None
    admin_access_token: str | None = None
    admin_session_token: str | None = None
    admin_info: dict[str, Any] | None = None
    subscription: SubscriptionSnapshot | None = None
    env_name: str | None = None


class Business(BaseModel):
    model_config = ConfigDict(extra="allow")

    public_id: str | None = None
    id: str | int | None = None
    business_name: str | None = None
    business_name_ar: str | None = None
    email: str | None = None
    phone: str | None = None
    owner_name: str | None = None
    business_type: str | None = None
    region: str | None = None
    city: str | None = None
    status: str | None = None
    logo_url: str | None = None
    created_at: str | None = None

    @property
    def secure_id(self) -> str | None:
        if self.public_id:
            return self.public_id
        return str(self.id) if self.id is not None else None


class BusinessLoginResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    business: Business
    session_token: str
    business_id: str | None = None

    @property
    def resolved_business_id(self) -> str | None:
        return self.business_id or self.business.secure_id


class BusinessCategory(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str
    name: str | None = None
    name_en: str | None = Field(default=None, alias="nameEn")
    name_ar: str | None = None


class AdminInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    email: str | None = None
    full_name: str | None = None
    role: str | None = None


class AdminLoginResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str
    session_token: str
    admin: AdminInfo = Field(default_factory=AdminInfo)


class RegistrationRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    business_name: str
    business_name_ar: str | None = None
    business_type: str
    license_number: str | None = None
    description: str | None = None
    region: str | None = None
    city: str | None = None
    district: str | None = None
    address: str | None = None
    phone: str
    email: str
    owner_name: str
    owner_name_ar: str | None = None
    owner_id: str | None = None
    owner_phone: str | None = None
    owner_email: str | None = None
    password: str
    location_data: dict[str, Any] | None = None
