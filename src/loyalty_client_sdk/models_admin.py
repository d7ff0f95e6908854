from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import Business


class BulkAction(str, Enum):
    APPROVE = "approve"
    SUSPEND = "suspend"
    ACTIVATE = "activate"


class AdminBusinessFilters(BaseModel):
    status: str = "all"
    region: str = "all"
    business_type: str = "all"
    search: str = ""

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.status != "all":
            params["status"] = self.status
        if self.search:
            params["search"] = self.search
        if self.region != "all":
            params["region"] = self.region
        if self.business_type != "all":
            params["business_type"] = self.business_type
        return params


class AdminBusinessList(BaseModel):
    model_config = ConfigDict(extra="allow")

    businesses: list[Business] = Field(default_factory=list)
    pagination: dict[str, Any] = Field(default_factory=dict)


class BulkUpdateResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    updated_businesses: list[Any] = Field(default_factory=list)
    total_updated: int = 0
    total_requested: int = 0


class BusinessStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_businesses: int | None = None
    active_businesses: int | None = None
    pending_businesses: int | None = None
    suspended_businesses: int | None = None
