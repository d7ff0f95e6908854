from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .models import SubscriptionSnapshot


class PaymentFlow(str, Enum):
    CALLBACK = "callback"
    REACTIVATION = "reactivation"
    PAYMENT_METHOD_UPDATE = "payment_method_update"


class PaymentCallbackParams(BaseModel):
    """Query parameters the payment gateway appends to the redirect URL."""

    payment_id: str | None = None
    status: str | None = None
    message: str | None = None
    reactivation: bool = False
    update_payment: bool = False
    plan: str | None = None
    locations: int = 1

    @classmethod
    def from_query(cls, query: Mapping[str, str | None]) -> "PaymentCallbackParams":
        try:
            locations = int(query.get("locations") or 1)
        except ValueError:
            locations = 1
        return cls(
            payment_id=query.get("id") or None,
            status=query.get("status") or None,
            message=query.get("message") or None,
            reactivation=query.get("reactivation") == "true",
            update_payment=query.get("update_payment") == "true",
            plan=query.get("plan") or None,
            locations=locations or 1,
        )

    @property
    def flow(self) -> PaymentFlow:
        if self.update_payment:
            return PaymentFlow.PAYMENT_METHOD_UPDATE
        if self.reactivation:
            return PaymentFlow.REACTIVATION
        return PaymentFlow.CALLBACK


class Subscription(BaseModel):
    model_config = ConfigDict(extra="allow")

    plan_type: str | None = None
    status: str | None = None
    amount: float | None = None
    next_billing_date: str | None = None
    retry_count: int | None = None
    grace_period_end: str | None = None
    next_retry_date: str | None = None


class PaymentCallbackResponse(BaseModel):
    """Top-level success body of the subscription payment endpoints."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: str | None = None
    error: str | None = None
    data: dict[str, Any] | None = None
    subscription: Subscription | None = None
    limits: dict[str, Any] = Field(default_factory=dict)
    usage: dict[str, Any] = Field(default_factory=dict)

    def normalized_subscription(self) -> SubscriptionSnapshot | None:
        if self.subscription is None:
            return None
        return SubscriptionSnapshot(
            current_plan=self.subscription.plan_type,
            subscription_status=self.subscription.status,
            trial_info=None,
            limits=self.limits or {},
            usage=self.usage or {},
            retry_count=self.subscription.retry_count or 0,
            grace_period_end=self.subscription.grace_period_end,
            next_retry_date=self.subscription.next_retry_date,
        )


class SubscriptionDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    subscription: Subscription | None = None
    limits: dict[str, Any] = Field(default_factory=dict)
    usage: dict[str, Any] = Field(default_factory=dict)
