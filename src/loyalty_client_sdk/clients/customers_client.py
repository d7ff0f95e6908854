from __future__ import annotations

from typing import Any

from .. import endpoints
from ..envelope import extract_list, extract_object
from ..models_offers import Customer, CustomerAnalytics, CustomerProgress
from .base import BaseClient


class CustomersClient(BaseClient):
    def list(self, **filters: Any) -> list[Customer]:
        self._require_auth()
        params = {key: value for key, value in filters.items() if value not in (None, "", "all")}
        data = self._data(
            "GET",
            endpoints.CUSTOMERS,
            params=params or None,
            module="customers",
            operation="list",
        )
        return [Customer.model_validate(row) for row in extract_list(data, "customers")]

    def get(self, customer_id: str) -> Customer:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.CUSTOMERS, customer_id),
            module="customers",
            operation="get",
        )
        return Customer.model_validate(extract_object(data, "customer"))

    def progress(self, customer_id: str) -> list[CustomerProgress]:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.CUSTOMERS, customer_id, "progress"),
            module="customers",
            operation="progress",
        )
        return [CustomerProgress.model_validate(row) for row in extract_list(data, "progress")]

    def analytics_overview(self) -> CustomerAnalytics:
        self._require_auth()
        data = self._data("GET", endpoints.CUSTOMERS_ANALYTICS, module="customers", operation="analytics")
        if not isinstance(data, dict):
            raise ValueError("Expected customer analytics response to be a JSON object")
        return CustomerAnalytics.model_validate(data)
