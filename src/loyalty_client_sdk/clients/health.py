from __future__ import annotations

from typing import Any

from .. import endpoints
from .base import BaseClient


class HealthClient(BaseClient):
    def health(self) -> dict[str, Any]:
        payload = self._request("GET", endpoints.HEALTH, use_get_cache=False, module="health", operation="health")
        return payload if isinstance(payload, dict) else {"status": payload}
