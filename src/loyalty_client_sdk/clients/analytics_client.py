from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait

from .. import endpoints
from ..envelope import extract_list
from ..models_analytics import ActivityItem, DashboardAnalytics, DashboardOverview
from .base import BaseClient


class AnalyticsClient(BaseClient):
    def dashboard(self) -> DashboardAnalytics:
        self._require_auth()
        data = self._data("GET", endpoints.MY_ANALYTICS, module="analytics", operation="dashboard")
        return DashboardAnalytics.model_validate(data if isinstance(data, dict) else {})

    def activity(self, *, limit: int | None = None) -> list[ActivityItem]:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.MY_ACTIVITY,
            params={"limit": limit} if limit else None,
            module="analytics",
            operation="activity",
        )
        return [ActivityItem.model_validate(row) for row in extract_list(data, "activity")]

    def dashboard_overview(self) -> DashboardOverview:
        """Fetch analytics and activity together; the first failure is raised after both settle."""
        self._require_auth()
        with ThreadPoolExecutor(max_workers=2) as pool:
            analytics_future = pool.submit(self.dashboard)
            activity_future = pool.submit(self.activity)
            wait([analytics_future, activity_future])
        for future in (analytics_future, activity_future):
            error = future.exception()
            if error is not None:
                raise error
        return DashboardOverview(analytics=analytics_future.result(), activity=activity_future.result())
