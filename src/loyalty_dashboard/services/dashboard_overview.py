from __future__ import annotations

import logging

from loyalty_client_sdk import ApiSession
from loyalty_client_sdk.models_analytics import DashboardOverview

from ..ui.view_state import ViewState, resolve_state
from .errors import normalize_error

logger = logging.getLogger(__name__)


class DashboardOverviewService:
    def __init__(self, session: ApiSession, *, language: str = "ar") -> None:
        self.session = session
        self.language = language
        self.overview: DashboardOverview | None = None
        self.error: str | None = None
        self.trace_id: str | None = None

    def load(self) -> DashboardOverview:
        try:
            self.overview = self.session.analytics_client().dashboard_overview()
        except Exception as exc:
            failure = normalize_error(exc)
            self.error = failure.message
            self.trace_id = failure.trace_id
            raise failure from exc
        self.error = None
        logger.info("dashboard_overview_loaded", extra={"activity": len(self.overview.activity)})
        return self.overview

    def view_state(self, *, is_loading: bool = False) -> ViewState:
        return resolve_state(
            authenticated=self.session.is_business_authenticated(),
            is_loading=is_loading,
            error=self.error,
            has_data=self.overview is not None,
            language=self.language,
            trace_id=self.trace_id,
        )
