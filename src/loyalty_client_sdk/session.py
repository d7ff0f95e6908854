from __future__ import annotations

import logging
from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.admin_client import AdminBusinessesClient
from .clients.analytics_client import AnalyticsClient
from .clients.auth import AdminAuthClient, BusinessAuthClient
from .clients.base import ADMIN_SCOPE, BUSINESS_SCOPE
from .clients.branches_client import BranchesClient
from .clients.campaigns_client import CampaignsClient
from .clients.customers_client import CustomersClient
from .clients.health import HealthClient
from .clients.locations_client import LocationsClient
from .clients.logo_client import LogoClient
from .clients.notifications_client import NotificationsClient
from .clients.offers_client import OffersClient
from .clients.segments_client import SegmentsClient
from .clients.subscription_client import SubscriptionClient
from .config import ClientConfig
from .exceptions import ApiError
from .http_client import HttpClient
from .models import AdminLoginResult, BusinessLoginResult, SessionData, SubscriptionSnapshot
from .secure_ids import is_secure_business_id
from .tracing import TraceContext

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None
    admin_http: HttpClient | None = None
    state: SessionData | None = None
    _locations: LocationsClient | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        self.http.on_unauthorized = self._on_unauthorized
        # admin calls never clear the business identity
        self.admin_http = self.admin_http or HttpClient(config=self.config, trace=self.trace)
        if self.state is None:
            self.state = self.auth_store.load() or SessionData(env_name=self.config.env_name)

    def _on_unauthorized(self, error: ApiError) -> None:
        if not self.state or not self.state.session_token:
            return
        logger.warning("business_session_expired", extra={"code": error.code})
        self._drop_business()

    def _business_kwargs(self) -> dict[str, str | None]:
        state = self.state or SessionData()
        return {"session_token": state.session_token, "business_id": state.business_id}

    def _admin_kwargs(self) -> dict[str, str | None]:
        state = self.state or SessionData()
        return {"access_token": state.admin_access_token, "admin_session_token": state.admin_session_token}

    def business_auth_client(self) -> BusinessAuthClient:
        return BusinessAuthClient(http=self.http, **self._business_kwargs())

    def admin_auth_client(self) -> AdminAuthClient:
        return AdminAuthClient(http=self.admin_http, **self._admin_kwargs())

    def branches_client(self) -> BranchesClient:
        return BranchesClient(http=self.http, **self._business_kwargs())

    def offers_client(self) -> OffersClient:
        return OffersClient(http=self.http, **self._business_kwargs())

    def customers_client(self) -> CustomersClient:
        return CustomersClient(http=self.http, **self._business_kwargs())

    def segments_client(self) -> SegmentsClient:
        return SegmentsClient(http=self.http, **self._business_kwargs())

    def campaigns_client(self) -> CampaignsClient:
        return CampaignsClient(http=self.http, **self._business_kwargs())

    def notifications_client(self) -> NotificationsClient:
        return NotificationsClient(http=self.http, **self._business_kwargs())

    def analytics_client(self) -> AnalyticsClient:
        return AnalyticsClient(http=self.http, **self._business_kwargs())

    def logo_client(self) -> LogoClient:
        return LogoClient(http=self.http, **self._business_kwargs())

    def subscription_client(self) -> SubscriptionClient:
        return SubscriptionClient(http=self.http, **self._business_kwargs())

    def admin_businesses_client(self) -> AdminBusinessesClient:
        return AdminBusinessesClient(http=self.admin_http, **self._admin_kwargs())

    def locations_client(self) -> LocationsClient:
        # one instance per session so the search and region caches survive
        if self._locations is None:
            self._locations = LocationsClient(http=self.http)
        return self._locations

    def health_client(self) -> HealthClient:
        return HealthClient(http=self.http)

    def establish_business(self, login: BusinessLoginResult, *, user_email: str | None = None) -> SessionData:
        self.http.advance_scope(BUSINESS_SCOPE)
        business = login.business
        self.state = (self.state or SessionData()).model_copy(
            update={
                "session_token": login.session_token,
                "business_id": login.resolved_business_id,
                "business_name": business.business_name,
                "user_email": user_email or business.email,
                "business_status": business.status,
                "env_name": self.config.env_name,
            }
        )
        self.auth_store.save(self.state)
        logger.info("business_session_established", extra={"business_id": self.state.business_id})
        return self.state

    def establish_admin(self, login: AdminLoginResult) -> SessionData:
        self.admin_http.advance_scope(ADMIN_SCOPE)
        self.state = (self.state or SessionData()).model_copy(
            update={
                "admin_access_token": login.access_token,
                "admin_session_token": login.session_token,
                "admin_info": login.admin.model_dump(mode="json"),
                "env_name": self.config.env_name,
            }
        )
        self.auth_store.save(self.state)
        logger.info("admin_session_established", extra={"admin_id": login.admin.id})
        return self.state

    def store_subscription(self, snapshot: SubscriptionSnapshot | None, *, business_status: str | None = None) -> SessionData:
        update: dict[str, object] = {}
        if snapshot is not None:
            update["subscription"] = snapshot
        if business_status:
            update["business_status"] = business_status
        self.state = (self.state or SessionData()).model_copy(update=update)
        self.auth_store.save(self.state)
        return self.state

    def _drop_business(self) -> None:
        self.http.advance_scope(BUSINESS_SCOPE)
        self.state = (self.state or SessionData()).model_copy(
            update={
                "session_token": None,
                "business_id": None,
                "business_name": None,
                "user_email": None,
                "business_status": None,
                "subscription": None,
            }
        )
        self.auth_store.clear_business()

    def logout_business(self) -> None:
        self._drop_business()
        logger.info("business_logout")

    def logout_admin(self) -> None:
        """Best-effort server logout, then drop the admin identity locally."""
        if self.state and self.state.admin_access_token:
            try:
                self.admin_auth_client().logout()
            except ApiError as exc:
                logger.warning("admin_logout_failed", extra={"code": exc.code})
        self.admin_http.advance_scope(ADMIN_SCOPE)
        self.state = (self.state or SessionData()).model_copy(
            update={"admin_access_token": None, "admin_session_token": None, "admin_info": None}
        )
        self.auth_store.clear_admin()
        logger.info("admin_logout")

    def is_business_authenticated(self) -> bool:
        state = self.state or SessionData()
        return bool(state.session_token) and is_secure_business_id(state.business_id)

    def is_admin_authenticated(self) -> bool:
        state = self.state or SessionData()
        return bool(state.admin_access_token)
