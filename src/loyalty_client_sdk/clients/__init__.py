from .admin_client import AdminBusinessesClient
from .analytics_client import AnalyticsClient
from .auth import AdminAuthClient, BusinessAuthClient
from .base import AdminBaseClient, BaseClient
from .branches_client import BranchesClient
from .campaigns_client import CampaignsClient
from .customers_client import CustomersClient
from .health import HealthClient
from .locations_client import LocationsClient, format_location_display
from .logo_client import LogoClient
from .notifications_client import NotificationsClient
from .offers_client import OffersClient
from .segments_client import SegmentsClient
from .subscription_client import SubscriptionClient

__all__ = [
    "AdminAuthClient",
    "AdminBaseClient",
    "AdminBusinessesClient",
    "AnalyticsClient",
    "BaseClient",
    "BranchesClient",
    "BusinessAuthClient",
    "CampaignsClient",
    "CustomersClient",
    "HealthClient",
    "LocationsClient",
    "LogoClient",
    "NotificationsClient",
    "OffersClient",
    "SegmentsClient",
    "SubscriptionClient",
    "format_location_display",
]
