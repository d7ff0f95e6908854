from .admin_businesses import AdminBusinessesService
from .auth_service import AuthService
from .branches_service import BranchesService
from .campaign_builder import CampaignBuilder
from .dashboard_overview import DashboardOverviewService
from .errors import ServiceError, normalize_error
from .location_selection import LocationSelector
from .logo_upload import LogoUploadService
from .notification_composer import NotificationComposer, NotificationSendResult
from .payment_verification import PaymentResult, PaymentVerifier
from .registration import RegistrationWizard

__all__ = [
    "AdminBusinessesService",
    "AuthService",
    "BranchesService",
    "CampaignBuilder",
    "DashboardOverviewService",
    "LocationSelector",
    "LogoUploadService",
    "NotificationComposer",
    "NotificationSendResult",
    "PaymentResult",
    "PaymentVerifier",
    "RegistrationWizard",
    "ServiceError",
    "normalize_error",
]
