from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .envelope import unwrap
from .exceptions import (
    ApiError,
    AuthError,
    BranchDeleteRefusedError,
    CampaignStateError,
    ConflictError,
    EnvelopeError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    AdminInfo,
    AdminLoginResult,
    Business,
    BusinessLoginResult,
    RegistrationRequest,
    SessionData,
    SubscriptionSnapshot,
)
from .models_branches import Branch, BranchStatus
from .models_campaigns import Campaign, CampaignDraft, CampaignStatus, CampaignType, TargetType
from .models_notifications import NotificationType
from .registration_validation import normalize_digits, validate_cr_number, validate_email, validate_saudi_phone
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error
from .validation import ClientValidationError, ValidationIssue, ValidationResult

__all__ = [
    "AdminInfo",
    "AdminLoginResult",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "Branch",
    "BranchDeleteRefusedError",
    "BranchStatus",
    "Business",
    "BusinessLoginResult",
    "Campaign",
    "CampaignDraft",
    "CampaignStateError",
    "CampaignStatus",
    "CampaignType",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "ConflictError",
    "EnvelopeError",
    "ForbiddenError",
    "HttpClient",
    "NotFoundError",
    "NotificationType",
    "RateLimitError",
    "RegistrationRequest",
    "ServerError",
    "SessionData",
    "SubscriptionSnapshot",
    "TargetType",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "load_config",
    "normalize_digits",
    "to_user_facing_error",
    "unwrap",
    "validate_cr_number",
    "validate_email",
    "validate_saudi_phone",
]
