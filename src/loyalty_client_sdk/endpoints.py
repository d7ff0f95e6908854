from __future__ import annotations

HEALTH = "/health"

BUSINESS_LOGIN = "/api/business/login"
BUSINESS_REGISTER = "/api/business/register"
BUSINESS_CATEGORIES = "/api/business/categories"

MY_BRANCHES = "/api/business/my/branches"
MY_OFFERS = "/api/business/my/offers"
MY_ANALYTICS = "/api/business/my/analytics"
MY_ACTIVITY = "/api/business/my/activity"
MY_LOGO = "/api/business/my/logo"
MY_LOGO_INFO = "/api/business/my/logo-info"

CUSTOMERS = "/api/customers"
CUSTOMERS_ANALYTICS = "/api/customers/analytics/overview"

SEGMENTS = "/api/segments"
SEGMENTS_PREDEFINED = "/api/segments/predefined"
SEGMENTS_REFRESH_ALL = "/api/segments/refresh-all"
SEGMENTS_SEND_NOTIFICATION = "/api/segments/send-notification"

NOTIFICATION_CAMPAIGNS = "/api/notifications/campaigns"
NOTIFICATION_CAMPAIGNS_PROMOTIONAL = "/api/notifications/campaigns/promotional"
NOTIFICATION_LOGS = "/api/notifications/logs"
NOTIFICATION_ANALYTICS = "/api/notifications/analytics"
NOTIFICATION_SEND_QUICK = "/api/notifications/send-quick"
WALLET_NOTIFICATION_OFFER = "/api/notifications/wallet/offer"
WALLET_NOTIFICATION_REMINDER = "/api/notifications/wallet/reminder"
WALLET_NOTIFICATION_BIRTHDAY = "/api/notifications/wallet/birthday"
WALLET_NOTIFICATION_MILESTONE = "/api/notifications/wallet/milestone"
WALLET_NOTIFICATION_REENGAGEMENT = "/api/notifications/wallet/reengagement"
WALLET_NOTIFICATION_BULK = "/api/notifications/wallet/bulk"
WALLET_NOTIFICATION_CUSTOM = "/api/notifications/wallet/custom"

LOCATIONS = "/api/locations"
LOCATION_SEARCH = "/api/locations/search"
LOCATION_REGIONS = "/api/locations/regions"
LOCATION_VALIDATE = "/api/locations/validate"

SUBSCRIPTION_DETAILS = "/api/business/subscription/details"
SUBSCRIPTION_PAYMENT_CALLBACK = "/api/business/subscription/payment-callback"
SUBSCRIPTION_REACTIVATE = "/api/business/subscription/reactivate"
SUBSCRIPTION_PAYMENT_METHOD = "/api/business/subscription/payment-method"

ADMIN_LOGIN = "/api/admin/auth/login"
ADMIN_LOGOUT = "/api/admin/auth/logout"
ADMIN_VERIFY = "/api/admin/auth/verify"
ADMIN_REFRESH = "/api/admin/auth/refresh"
ADMIN_BUSINESSES = "/api/admin/businesses"
ADMIN_BUSINESSES_STATS = "/api/admin/businesses/stats"
ADMIN_BUSINESSES_BULK = "/api/admin/businesses/bulk-update"
ADMIN_ANALYTICS_OVERVIEW = "/api/admin/analytics/overview"

ENDPOINTS: dict[str, str] = {
    "health": HEALTH,
    "businessLogin": BUSINESS_LOGIN,
    "businessRegister": BUSINESS_REGISTER,
    "businessCategories": BUSINESS_CATEGORIES,
    "myBranches": MY_BRANCHES,
    "myOffers": MY_OFFERS,
    "myAnalytics": MY_ANALYTICS,
    "myActivity": MY_ACTIVITY,
    "myLogo": MY_LOGO,
    "myLogoInfo": MY_LOGO_INFO,
    "customers": CUSTOMERS,
    "customersAnalytics": CUSTOMERS_ANALYTICS,
    "segments": SEGMENTS,
    "segmentsPredefined": SEGMENTS_PREDEFINED,
    "notificationCampaigns": NOTIFICATION_CAMPAIGNS,
    "notificationCampaignsPromotional": NOTIFICATION_CAMPAIGNS_PROMOTIONAL,
    "notificationLogs": NOTIFICATION_LOGS,
    "notificationAnalytics": NOTIFICATION_ANALYTICS,
    "walletNotificationOffer": WALLET_NOTIFICATION_OFFER,
    "walletNotificationReminder": WALLET_NOTIFICATION_REMINDER,
    "walletNotificationBirthday": WALLET_NOTIFICATION_BIRTHDAY,
    "walletNotificationMilestone": WALLET_NOTIFICATION_MILESTONE,
    "walletNotificationReengagement": WALLET_NOTIFICATION_REENGAGEMENT,
    "walletNotificationBulk": WALLET_NOTIFICATION_BULK,
    "walletNotificationCustom": WALLET_NOTIFICATION_CUSTOM,
    "locations": LOCATIONS,
    "locationSearch": LOCATION_SEARCH,
    "locationRegions": LOCATION_REGIONS,
    "locationValidate": LOCATION_VALIDATE,
    "subscriptionDetails": SUBSCRIPTION_DETAILS,
    "subscriptionPaymentCallback": SUBSCRIPTION_PAYMENT_CALLBACK,
    "subscriptionReactivate": SUBSCRIPTION_REACTIVATE,
    "subscriptionPaymentMethod": SUBSCRIPTION_PAYMENT_METHOD,
    "adminLogin": ADMIN_LOGIN,
    "adminLogout": ADMIN_LOGOUT,
    "adminVerify": ADMIN_VERIFY,
    "adminRefresh": ADMIN_REFRESH,
    "adminBusinesses": ADMIN_BUSINESSES,
    "adminBusinessesStats": ADMIN_BUSINESSES_STATS,
    "adminBusinessesBulk": ADMIN_BUSINESSES_BULK,
    "adminAnalyticsOverview": ADMIN_ANALYTICS_OVERVIEW,
}


def build_endpoints(base_url: str) -> dict[str, str]:
    base = base_url.rstrip("/")
    return {name: f"{base}{path}" for name, path in ENDPOINTS.items()}


def resource(collection: str, *parts: object) -> str:
    suffix = "/".join(str(part).strip("/") for part in parts if part is not None and str(part) != "")
    return f"{collection}/{suffix}" if suffix else collection
