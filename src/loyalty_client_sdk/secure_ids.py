from __future__ import annotations

MIN_SECURE_ID_LENGTH = 20

BUSINESS_PREFIX = "biz_"
OFFER_PREFIX = "off_"
BRANCH_PREFIX = "branch_"
CUSTOMER_PREFIX = "cust_"


def _is_secure(value: str | None, prefix: str) -> bool:
    if not value:
        return False
    return value.startswith(prefix) and len(value) >= MIN_SECURE_ID_LENGTH


def is_secure_business_id(value: str | None) -> bool:
    return _is_secure(value, BUSINESS_PREFIX)


def is_secure_offer_id(value: str | None) -> bool:
    return _is_secure(value, OFFER_PREFIX)


def is_secure_branch_id(value: str | None) -> bool:
    return _is_secure(value, BRANCH_PREFIX)


def is_secure_customer_id(value: str | None) -> bool:
    return _is_secure(value, CUSTOMER_PREFIX)
