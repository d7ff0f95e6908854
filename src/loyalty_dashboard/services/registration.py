from __future__ import annotations

import logging
from typing import Any

from loyalty_client_sdk import ApiSession, ValidationResult
from loyalty_client_sdk.exceptions import ApiError, TransportError
from loyalty_client_sdk.registration_validation import (
    REGISTRATION_STEPS,
    normalize_digits,
    validate_registration_step,
)

from .errors import ServiceError

logger = logging.getLogger(__name__)

BUSINESS_CATEGORIES: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "مطاعم وكافيهات - Restaurants & Cafes", "nameEn": "Restaurants & Cafes"},
    {"id": 2, "name": "صالونات وحلاقة - Salons & Barbershops", "nameEn": "Salons & Barbershops"},
    {"id": 3, "name": "عطور ومستحضرات - Perfumes & Cosmetics", "nameEn": "Perfumes & Cosmetics"},
    {"id": 4, "name": "ملابس وأزياء - Fashion & Clothing", "nameEn": "Fashion & Clothing"},
    {"id": 5, "name": "صحة ولياقة - Health & Fitness", "nameEn": "Health & Fitness"},
)

SAUDI_REGIONS: dict[str, dict[str, Any]] = {
    "Central Region": {
        "nameAr": "المنطقة الوسطى",
        "cities": ("الرياض - Riyadh", "الخرج - Al-Kharj", "الدرعية - Diriyah", "المجمعة - Al-Majma'ah"),
    },
    "Western Region": {
        "nameAr": "المنطقة الغربية",
        "cities": (
            "جدة - Jeddah",
            "مكة المكرمة - Makkah",
            "المدينة المنورة - Madinah",
            "الطائف - Taif",
            "ينبع - Yanbu",
        ),
    },
    "Eastern Region": {
        "nameAr": "المنطقة الشرقية",
        "cities": ("الدمام - Dammam", "الخبر - Khobar", "الأحساء - Al-Ahsa", "الجبيل - Jubail", "القطيف - Qatif"),
    },
}

PHONE_FIELDS = frozenset({"phone", "owner_phone"})
_LOCAL_ONLY_FIELDS = ("confirmPassword", "termsAccepted")


def default_form() -> dict[str, Any]:
    return {
        "business_name": "",
        "business_name_ar": "",
        "business_type": "",
        "license_number": "",
        "description": "",
        "region": "",
        "city": "",
        "address": "",
        "phone": "",
        "email": "",
        "owner_name": "",
        "owner_name_ar": "",
        "owner_id": "",
        "owner_phone": "",
        "owner_email": "",
        "password": "",
        "confirmPassword": "",
        "termsAccepted": False,
    }


def category_name(category_id: Any) -> str:
    try:
        wanted = int(category_id)
    except (TypeError, ValueError):
        return ""
    for category in BUSINESS_CATEGORIES:
        if category["id"] == wanted:
            return category["nameEn"]
    return ""


def cities_for(region: str | None) -> tuple[str, ...]:
    if not region:
        return ()
    return tuple(SAUDI_REGIONS.get(region, {}).get("cities", ()))


class RegistrationWizard:
    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.step = 1
        self.error: str | None = None
        self.form = default_form()

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        if name in PHONE_FIELDS:
            value = normalize_digits(str(value or ""))
        if name == "region" and value != self.form["region"]:
            self.form["city"] = ""
        self.form[name] = value
        self.error = None

    def update(self, **fields: Any) -> None:
        for name, value in fields.items():
            self.set_field(name, value)

    def validate(self, step: int | None = None) -> ValidationResult:
        check = validate_registration_step(step or self.step, self.form)
        self.error = check.first_message
        return check

    def next(self) -> bool:
        if not self.validate().ok:
            return False
        self.step = min(self.step + 1, REGISTRATION_STEPS)
        return True

    def back(self) -> None:
        self.step = max(self.step - 1, 1)

    def payload(self) -> dict[str, Any]:
        body = {key: value for key, value in self.form.items() if key not in _LOCAL_ONLY_FIELDS}
        body["business_type"] = category_name(self.form["business_type"])
        return body

    def submit(self) -> dict[str, Any]:
        for step in range(1, REGISTRATION_STEPS + 1):
            check = self.validate(step)
            if not check.ok:
                self.step = step
                raise ServiceError(message=check.first_message or "Invalid registration", code="CLIENT_VALIDATION")
        try:
            created = self.session.business_auth_client().register(self.payload())
        except TransportError as exc:
            self.error = "Network error. Please try again - خطأ في الشبكة. حاول مرة أخرى"
            raise ServiceError(message=self.error, trace_id=exc.trace_id, code=exc.code) from exc
        except ApiError as exc:
            payload = exc.raw_payload if isinstance(exc.raw_payload, dict) else {}
            self.error = str(payload.get("message") or "Registration failed - فشل التسجيل")
            raise ServiceError(message=self.error, trace_id=exc.trace_id, code=exc.code) from exc
        logger.info("business_registration_submitted", extra={"business_type": self.payload()["business_type"]})
        return created
