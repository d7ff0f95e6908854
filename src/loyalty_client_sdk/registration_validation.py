from __future__ import annotations

import re
from typing import Any, Mapping

from .validation import ValidationIssue, ValidationResult, result

_CR_RE = re.compile(r"^\d{10}$", re.ASCII)
_SAUDI_PHONE_RE = re.compile(r"^\+966\d{9}$", re.ASCII)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6
REGISTRATION_STEPS = 4

# U+0660..U+0669 (Arabic-Indic) and U+06F0..U+06F9 (Extended Arabic-Indic)
_DIGIT_TABLE = {
    **{0x0660 + offset: str(offset) for offset in range(10)},
    **{0x06F0 + offset: str(offset) for offset in range(10)},
}


def normalize_digits(value: str | None) -> str:
    if not value:
        return ""
    return value.translate(_DIGIT_TABLE)


def validate_cr_number(value: str | None) -> bool:
    normalized = normalize_digits(value).strip()
    return bool(_CR_RE.fullmatch(normalized))


def validate_saudi_phone(value: str | None) -> bool:
    normalized = normalize_digits(value).strip()
    return bool(_SAUDI_PHONE_RE.fullmatch(normalized))


def validate_email(value: str | None) -> bool:
    if not value:
        return False
    return bool(_EMAIL_RE.fullmatch(value.strip()))


def _blank(form: Mapping[str, Any], key: str) -> bool:
    value = form.get(key)
    return value is None or not str(value).strip()


def _fail(field: str, message: str) -> ValidationResult:
    return result([ValidationIssue(field=field, reason=message)])


def validate_registration_step(step: int, form: Mapping[str, Any]) -> ValidationResult:
    """Check one wizard step, stopping at the first failing field."""
    if step == 1:
        if _blank(form, "business_name"):
            return _fail("business_name", "Business name is required - اسم الأعمال مطلوب")
        if _blank(form, "business_type"):
            return _fail("business_type", "Business type is required - نوع الأعمال مطلوب")
        if _blank(form, "license_number"):
            return _fail("license_number", "Commercial Registration number is required - رقم السجل التجاري مطلوب")
        if not validate_cr_number(str(form.get("license_number"))):
            return _fail(
                "license_number",
                "Invalid CR format. Use 10 digits: XXXXXXXXXX - تنسيق السجل التجاري غير صحيح",
            )
    elif step == 2:
        if _blank(form, "region"):
            return _fail("region", "Region is required - المنطقة مطلوبة")
        if _blank(form, "city"):
            return _fail("city", "City is required - المدينة مطلوبة")
        if _blank(form, "address"):
            return _fail("address", "Business address is required - عنوان الأعمال مطلوب")
        if _blank(form, "phone"):
            return _fail("phone", "Phone number is required - رقم الهاتف مطلوب")
        if not validate_saudi_phone(str(form.get("phone"))):
            return _fail("phone", "Invalid phone format. Use: +966XXXXXXXXX - تنسيق الهاتف غير صحيح")
        if _blank(form, "email"):
            return _fail("email", "Email is required - البريد الإلكتروني مطلوب")
        if not validate_email(str(form.get("email"))):
            return _fail("email", "Invalid email format - تنسيق البريد الإلكتروني غير صحيح")
    elif step == 3:
        if _blank(form, "owner_name"):
            return _fail("owner_name", "Owner name is required - اسم المالك مطلوب")
        if _blank(form, "owner_id"):
            return _fail("owner_id", "Owner ID is required - هوية المالك مطلوبة")
        if _blank(form, "owner_phone"):
            return _fail("owner_phone", "Owner phone is required - هاتف المالك مطلوب")
        if not validate_saudi_phone(str(form.get("owner_phone"))):
            return _fail("owner_phone", "Invalid phone format. Use: +966XXXXXXXXX - تنسيق الهاتف غير صحيح")
        if _blank(form, "owner_email"):
            return _fail("owner_email", "Owner email is required - بريد المالك الإلكتروني مطلوب")
        if not validate_email(str(form.get("owner_email"))):
            return _fail("owner_email", "Invalid email format - تنسيق البريد الإلكتروني غير صحيح")
    elif step == 4:
        password = str(form.get("password") or "")
        if not password:
            return _fail("password", "Password is required - كلمة المرور مطلوبة")
        if len(password) < MIN_PASSWORD_LENGTH:
            return _fail(
                "password",
                "Password must be at least 6 characters - كلمة المرور يجب أن تكون 6 أحرف على الأقل",
            )
        if password != str(form.get("confirmPassword") or ""):
            return _fail("confirmPassword", "Passwords do not match - كلمات المرور غير متطابقة")
        if not form.get("termsAccepted"):
            return _fail("termsAccepted", "You must accept the terms and conditions - يجب قبول الشروط والأحكام")
    else:
        raise ValueError(f"Unknown registration step: {step}")
    return result([])
