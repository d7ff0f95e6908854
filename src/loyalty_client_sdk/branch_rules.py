from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .exceptions import BranchDeleteRefusedError
from .models_branches import Branch, BranchStatus
from .validation import ValidationIssue, ValidationResult, result

LOCATION_DELIMITER = " - "
COPY_SUFFIX = " (Copy)"

_MANAGER_PIN_RE = re.compile(r"^\d{4,6}$", re.ASCII)
_SERVER_FIELDS = (
    "id",
    "public_id",
    "business_id",
    "created_at",
    "updated_at",
    "manager_pin",
    "manager_pin_enabled",
    "manager_last_login",
)
_EDITABLE_FIELDS = (
    "name",
    "address",
    "city",
    "region",
    "district",
    "state",
    "zip_code",
    "country",
    "phone",
    "email",
    "manager_name",
    "status",
    "location_id",
    "location_type",
    "location_hierarchy",
    "operating_hours",
    "latitude",
    "longitude",
)


@dataclass(frozen=True)
class BranchSummary:
    total: int
    active: int
    customers: int
    monthly_revenue: float


def _as_branch(branch: Branch | Mapping[str, Any]) -> Branch:
    if isinstance(branch, Branch):
        return branch
    return Branch.model_validate(branch)


def branch_payload(branch: Branch | Mapping[str, Any]) -> dict[str, Any]:
    """Editable fields only, in the shape the branches endpoint accepts."""
    model = _as_branch(branch)
    data = model.model_dump(mode="json")
    payload = {key: data.get(key) for key in _EDITABLE_FIELDS if data.get(key) is not None}
    if model.street_name and not payload.get("address"):
        payload["street_name"] = model.street_name
    return payload


def duplicate_branch_payload(branch: Branch | Mapping[str, Any]) -> dict[str, Any]:
    model = _as_branch(branch)
    payload = branch_payload(model)
    for key in _SERVER_FIELDS:
        payload.pop(key, None)
    payload.update(
        {
            "name": f"{model.name}{COPY_SUFFIX}",
            "isMain": False,
            "status": BranchStatus.INACTIVE.value,
            "customers": 0,
            "active_offers": 0,
            "monthly_revenue": 0,
        }
    )
    return payload


def filter_branches(
    branches: Iterable[Branch],
    *,
    status: str | None = None,
    city: str | None = None,
    search: str | None = None,
) -> list[Branch]:
    needle = (search or "").strip().lower()
    matched: list[Branch] = []
    for branch in branches:
        if status and status != "all" and branch.status != status:
            continue
        if city and city != "all" and (branch.city or "") != city:
            continue
        if needle:
            haystack = " ".join(
                part.lower()
                for part in (branch.name, branch.address, branch.city, branch.manager_name)
                if part
            )
            if needle not in haystack:
                continue
        matched.append(branch)
    return matched


def reconstruct_location(branch: Branch | Mapping[str, Any]) -> dict[str, Any] | None:
    """Rebuild the picker value from the flat region/city/district strings."""
    model = _as_branch(branch)
    levels = [
        ("region", (model.region or "").strip()),
        ("city", (model.city or "").strip()),
        ("district", (model.district or "").strip()),
    ]
    present = [(level, value) for level, value in levels if value]
    if not present:
        return None
    hierarchy = model.location_hierarchy or LOCATION_DELIMITER.join(value for _, value in present)
    deepest_level, deepest_value = present[-1]
    return {
        "id": model.location_id,
        "type": model.location_type or deepest_level,
        "name_ar": deepest_value,
        "name_en": deepest_value,
        "hierarchy": hierarchy,
        "displayText": hierarchy,
        "region": model.region or "",
        "city": model.city or "",
        "district": model.district or "",
    }


def apply_location(payload: dict[str, Any], location: Mapping[str, Any] | None) -> dict[str, Any]:
    if not location:
        return payload
    updated = dict(payload)
    updated["location_data"] = dict(location)
    for key in ("region", "city", "district"):
        if location.get(key):
            updated[key] = location[key]
    if location.get("id") is not None:
        updated["location_id"] = str(location["id"])
    if location.get("type"):
        updated["location_type"] = location["type"]
    hierarchy = location.get("hierarchy") or location.get("displayText")
    if hierarchy:
        updated["location_hierarchy"] = hierarchy
    return updated


def validate_branch_payload(payload: Mapping[str, Any]) -> ValidationResult:
    issues: list[ValidationIssue] = []
    if not str(payload.get("name") or "").strip():
        issues.append(ValidationIssue("name", "Branch name is required"))
    has_location = bool(payload.get("location_data")) or bool(payload.get("region") and payload.get("city"))
    if not has_location:
        issues.append(
            ValidationIssue(
                "location_data",
                "Location data is required. Please provide region and city information.",
            )
        )
    return result(issues)


def validate_manager_pin(pin: str | None) -> ValidationResult:
    if not pin or not _MANAGER_PIN_RE.fullmatch(pin):
        return result([ValidationIssue("manager_pin", "PIN must be 4-6 digits")])
    return result([])


def ensure_deletable(branch: Branch, branches: Iterable[Branch]) -> None:
    def refuse(code: str, message: str) -> BranchDeleteRefusedError:
        return BranchDeleteRefusedError.local(code, message, {"branch_id": branch.secure_id})

    if branch.is_main:
        raise refuse("MAIN_BRANCH", "Cannot delete the main branch")
    active = [item for item in branches if item.status == BranchStatus.ACTIVE.value]
    if branch.status == BranchStatus.ACTIVE.value and len(active) <= 1:
        raise refuse("LAST_ACTIVE_BRANCH", "Cannot delete the last active branch")
    if branch.active_offers > 0:
        raise refuse("BRANCH_HAS_ACTIVE_OFFERS", "Cannot delete a branch with active offers. Reassign or pause them first")


def next_status(current: str) -> str:
    if current == BranchStatus.ACTIVE.value:
        return BranchStatus.INACTIVE.value
    return BranchStatus.ACTIVE.value


def summarize(branches: Iterable[Branch]) -> BranchSummary:
    rows = list(branches)
    return BranchSummary(
        total=len(rows),
        active=sum(1 for row in rows if row.status == BranchStatus.ACTIVE.value),
        customers=sum(row.customers for row in rows),
        monthly_revenue=float(sum(row.monthly_revenue for row in rows)),
    )
