from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from .models_campaigns import CampaignType, TargetType
from .validation import ValidationIssue, ValidationResult, result

HEADER_LIMIT = 50
BODY_LIMIT = 200
CAMPAIGN_STEPS = 4

_CAMPAIGN_TYPES = {item.value for item in CampaignType}
_TARGET_TYPES = {item.value for item in TargetType}


def truncate_header(value: str | None) -> str:
    return (value or "")[:HEADER_LIMIT]


def truncate_body(value: str | None) -> str:
    return (value or "")[:BODY_LIMIT]


def parse_schedule(value: str | datetime | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # naive values are wall-clock times in the local zone
        parsed = parsed.astimezone()
    return parsed


def _enum_value(value: Any) -> str:
    return str(getattr(value, "value", value) or "")


def validate_campaign_step(
    step: int,
    form: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> ValidationResult:
    issues: list[ValidationIssue] = []
    if step == 1:
        if not str(form.get("name") or "").strip():
            issues.append(ValidationIssue("name", "Campaign name is required"))
        if _enum_value(form.get("campaign_type")) not in _CAMPAIGN_TYPES:
            issues.append(ValidationIssue("campaign_type", "Campaign type is required"))
    elif step == 2:
        target_type = _enum_value(form.get("target_type"))
        if target_type not in _TARGET_TYPES:
            issues.append(ValidationIssue("target_type", "Target audience is required"))
        if target_type == TargetType.SEGMENT.value and not form.get("target_segment_id"):
            issues.append(ValidationIssue("target_segment_id", "Please select a segment"))
        if target_type == TargetType.CUSTOM_FILTER.value and not form.get("target_criteria"):
            issues.append(ValidationIssue("target_criteria", "Please define at least one filter"))
    elif step == 3:
        header = str(form.get("message_header") or "")
        body = str(form.get("message_body") or "")
        if not header.strip():
            issues.append(ValidationIssue("message_header", "Message header is required"))
        elif len(header) > HEADER_LIMIT:
            issues.append(ValidationIssue("message_header", f"Header must be {HEADER_LIMIT} characters or fewer"))
        if not body.strip():
            issues.append(ValidationIssue("message_body", "Message body is required"))
        elif len(body) > BODY_LIMIT:
            issues.append(ValidationIssue("message_body", f"Body must be {BODY_LIMIT} characters or fewer"))
    elif step == 4:
        send_immediately = bool(form.get("send_immediately", True))
        raw_schedule = form.get("scheduled_at")
        if not send_immediately and not raw_schedule:
            issues.append(ValidationIssue("scheduled_at", "Schedule date is required"))
        if raw_schedule:
            try:
                scheduled = parse_schedule(raw_schedule)
            except ValueError:
                issues.append(ValidationIssue("scheduled_at", "Schedule date is not a valid date"))
            else:
                current = now or datetime.now(timezone.utc)
                if current.tzinfo is None:
                    current = current.astimezone()
                if scheduled is not None and scheduled <= current:
                    issues.append(ValidationIssue("scheduled_at", "Schedule date must be in the future"))
    else:
        raise ValueError(f"Unknown campaign step: {step}")
    return result(issues)
