from __future__ import annotations

from dataclasses import dataclass, field, replace

from .campaign_validation import BODY_LIMIT, HEADER_LIMIT
from .models_notifications import NotificationType
from .validation import ValidationIssue, ValidationResult, result

REQUIRED_FIELDS: dict[NotificationType, tuple[str, ...]] = {
    NotificationType.CUSTOM: ("header", "body"),
    NotificationType.OFFER: ("offer", "header", "body"),
    NotificationType.REMINDER: ("offer",),
    NotificationType.BIRTHDAY: (),
    NotificationType.MILESTONE: ("milestone_title",),
    NotificationType.REENGAGEMENT: ("incentive_header", "incentive_body"),
}

DEFAULT_COPY: dict[NotificationType, dict[str, str]] = {
    NotificationType.BIRTHDAY: {
        "header": "Happy Birthday!",
        "body": "Celebrate with us! We have a special surprise for you.",
    },
    NotificationType.REENGAGEMENT: {
        "incentive_header": "We miss you!",
        "incentive_body": "Come back and enjoy exclusive rewards waiting for you.",
    },
}

_MESSAGES = {
    "header": "Message header is required",
    "body": "Message body is required",
    "offer": "Please select an offer",
    "milestone_title": "Milestone title is required",
    "incentive_header": "Incentive header is required",
    "incentive_body": "Incentive message is required",
}


@dataclass(frozen=True)
class NotificationForm:
    type: NotificationType = NotificationType.CUSTOM
    header: str = ""
    body: str = ""
    offer_id: str | None = None
    milestone_title: str = ""
    incentive_header: str = ""
    incentive_body: str = ""
    customer_ids: tuple[str, ...] = field(default_factory=tuple)

    def with_type(self, notification_type: NotificationType | str) -> "NotificationForm":
        """Switch type, prefilling default copy where the target fields are empty."""
        selected = NotificationType(notification_type)
        updated = replace(self, type=selected)
        defaults = DEFAULT_COPY.get(selected, {})
        if selected is NotificationType.BIRTHDAY and not updated.header:
            updated = replace(updated, **defaults)
        elif selected is NotificationType.REENGAGEMENT and not updated.incentive_header:
            updated = replace(updated, **defaults)
        return updated

    def clamp(self) -> "NotificationForm":
        return replace(
            self,
            header=self.header[:HEADER_LIMIT],
            body=self.body[:BODY_LIMIT],
            milestone_title=self.milestone_title[:HEADER_LIMIT],
            incentive_header=self.incentive_header[:HEADER_LIMIT],
            incentive_body=self.incentive_body[:BODY_LIMIT],
        )


def validate_notification_form(form: NotificationForm) -> ValidationResult:
    """First failing requirement only, matching how the composer reports errors."""
    if not form.customer_ids:
        return result([ValidationIssue("customers", "No customers selected")])
    values = {
        "header": form.header,
        "body": form.body,
        "offer": form.offer_id or "",
        "milestone_title": form.milestone_title,
        "incentive_header": form.incentive_header,
        "incentive_body": form.incentive_body,
    }
    for name in REQUIRED_FIELDS[form.type]:
        if not str(values[name]).strip():
            return result([ValidationIssue(name, _MESSAGES[name])])
    return result([])
