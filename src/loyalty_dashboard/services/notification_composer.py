from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from loyalty_client_sdk import ApiSession, NotificationType
from loyalty_client_sdk.clients.notifications_client import NotificationsClient
from loyalty_client_sdk.exceptions import ApiError
from loyalty_client_sdk.notification_validation import NotificationForm, validate_notification_form

from .errors import ServiceError, issues_text, normalize_error

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

TICK_PERCENT = 10
TICK_CEILING = 90
TICK_SECONDS = 0.2


@dataclass(frozen=True)
class RecipientFailure:
    customer_id: str
    message: str
    code: str | None = None


@dataclass(frozen=True)
class NotificationSendResult:
    successful_customers: int
    total_customers: int
    failures: tuple[RecipientFailure, ...] = field(default_factory=tuple)

    @property
    def all_succeeded(self) -> bool:
        return self.successful_customers == self.total_customers


class _ProgressTicker:
    """Simulated progress while a single bulk request is in flight."""

    def __init__(self, progress: ProgressCallback, interval: float) -> None:
        self._progress = progress
        self._interval = interval
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="notification-progress", daemon=True)
        self.percent = 0

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            if self.percent >= TICK_CEILING:
                continue
            self.percent = min(self.percent + TICK_PERCENT, TICK_CEILING)
            self._progress(self.percent)

    def __enter__(self) -> "_ProgressTicker":
        self._thread.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._stop.set()
        self._thread.join()


class NotificationComposer:
    def __init__(self, session: ApiSession, *, tick_seconds: float = TICK_SECONDS) -> None:
        self.session = session
        self.tick_seconds = tick_seconds
        self.form = NotificationForm()

    def select_type(self, notification_type: NotificationType | str) -> NotificationForm:
        self.form = self.form.with_type(notification_type)
        return self.form

    def update(self, **fields: Any) -> NotificationForm:
        if "customer_ids" in fields:
            fields["customer_ids"] = tuple(fields["customer_ids"])
        self.form = replace(self.form, **fields).clamp()
        return self.form

    def send(self, progress: ProgressCallback | None = None) -> NotificationSendResult:
        form = self.form.clamp()
        check = validate_notification_form(form)
        if not check.ok:
            raise ServiceError(
                message=check.first_message or "Invalid notification",
                details=issues_text(check.issues),
                code="CLIENT_VALIDATION",
            )
        report = progress or (lambda _percent: None)
        client = self.session.notifications_client()
        try:
            client._require_auth()
        except ApiError as exc:
            raise normalize_error(exc) from exc
        report(0)
        if form.type is NotificationType.CUSTOM:
            result = self._send_bulk(client, form, report)
        else:
            result = self._send_each(client, form, report)
        logger.info(
            "notification_send_complete",
            extra={
                "type": form.type.value,
                "successful": result.successful_customers,
                "total": result.total_customers,
            },
        )
        return result

    def _send_bulk(
        self,
        client: NotificationsClient,
        form: NotificationForm,
        report: ProgressCallback,
    ) -> NotificationSendResult:
        try:
            with _ProgressTicker(report, self.tick_seconds):
                bulk = client.send_bulk(
                    form.customer_ids,
                    message_header=form.header,
                    message_body=form.body,
                    message_type=NotificationType.CUSTOM.value,
                )
        except Exception as exc:
            raise normalize_error(exc) from exc
        report(100)
        total = bulk.total_customers if bulk.total_customers is not None else len(form.customer_ids)
        failures = tuple(
            RecipientFailure(customer_id=row.customer_id or "", message=row.error or "Failed")
            for row in bulk.failures
        )
        if bulk.successful_customers is not None:
            successful = bulk.successful_customers
        else:
            successful = total - len(failures)
        return NotificationSendResult(successful_customers=successful, total_customers=total, failures=failures)

    def _send_each(
        self,
        client: NotificationsClient,
        form: NotificationForm,
        report: ProgressCallback,
    ) -> NotificationSendResult:
        total = len(form.customer_ids)
        successful = 0
        failures: list[RecipientFailure] = []
        for index, customer_id in enumerate(form.customer_ids, start=1):
            try:
                self._send_one(client, form, customer_id)
            except ApiError as exc:
                logger.warning(
                    "notification_recipient_failed",
                    extra={"customer_id": customer_id, "code": exc.code},
                )
                failures.append(RecipientFailure(customer_id=customer_id, message=exc.message, code=exc.code))
            else:
                successful += 1
            report(int(index * 100 / total))
        return NotificationSendResult(successful_customers=successful, total_customers=total, failures=tuple(failures))

    @staticmethod
    def _send_one(client: NotificationsClient, form: NotificationForm, customer_id: str) -> None:
        kind = form.type
        if kind is NotificationType.OFFER:
            client.send_offer(
                customer_id,
                form.offer_id or "",
                offer_title=form.header,
                offer_description=form.body,
            )
        elif kind is NotificationType.REMINDER:
            client.send_reminder(customer_id, form.offer_id or "")
        elif kind is NotificationType.BIRTHDAY:
            client.send_birthday(customer_id)
        elif kind is NotificationType.MILESTONE:
            client.send_milestone(customer_id, milestone_title=form.milestone_title, milestone_message=form.body)
        elif kind is NotificationType.REENGAGEMENT:
            client.send_reengagement(
                customer_id,
                incentive_header=form.incentive_header,
                incentive_body=form.incentive_body,
            )
        else:
            raise ValueError(f"Unsupported per-customer notification type: {kind.value}")
