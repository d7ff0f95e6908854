from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from loyalty_client_sdk import ApiSession, SubscriptionSnapshot
from loyalty_client_sdk.exceptions import ApiError
from loyalty_client_sdk.models import BusinessStatus
from loyalty_client_sdk.models_subscription import PaymentCallbackParams, PaymentCallbackResponse, PaymentFlow

logger = logging.getLogger(__name__)

POLLABLE_STATUSES = (None, "initiated")

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "payment_declined": "Your payment was declined. Please try again with a different card.",
        "payment_not_completed_redirect": "The payment was not completed. Please try again.",
        "payment_not_completed": "Payment was not completed.",
        "verification_timeout": (
            "We could not confirm your payment in time. If you were charged, please contact support."
        ),
        "reactivation_failed": "Account reactivation failed. Please contact support.",
        "payment_method_update_failed": "Failed to update the payment method.",
        "card_verification_failed": "Card verification failed. Please check your card details.",
        "card_verification_not_found": "The card verification could not be found.",
        "card_token_failed": "Your card could not be saved. Please try again.",
        "no_subscription_for_update": "No subscription was found to update.",
        "status_mismatch": "The payment status does not match. Please contact support.",
        "amount_mismatch": "The payment amount does not match the selected plan.",
        "expected_amount": "Expected",
        "actual_amount": "Paid",
        "currency_mismatch": "The payment currency is not supported.",
        "session_linking_failed": (
            "Payment received but could not be linked to your account. Reference: {transaction_id}"
        ),
        "provider_payment_not_found": "The payment could not be found at the payment provider.",
        "verification_failed": "Payment verification failed",
        "could_not_process": "Payment could not be processed",
        "cancelled": "Payment verification was cancelled",
    },
    "ar": {
        "payment_declined": "تم رفض عملية الدفع. يرجى المحاولة ببطاقة أخرى.",
        "payment_not_completed_redirect": "لم تكتمل عملية الدفع. يرجى المحاولة مرة أخرى.",
        "payment_not_completed": "لم تكتمل عملية الدفع.",
        "verification_timeout": "تعذر تأكيد الدفع في الوقت المحدد. إذا تم خصم المبلغ، يرجى التواصل مع الدعم.",
        "reactivation_failed": "فشل إعادة تفعيل الحساب. يرجى التواصل مع الدعم.",
        "payment_method_update_failed": "فشل تحديث طريقة الدفع.",
        "card_verification_failed": "فشل التحقق من البطاقة. يرجى مراجعة بيانات البطاقة.",
        "card_verification_not_found": "لم يتم العثور على عملية التحقق من البطاقة.",
        "card_token_failed": "تعذر حفظ البطاقة. يرجى المحاولة مرة أخرى.",
        "no_subscription_for_update": "لا يوجد اشتراك لتحديثه.",
        "status_mismatch": "حالة الدفع غير متطابقة. يرجى التواصل مع الدعم.",
        "amount_mismatch": "مبلغ الدفع لا يطابق الباقة المختارة.",
        "expected_amount": "المتوقع",
        "actual_amount": "المدفوع",
        "currency_mismatch": "عملة الدفع غير مدعومة.",
        "session_linking_failed": "تم استلام الدفع لكن تعذر ربطه بحسابك. المرجع: {transaction_id}",
        "provider_payment_not_found": "لم يتم العثور على عملية الدفع لدى مزود الدفع.",
        "verification_failed": "فشل التحقق من الدفع",
        "could_not_process": "تعذرت معالجة الدفع",
        "cancelled": "تم إلغاء التحقق من الدفع",
    },
}

PAYMENT_METHOD_ERRORS = {
    "PAYMENT_ID_REQUIRED": "payment_method_update_failed",
    "VERIFICATION_FAILED": "card_verification_failed",
    "PAYMENT_NOT_FOUND": "payment_method_update_failed",
    "MOYASAR_PAYMENT_NOT_FOUND": "card_verification_not_found",
    "TOKEN_EXTRACTION_FAILED": "card_token_failed",
    "NO_SUBSCRIPTION_FOUND": "no_subscription_for_update",
}

ACTIVATION_ERRORS = {
    "PAYMENT_ID_REQUIRED": "payment_not_completed",
    "STATUS_MISMATCH": "status_mismatch",
    "VERIFICATION_FAILED": "payment_declined",
    "PAYMENT_NOT_FOUND": "payment_not_completed",
    "AMOUNT_MISMATCH": "amount_mismatch",
    "CURRENCY_MISMATCH": "currency_mismatch",
    "SESSION_LINKING_FAILED": "session_linking_failed",
    "MOYASAR_PAYMENT_NOT_FOUND": "provider_payment_not_found",
}


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    flow: PaymentFlow
    message: str | None = None
    error: str | None = None
    error_code: str | None = None
    verification_details: Any = None
    issues: tuple[Any, ...] = field(default_factory=tuple)
    subscription: SubscriptionSnapshot | None = None
    payment_method: dict[str, Any] | None = None
    attempts: int = 0


class _AttemptFailed(Exception):
    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        verification_details: Any = None,
        issues: tuple[Any, ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.verification_details = verification_details
        self.issues = issues


class PaymentVerifier:
    """Verifies a gateway redirect once per payment id, polling while the payment is still settling."""

    def __init__(
        self,
        session: ApiSession,
        *,
        language: str = "ar",
        max_poll_attempts: int = 10,
        poll_interval_seconds: float = 2.0,
        sleep: Callable[[float], Any] | None = None,
    ) -> None:
        self.session = session
        self.messages = MESSAGES.get(language, MESSAGES["en"])
        self.max_poll_attempts = max_poll_attempts
        self.poll_interval_seconds = poll_interval_seconds
        self._cancelled = threading.Event()
        self._sleep = sleep or self._cancelled.wait
        self.poll_attempts = 0
        self.last_payment_id: str | None = None
        self.last_result: PaymentResult | None = None

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def verify(self, query: PaymentCallbackParams | Mapping[str, str | None]) -> PaymentResult:
        params = query if isinstance(query, PaymentCallbackParams) else PaymentCallbackParams.from_query(query)
        if not params.payment_id:
            key = "payment_declined" if params.status == "failed" else "payment_not_completed_redirect"
            return PaymentResult(success=False, flow=params.flow, error=self.messages[key])
        if params.payment_id == self.last_payment_id and self.last_result is not None:
            logger.info("payment_verification_duplicate", extra={"flow": params.flow.value})
            return self.last_result

        self.last_payment_id = params.payment_id
        self.poll_attempts = 0
        self._cancelled.clear()
        result = self._run(params)
        self.last_result = result
        logger.info(
            "payment_verification_done",
            extra={"flow": params.flow.value, "success": result.success, "attempts": result.attempts},
        )
        return result

    def _run(self, params: PaymentCallbackParams) -> PaymentResult:
        while True:
            try:
                return self._attempt(params)
            except _AttemptFailed as failure:
                pollable = params.status in POLLABLE_STATUSES
                if pollable and self.poll_attempts < self.max_poll_attempts and not self.cancelled:
                    self.poll_attempts += 1
                    logger.info(
                        "payment_verification_poll",
                        extra={"attempt": self.poll_attempts, "max_attempts": self.max_poll_attempts},
                    )
                    self._sleep(self.poll_interval_seconds)
                    if self.cancelled:
                        return self._failed(params, self.messages["cancelled"], error_code="CANCELLED")
                    continue
                if pollable and self.poll_attempts >= self.max_poll_attempts:
                    return self._failed(params, self.messages["verification_timeout"], error_code="VERIFICATION_TIMEOUT")
                return PaymentResult(
                    success=False,
                    flow=params.flow,
                    error=failure.message,
                    error_code=failure.error_code,
                    verification_details=failure.verification_details,
                    issues=failure.issues,
                    attempts=self.poll_attempts,
                )

    def _failed(self, params: PaymentCallbackParams, message: str, *, error_code: str | None = None) -> PaymentResult:
        return PaymentResult(
            success=False,
            flow=params.flow,
            error=message,
            error_code=error_code,
            attempts=self.poll_attempts,
        )

    def _attempt(self, params: PaymentCallbackParams) -> PaymentResult:
        client = self.session.subscription_client()
        payment_id = params.payment_id or ""
        try:
            if params.flow is PaymentFlow.PAYMENT_METHOD_UPDATE:
                response = client.update_payment_method(payment_id)
            elif params.flow is PaymentFlow.REACTIVATION:
                response = client.reactivate(payment_id, plan_type=params.plan, location_count=params.locations)
            else:
                response = client.payment_callback(payment_id, status=params.status, message=params.message)
        except ApiError as exc:
            if params.flow is PaymentFlow.REACTIVATION and exc.status_code in (404, 500):
                return self._failed(params, self.messages["reactivation_failed"], error_code=exc.code)
            raise self._failure(params, exc) from exc

        if not response.success:
            message = response.error or params.message or self.messages["could_not_process"]
            return self._failed(params, message)
        return self._succeeded(params, response)

    def _failure(self, params: PaymentCallbackParams, exc: ApiError) -> _AttemptFailed:
        payload: Mapping[str, Any] = exc.raw_payload if isinstance(exc.raw_payload, dict) else {}
        details = payload.get("verificationDetails")
        issues = tuple(payload.get("issues") or ())
        default = str(payload.get("message") or exc.message or self.messages["verification_failed"])
        if not 400 <= exc.status_code < 500:
            return _AttemptFailed(default, verification_details=details, issues=issues)

        error_code = payload.get("errorCode")
        table = PAYMENT_METHOD_ERRORS if params.flow is PaymentFlow.PAYMENT_METHOD_UPDATE else ACTIVATION_ERRORS
        key = table.get(str(error_code)) if error_code else None
        if key is None:
            if params.flow is PaymentFlow.PAYMENT_METHOD_UPDATE:
                message = str(payload.get("message") or self.messages["payment_method_update_failed"])
            else:
                message = default
        elif key == "session_linking_failed":
            message = self.messages[key].format(transaction_id=payload.get("transactionId") or params.payment_id)
        else:
            message = self.messages[key]
            if key == "amount_mismatch" and isinstance(details, dict):
                expected = details.get("expectedAmount")
                actual = details.get("actualAmount")
                if expected and actual:
                    message += (
                        f" ({self.messages['expected_amount']}: {expected} SAR, "
                        f"{self.messages['actual_amount']}: {actual} SAR)"
                    )
        return _AttemptFailed(
            message,
            error_code=str(error_code) if error_code else None,
            verification_details=details,
            issues=issues,
        )

    def _succeeded(self, params: PaymentCallbackParams, response: PaymentCallbackResponse) -> PaymentResult:
        if params.flow is PaymentFlow.PAYMENT_METHOD_UPDATE:
            return PaymentResult(
                success=True,
                flow=params.flow,
                message=response.message,
                payment_method=response.data,
                attempts=self.poll_attempts,
            )
        snapshot = response.normalized_subscription()
        business_status = BusinessStatus.ACTIVE.value if params.flow is PaymentFlow.REACTIVATION else None
        if snapshot is not None or business_status:
            self.session.store_subscription(snapshot, business_status=business_status)
        return PaymentResult(
            success=True,
            flow=params.flow,
            message=response.message,
            subscription=snapshot,
            attempts=self.poll_attempts,
        )
