from __future__ import annotations

import json

import responses
from conftest import BASE_URL

from loyalty_client_sdk import ApiSession
from loyalty_client_sdk.models_subscription import PaymentCallbackParams, PaymentFlow
from loyalty_dashboard.services.payment_verification import MESSAGES, PaymentVerifier

CALLBACK_URL = f"{BASE_URL}/api/business/subscription/payment-callback"
REACTIVATE_URL = f"{BASE_URL}/api/business/subscription/reactivate"
PAYMENT_METHOD_URL = f"{BASE_URL}/api/business/subscription/payment-method"

EN = MESSAGES["en"]


def _verifier(session: ApiSession, **kwargs) -> PaymentVerifier:
    kwargs.setdefault("sleep", lambda _seconds: None)
    return PaymentVerifier(session, language="en", **kwargs)


def test_query_parsing_selects_flow() -> None:
    params = PaymentCallbackParams.from_query(
        {"id": "pay_1", "status": "paid", "reactivation": "true", "plan": "professional", "locations": "3"}
    )

    assert params.flow is PaymentFlow.REACTIVATION
    assert params.locations == 3
    assert PaymentCallbackParams.from_query({"id": "pay_1", "update_payment": "true", "reactivation": "true"}).flow is (
        PaymentFlow.PAYMENT_METHOD_UPDATE
    )
    assert PaymentCallbackParams.from_query({"locations": "many"}).locations == 1


def test_missing_payment_id_fails_without_request(business_session: ApiSession) -> None:
    declined = _verifier(business_session).verify({"status": "failed"})
    abandoned = _verifier(business_session).verify({})

    assert declined.error == EN["payment_declined"]
    assert abandoned.error == EN["payment_not_completed_redirect"]


@responses.activate
def test_callback_success_stores_subscription(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        CALLBACK_URL,
        json={
            "success": True,
            "message": "Subscription activated",
            "subscription": {"plan_type": "professional", "status": "active"},
            "limits": {"locations": 3},
        },
        status=200,
    )

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid", "message": "APPROVED"})

    assert result.success is True
    assert result.subscription.current_plan == "professional"
    assert json.loads(responses.calls[0].request.body) == {
        "moyasarPaymentId": "pay_1",
        "status": "paid",
        "message": "APPROVED",
    }
    stored = business_session.auth_store.load()
    assert stored.subscription.limits == {"locations": 3}


@responses.activate
def test_same_payment_id_is_verified_once(business_session: ApiSession) -> None:
    responses.add(responses.POST, CALLBACK_URL, json={"success": True, "message": "ok"}, status=200)
    verifier = _verifier(business_session)

    first = verifier.verify({"id": "pay_1", "status": "paid"})
    second = verifier.verify({"id": "pay_1", "status": "paid"})

    assert first is second
    assert len(responses.calls) == 1


@responses.activate
def test_unsettled_payment_polls_until_timeout(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        CALLBACK_URL,
        json={"success": False, "errorCode": "PAYMENT_NOT_FOUND", "message": "Not found yet"},
        status=400,
    )
    sleeps: list[float] = []
    verifier = _verifier(business_session, sleep=sleeps.append, poll_interval_seconds=2.0)

    result = verifier.verify({"id": "pay_1"})

    assert result.success is False
    assert result.error_code == "VERIFICATION_TIMEOUT"
    assert result.error == EN["verification_timeout"]
    assert len(responses.calls) == 11
    assert sleeps == [2.0] * 10


@responses.activate
def test_polling_stops_when_payment_settles(business_session: ApiSession) -> None:
    responses.add(responses.POST, CALLBACK_URL, json={"errorCode": "PAYMENT_NOT_FOUND"}, status=400)
    responses.add(responses.POST, CALLBACK_URL, json={"success": True, "message": "ok"}, status=200)

    result = _verifier(business_session).verify({"id": "pay_1", "status": "initiated"})

    assert result.success is True
    assert result.attempts == 1


@responses.activate
def test_settled_status_does_not_poll(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        CALLBACK_URL,
        json={"success": False, "errorCode": "STATUS_MISMATCH", "message": "mismatch"},
        status=400,
    )

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid"})

    assert result.error == EN["status_mismatch"]
    assert result.error_code == "STATUS_MISMATCH"
    assert len(responses.calls) == 1


@responses.activate
def test_amount_mismatch_includes_amounts(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        CALLBACK_URL,
        json={
            "success": False,
            "errorCode": "AMOUNT_MISMATCH",
            "verificationDetails": {"expectedAmount": 210, "actualAmount": 100},
        },
        status=400,
    )

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid"})

    assert result.error == f"{EN['amount_mismatch']} (Expected: 210 SAR, Paid: 100 SAR)"
    assert result.verification_details == {"expectedAmount": 210, "actualAmount": 100}


@responses.activate
def test_session_linking_failure_names_transaction(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        CALLBACK_URL,
        json={"errorCode": "SESSION_LINKING_FAILED", "transactionId": "txn_77"},
        status=400,
    )

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid"})

    assert result.error.endswith("Reference: txn_77")


@responses.activate
def test_unsuccessful_body_is_terminal(business_session: ApiSession) -> None:
    responses.add(responses.POST, CALLBACK_URL, json={"success": False, "error": "Card declined"}, status=200)

    result = _verifier(business_session).verify({"id": "pay_1"})

    assert result.error == "Card declined"
    assert len(responses.calls) == 1


@responses.activate
def test_cancel_during_poll(business_session: ApiSession) -> None:
    responses.add(responses.POST, CALLBACK_URL, json={"errorCode": "PAYMENT_NOT_FOUND"}, status=400)
    verifier = PaymentVerifier(business_session, language="en", sleep=lambda _seconds: verifier.cancel())

    result = verifier.verify({"id": "pay_1"})

    assert result.error_code == "CANCELLED"
    assert verifier.cancelled is True
    assert len(responses.calls) == 1


@responses.activate
def test_reactivation_not_found_maps_to_reactivation_failed(business_session: ApiSession) -> None:
    responses.add(responses.POST, REACTIVATE_URL, json={"message": "missing"}, status=404)

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid", "reactivation": "true"})

    assert result.flow is PaymentFlow.REACTIVATION
    assert result.error == EN["reactivation_failed"]


@responses.activate
def test_reactivation_success_marks_business_active(business_session: ApiSession) -> None:
    business_session.state.business_status = "suspended"
    responses.add(
        responses.POST,
        REACTIVATE_URL,
        json={"success": True, "subscription": {"plan_type": "starter", "status": "active"}},
        status=200,
    )

    result = _verifier(business_session).verify(
        {"id": "pay_1", "status": "paid", "reactivation": "true", "plan": "starter", "locations": "2"}
    )

    assert result.success is True
    assert business_session.auth_store.load().business_status == "active"
    assert json.loads(responses.calls[0].request.body)["locationCount"] == 2


@responses.activate
def test_payment_method_error_table(business_session: ApiSession) -> None:
    responses.add(responses.PUT, PAYMENT_METHOD_URL, json={"errorCode": "TOKEN_EXTRACTION_FAILED"}, status=400)

    result = _verifier(business_session).verify({"id": "pay_1", "status": "paid", "update_payment": "true"})

    assert result.flow is PaymentFlow.PAYMENT_METHOD_UPDATE
    assert result.error == EN["card_token_failed"]


def test_arabic_is_default_language(business_session: ApiSession) -> None:
    result = PaymentVerifier(business_session).verify({"status": "failed"})

    assert result.error == MESSAGES["ar"]["payment_declined"]
