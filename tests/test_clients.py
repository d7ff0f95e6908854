from __future__ import annotations

import json

import pytest
import responses
from conftest import BASE_URL, BUSINESS_ID, SESSION_TOKEN

from loyalty_client_sdk import (
    ApiSession,
    AuthError,
    Branch,
    BranchDeleteRefusedError,
    CampaignStateError,
    NotFoundError,
    ServerError,
)
from loyalty_client_sdk.models_admin import AdminBusinessFilters, BulkAction
from loyalty_client_sdk.validation import ClientValidationError

BRANCHES_URL = f"{BASE_URL}/api/business/my/branches"


def _body(call_index: int = 0) -> dict:
    return json.loads(responses.calls[call_index].request.body)


def _branch(branch_id: str, **fields) -> dict:
    row = {"public_id": branch_id, "name": f"Branch {branch_id}", "status": "active", "city": "Riyadh"}
    row.update(fields)
    return row


@responses.activate
def test_business_login_returns_session(session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/login",
        json={
            "success": True,
            "data": {"session_token": SESSION_TOKEN, "business": {"public_id": BUSINESS_ID, "business_name": "Cafe"}},
        },
        status=200,
    )

    result = session.business_auth_client().login("owner@example.com", "secret")

    assert result.session_token == SESSION_TOKEN
    assert result.resolved_business_id == BUSINESS_ID
    assert _body() == {"email": "owner@example.com", "password": "secret"}


def test_business_calls_require_session(session: ApiSession) -> None:
    with pytest.raises(AuthError) as exc_info:
        session.branches_client().list()

    assert exc_info.value.code == "NOT_AUTHENTICATED"


@responses.activate
def test_branches_list_sends_business_headers(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        BRANCHES_URL,
        json={"success": True, "data": [_branch("branch_a", isMain=True), _branch("branch_b")]},
        status=200,
    )

    branches = business_session.branches_client().list()

    assert [branch.secure_id for branch in branches] == ["branch_a", "branch_b"]
    assert branches[0].is_main is True
    request = responses.calls[0].request
    assert request.headers["x-session-token"] == SESSION_TOKEN
    assert request.headers["x-business-id"] == BUSINESS_ID


@responses.activate
def test_branch_get_unknown_id_raises_not_found(business_session: ApiSession) -> None:
    responses.add(responses.GET, BRANCHES_URL, json={"success": True, "data": [_branch("branch_a")]}, status=200)

    with pytest.raises(NotFoundError) as exc_info:
        business_session.branches_client().get("branch_zz")

    assert exc_info.value.code == "BRANCH_NOT_FOUND"
    assert exc_info.value.status_code == 404


def test_branch_create_requires_location(business_session: ApiSession) -> None:
    with pytest.raises(ClientValidationError) as exc_info:
        business_session.branches_client().create({"name": "North"})

    assert exc_info.value.issues[0].field == "location_data"


@responses.activate
def test_branch_duplicate_posts_copy(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        BRANCHES_URL,
        json={"success": True, "data": _branch("branch_c", name="Main (Copy)", status="inactive")},
        status=201,
    )
    main_branch = {
        "public_id": "branch_a",
        "name": "Main",
        "region": "Central Region",
        "city": "Riyadh",
        "isMain": True,
        "customers": 120,
        "manager_pin": "1234",
    }

    created = business_session.branches_client().duplicate(main_branch)

    body = _body()
    assert created.secure_id == "branch_c"
    assert body["name"] == "Main (Copy)"
    assert body["isMain"] is False
    assert body["status"] == "inactive"
    assert body["customers"] == 0
    assert "public_id" not in body
    assert "manager_pin" not in body


def test_branch_delete_refuses_main_branch(business_session: ApiSession) -> None:
    branches = [Branch.model_validate(_branch("branch_a", isMain=True)), Branch.model_validate(_branch("branch_b"))]

    with pytest.raises(BranchDeleteRefusedError) as exc_info:
        business_session.branches_client().delete("branch_a", branches=branches)

    assert exc_info.value.code == "MAIN_BRANCH"


@responses.activate
def test_branch_toggle_status_uses_patch(business_session: ApiSession) -> None:
    responses.add(
        responses.PATCH,
        f"{BRANCHES_URL}/branch_b/status",
        json={"success": True, "data": {"branch": _branch("branch_b", status="inactive")}},
        status=200,
    )

    toggled = business_session.branches_client().toggle_status("branch_b")

    assert toggled.status == "inactive"


def test_manager_pin_must_be_digits(business_session: ApiSession) -> None:
    with pytest.raises(ClientValidationError):
        business_session.branches_client().set_manager_pin("branch_b", "12ab")


@responses.activate
def test_offers_active_only_filter(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/business/my/offers",
        json={"success": True, "data": [{"public_id": "off_1", "status": "active"}, {"public_id": "off_2", "status": "paused"}]},
        status=200,
    )

    offers = business_session.offers_client().list(active_only=True)

    assert [offer.secure_id for offer in offers] == ["off_1"]


@responses.activate
def test_campaign_list_drops_all_filters(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/notifications/campaigns",
        json={
            "success": True,
            "data": {
                "campaigns": [{"campaign_id": "camp_1", "name": "Eid", "status": "draft"}],
                "pagination": {"current_page": 1, "total_pages": 1, "total_campaigns": 1},
            },
        },
        status=200,
    )

    listing = business_session.campaigns_client().list({"status": "all", "campaign_type": "seasonal_campaign"})

    assert listing.campaigns[0].campaign_id == "camp_1"
    params = responses.calls[0].request.params
    assert params == {"page": "1", "limit": "20", "campaign_type": "seasonal_campaign"}


@responses.activate
def test_campaign_list_tolerates_null_tags_and_channels(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/notifications/campaigns",
        json={
            "success": True,
            "data": {"campaigns": [{"campaign_id": "camp_2", "name": "Ramadan", "tags": None, "channels": None}]},
        },
        status=200,
    )

    campaign = business_session.campaigns_client().list().campaigns[0]

    assert campaign.tags == []
    assert campaign.channels == []


@responses.activate
def test_campaign_create_promotional(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/notifications/campaigns/promotional",
        json={"success": True, "data": {"campaign": {"campaign_id": "camp_9", "name": "Eid", "status": "draft"}}},
        status=201,
    )

    campaign = business_session.campaigns_client().create_promotional(
        {"name": "Eid", "campaign_type": "seasonal_campaign", "message_header": "Hi", "message_body": "Body"}
    )

    assert campaign.campaign_id == "camp_9"
    assert _body()["campaign_type"] == "seasonal_campaign"


def test_sent_campaign_cannot_be_updated_or_deleted(business_session: ApiSession) -> None:
    client = business_session.campaigns_client()

    with pytest.raises(CampaignStateError) as update_error:
        client.update("camp_1", {"name": "x"}, current_status="sent")
    with pytest.raises(CampaignStateError):
        client.delete("camp_1", current_status="sent")

    assert update_error.value.code == "CAMPAIGN_ALREADY_SENT"


def test_only_draft_campaigns_can_be_sent(business_session: ApiSession) -> None:
    with pytest.raises(CampaignStateError) as exc_info:
        business_session.campaigns_client().send("camp_1", current_status="active")

    assert exc_info.value.code == "CAMPAIGN_NOT_DRAFT"


@responses.activate
def test_bulk_notification_reports_recipient_details(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/notifications/wallet/bulk",
        json={
            "success": True,
            "message": "Bulk notifications sent to 2 customers",
            "data": {
                "success": True,
                "total_customers": 3,
                "successful_customers": 2,
                "failed_customers": 1,
                "details": [
                    {"customerId": "cust_1", "success": True, "passes_sent": 1},
                    {"customerId": "cust_2", "success": True, "passes_sent": 2},
                    {"customerId": "cust_3", "success": False, "error": "No active wallet passes found"},
                ],
                "businessId": BUSINESS_ID,
                "message_type": "custom",
            },
        },
        status=200,
    )

    result = business_session.notifications_client().send_bulk(
        ["cust_1", "cust_2", "cust_3"],
        message_header="Hello",
        message_body="Body",
    )

    assert result.total_customers == 3
    assert result.successful_customers == 2
    assert [row.customer_id for row in result.failures] == ["cust_3"]
    assert result.failures[0].error == "No active wallet passes found"
    assert _body()["message_type"] == "custom"


@responses.activate
def test_bulk_notification_with_no_recipient_reached_keeps_details(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/notifications/wallet/bulk",
        json={
            "success": False,
            "message": "Failed to send bulk notifications",
            "data": {
                "success": False,
                "total_customers": 1,
                "successful_customers": 0,
                "details": [{"customerId": "cust_9", "success": False, "error": "No active wallet passes found"}],
            },
        },
        status=200,
    )

    result = business_session.notifications_client().send_bulk(["cust_9"], message_header="Hi", message_body="Body")

    assert result.success is False
    assert result.failures[0].customer_id == "cust_9"


@responses.activate
def test_custom_notification_targets_wallet_pass(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/notifications/wallet/custom",
        json={"success": True, "message": "Custom wallet notification sent successfully", "data": {"success": True}},
        status=200,
    )

    result = business_session.notifications_client().send_custom("pass_1", message_header="h", message_body="b")

    assert result.success is True
    assert _body() == {"wallet_pass_id": "pass_1", "message_header": "h", "message_body": "b", "message_type": "custom"}


@responses.activate
def test_milestone_notification_body(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/notifications/wallet/milestone",
        json={"success": True, "data": {"passes_notified": 1}},
        status=200,
    )

    result = business_session.notifications_client().send_milestone("cust_1", milestone_title="10 visits")

    assert result.customer_id == "cust_1"
    assert _body() == {"customer_id": "cust_1", "milestone_title": "10 visits", "milestone_message": ""}


@responses.activate
def test_analytics_overview_fetches_both(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/business/my/analytics",
        json={"success": True, "data": {"total_customers": 40, "active_offers": 2}},
        status=200,
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/business/my/activity",
        json={"success": True, "data": [{"id": 1, "type": "scan", "description": "Stamp added"}]},
        status=200,
    )

    overview = business_session.analytics_client().dashboard_overview()

    assert overview.analytics.total_customers == 40
    assert overview.activity[0].description == "Stamp added"


@responses.activate
def test_analytics_overview_raises_after_both_settle(business_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/business/my/analytics",
        json={"success": False, "message": "analytics down"},
        status=500,
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/business/my/activity",
        json={"success": True, "data": []},
        status=200,
    )

    with pytest.raises(ServerError) as exc_info:
        business_session.analytics_client().dashboard_overview()

    assert "analytics down" in str(exc_info.value)
    assert len(responses.calls) == 2


def test_logo_upload_validates_before_auth(session: ApiSession) -> None:
    with pytest.raises(ClientValidationError):
        session.logo_client().upload("notes.txt", b"hello")


def test_logo_upload_requires_session(session: ApiSession) -> None:
    with pytest.raises(AuthError):
        session.logo_client().upload("logo.png", b"\x89PNG")


@responses.activate
def test_logo_upload_returns_info(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/my/logo",
        json={"success": True, "data": {"logo_url": "/uploads/logo.png", "logo_filename": "logo.png"}},
        status=200,
    )

    info = business_session.logo_client().upload("logo.png", b"\x89PNG-bytes")

    assert info.has_logo is True
    assert info.logo_url == "/uploads/logo.png"
    assert responses.calls[0].request.headers["x-business-id"] == BUSINESS_ID


@responses.activate
def test_subscription_reactivate_body(business_session: ApiSession) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/business/subscription/reactivate",
        json={"success": True, "message": "Reactivated", "subscription": {"plan_type": "professional", "status": "active"}},
        status=200,
    )

    response = business_session.subscription_client().reactivate("pay_1", plan_type="professional", location_count=2)

    assert response.success is True
    assert response.normalized_subscription().current_plan == "professional"
    assert _body() == {"moyasarPaymentId": "pay_1", "planType": "professional", "locationCount": 2}


@responses.activate
def test_admin_list_and_bulk_approve(admin_session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/api/admin/businesses",
        json={"success": True, "data": {"businesses": [{"public_id": BUSINESS_ID, "status": "pending"}]}},
        status=200,
    )
    responses.add(
        responses.POST,
        f"{BASE_URL}/api/admin/businesses/bulk-update",
        json={"success": True, "data": {"total_updated": 1, "total_requested": 1}},
        status=200,
    )
    client = admin_session.admin_businesses_client()

    listing = client.list(AdminBusinessFilters(status="pending", region="all"))
    result = client.bulk_update([BUSINESS_ID], BulkAction.APPROVE)

    assert listing.businesses[0].secure_id == BUSINESS_ID
    assert responses.calls[0].request.params == {"status": "pending"}
    assert responses.calls[0].request.headers["Authorization"] == "Bearer admin-access"
    assert _body(1) == {"business_ids": [BUSINESS_ID], "action": "approve"}
    assert result.total_updated == 1


@responses.activate
def test_admin_update_status_uses_put(admin_session: ApiSession) -> None:
    responses.add(
        responses.PUT,
        f"{BASE_URL}/api/admin/businesses/{BUSINESS_ID}/status",
        json={"success": True, "data": {}},
        status=200,
    )

    admin_session.admin_businesses_client().update_status(BUSINESS_ID, "suspended", reason="Unpaid")

    assert _body() == {"status": "suspended", "reason": "Unpaid"}


@responses.activate
def test_health(session: ApiSession) -> None:
    responses.add(responses.GET, f"{BASE_URL}/health", json={"status": "ok"}, status=200)

    assert session.health_client().health() == {"status": "ok"}
