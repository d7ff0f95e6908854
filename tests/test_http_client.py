from __future__ import annotations

import pytest
import requests
import responses

from loyalty_client_sdk import load_config
from loyalty_client_sdk.exceptions import (
    ApiError,
    AuthError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)
from loyalty_client_sdk.http_client import HttpClient, UploadProgressReader
from loyalty_client_sdk.tracing import TRACE_HEADER, TraceContext


def _client(base_url: str) -> HttpClient:
    cfg = load_config()
    object.__setattr__(cfg, "api_base_url", base_url)
    return HttpClient(cfg, trace=TraceContext())


@responses.activate
def test_request_get_cache_hits_within_ttl() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"value": 1}, status=200)

    first = http.request("GET", "/api/business/my/offers")
    second = http.request("GET", "/api/business/my/offers")

    assert first == second == {"value": 1}
    assert len(responses.calls) == 1
    assert http.last_call is not None
    assert http.last_call.outcome == "cached"


@responses.activate
def test_request_use_get_cache_false_skips_cache() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"value": 1}, status=200)
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"value": 2}, status=200)

    first = http.request("GET", "/api/business/my/offers", use_get_cache=False)
    second = http.request("GET", "/api/business/my/offers", use_get_cache=False)

    assert first == {"value": 1}
    assert second == {"value": 2}
    assert len(http.cache) == 0


@responses.activate
def test_cache_is_keyed_by_business_headers() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"owner": "a"}, status=200)
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"owner": "b"}, status=200)

    first = http.request("GET", "/api/business/my/offers", headers={"x-business-id": "biz_a"})
    second = http.request("GET", "/api/business/my/offers", headers={"x-business-id": "biz_b"})

    assert first == {"owner": "a"}
    assert second == {"owner": "b"}


@responses.activate
def test_mutation_invalidates_matching_cache_entries() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/business/my/branches", json={"n": 1}, status=200)
    responses.add(responses.POST, "https://api.example.com/api/business/my/branches", json={"ok": True}, status=201)
    responses.add(responses.GET, "https://api.example.com/api/business/my/branches", json={"n": 2}, status=200)

    http.request("GET", "/api/business/my/branches")
    http.request("POST", "/api/business/my/branches", json_body={}, invalidate_paths=["/api/business/my/branches"])
    refreshed = http.request("GET", "/api/business/my/branches")

    assert refreshed == {"n": 2}
    assert len(responses.calls) == 3


@responses.activate
def test_request_sends_trace_header_and_adopts_server_trace() -> None:
    http = _client("https://api.example.com")
    responses.add(
        responses.GET,
        "https://api.example.com/health",
        json={"status": "ok"},
        status=200,
        headers={"X-Request-ID": "server-trace"},
    )

    http.request("GET", "/health")

    assert responses.calls[0].request.headers[TRACE_HEADER]
    assert http.trace is not None
    assert http.trace.trace_id == "server-trace"


@pytest.mark.parametrize(
    ("status", "error_type"),
    [(400, ValidationError), (401, AuthError), (404, NotFoundError), (500, ServerError)],
)
def test_request_maps_error_status(status: int, error_type: type[ApiError]) -> None:
    http = _client("https://api.example.com")
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            "https://api.example.com/api/business/my/offers",
            json={"success": False, "message": "nope", "errorCode": "SOME_CODE"},
            status=status,
        )

        with pytest.raises(error_type) as exc_info:
            http.request("GET", "/api/business/my/offers")

    assert exc_info.value.code == "SOME_CODE"
    assert exc_info.value.message == "nope"
    assert exc_info.value.raw_payload["errorCode"] == "SOME_CODE"


@responses.activate
def test_non_json_error_body_keeps_text() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/health", body="Bad gateway", status=502)

    with pytest.raises(ServerError) as exc_info:
        http.request("GET", "/health")

    assert exc_info.value.message == "Bad gateway"


@responses.activate
def test_unauthorized_hook_runs_on_401() -> None:
    http = _client("https://api.example.com")
    seen: list[ApiError] = []
    http.on_unauthorized = seen.append
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"message": "expired"}, status=401)

    with pytest.raises(AuthError):
        http.request("GET", "/api/business/my/offers")

    assert len(seen) == 1
    assert seen[0].status_code == 401


@responses.activate
def test_get_retries_server_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_RETRIES", "1")
    monkeypatch.setenv("LOYALTY_RETRY_BACKOFF_SECONDS", "0")
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/health", json={"message": "down"}, status=503)
    responses.add(responses.GET, "https://api.example.com/health", json={"status": "ok"}, status=200)

    assert http.request("GET", "/health") == {"status": "ok"}
    assert len(responses.calls) == 2


@responses.activate
def test_post_is_not_retried_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_RETRIES", "2")
    monkeypatch.setenv("LOYALTY_RETRY_BACKOFF_SECONDS", "0")
    http = _client("https://api.example.com")
    responses.add(responses.POST, "https://api.example.com/api/business/my/offers", json={"message": "down"}, status=503)

    with pytest.raises(ServerError):
        http.request("POST", "/api/business/my/offers", json_body={})

    assert len(responses.calls) == 1


@responses.activate
def test_transport_failure_raises_transport_error() -> None:
    http = _client("https://api.example.com")
    responses.add(
        responses.GET,
        "https://api.example.com/health",
        body=requests.ConnectionError("connection refused"),
    )

    with pytest.raises(TransportError) as exc_info:
        http.request("GET", "/health")

    assert exc_info.value.code == "TRANSPORT_ERROR"
    assert exc_info.value.trace_id


def test_stale_scope_generation_cancels_before_dispatch() -> None:
    http = _client("https://api.example.com")
    generation = http.scope_generation("business")
    http.advance_scope("business")

    with pytest.raises(TransportError) as exc_info:
        http.request("GET", "/api/business/my/offers", scope="business", generation=generation)

    assert exc_info.value.code == "REQUEST_CANCELLED"
    assert exc_info.value.details == {"scope": "business"}


@responses.activate
def test_scope_advanced_mid_flight_discards_response() -> None:
    http = _client("https://api.example.com")

    def signed_out_meanwhile(request):
        http.advance_scope("business")
        return (200, {}, '{"value": 1}')

    responses.add_callback(responses.GET, "https://api.example.com/api/business/my/offers", callback=signed_out_meanwhile)

    with pytest.raises(TransportError) as exc_info:
        http.request("GET", "/api/business/my/offers", scope="business")

    assert exc_info.value.message == "Request cancelled due to context switch"
    assert len(http.cache) == 0


@responses.activate
def test_advance_scope_clears_cache() -> None:
    http = _client("https://api.example.com")
    responses.add(responses.GET, "https://api.example.com/api/business/my/offers", json={"value": 1}, status=200)
    http.request("GET", "/api/business/my/offers")
    assert len(http.cache) == 1

    assert http.advance_scope("business") == 1
    assert len(http.cache) == 0
    assert http.scope_generation("admin") == 0


def test_upload_progress_reader_reports_chunks() -> None:
    seen: list[tuple[int, int]] = []
    reader = UploadProgressReader(b"abcdefghij", lambda sent, total: seen.append((sent, total)))

    assert len(reader) == 10
    assert reader.read(4) == b"abcd"
    assert reader.read() == b"efghij"
    reader.finish()

    assert seen == [(4, 10), (10, 10)]


@responses.activate
def test_upload_posts_multipart_and_finishes_progress() -> None:
    http = _client("https://api.example.com")
    responses.add(
        responses.POST,
        "https://api.example.com/api/business/my/logo",
        json={"success": True, "data": {"logo_url": "/logos/a.png"}},
        status=200,
    )
    seen: list[tuple[int, int]] = []

    payload = http.upload(
        "/api/business/my/logo",
        field="logo",
        filename="a.png",
        content=b"\x89PNG-data",
        content_type="image/png",
        progress=lambda sent, total: seen.append((sent, total)),
    )

    assert payload == {"success": True, "data": {"logo_url": "/logos/a.png"}}
    assert responses.calls[0].request.headers["Content-Type"].startswith("multipart/form-data")
    assert seen
    assert seen[-1][0] == seen[-1][1]


@responses.activate
def test_post_retries_when_caller_opts_in(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_RETRIES", "1")
    monkeypatch.setenv("LOYALTY_RETRY_BACKOFF_SECONDS", "0")
    http = _client("https://api.example.com")
    responses.add(responses.POST, "https://api.example.com/api/business/my/offers", json={"message": "down"}, status=503)
    responses.add(responses.POST, "https://api.example.com/api/business/my/offers", json={"ok": True}, status=201)

    assert http.request("POST", "/api/business/my/offers", json_body={}, retry_mutation=True) == {"ok": True}
    assert len(responses.calls) == 2
