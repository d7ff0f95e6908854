from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

from loyalty_client_sdk import ApiSession, AuthStore, SessionData, load_config  # noqa: E402

BASE_URL = "https://api.example.com"
BUSINESS_ID = "biz_2JkDnQ8vL5mPxR7tY3wZ"
SESSION_TOKEN = "session-token-123"


@pytest.fixture(autouse=True)
def _api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOYALTY_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("LOYALTY_RETRIES", "0")
    monkeypatch.delenv("LOYALTY_ENV", raising=False)
    monkeypatch.delenv("LOYALTY_TELEMETRY_ENABLED", raising=False)
    monkeypatch.delenv("LOYALTY_LANGUAGE", raising=False)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path / "store")


@pytest.fixture
def session(auth_store: AuthStore) -> ApiSession:
    return ApiSession(load_config(), auth_store=auth_store)


@pytest.fixture
def business_session(session: ApiSession) -> ApiSession:
    session.state = SessionData(
        session_token=SESSION_TOKEN,
        business_id=BUSINESS_ID,
        business_name="Cafe Riyadh",
        business_status="active",
        env_name="dev",
    )
    session.auth_store.save(session.state)
    return session


@pytest.fixture
def admin_session(session: ApiSession) -> ApiSession:
    session.state = SessionData(
        admin_access_token="admin-access",
        admin_session_token="admin-session",
        admin_info={"id": 1, "email": "admin@example.com"},
    )
    session.auth_store.save(session.state)
    return session
