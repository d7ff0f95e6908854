from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from loyalty_client_sdk.config import ConfigError, coerce_bool, env_number

SUPPORTED_LANGUAGES = ("ar", "en")


@dataclass(frozen=True)
class DashboardConfig:
    language: str = "ar"
    payment_poll_attempts: int = 10
    payment_poll_interval_seconds: float = 2.0
    telemetry_enabled: bool = False
    telemetry_file: str | None = None


def load_dashboard_config(env_file: str | None = None) -> DashboardConfig:
    load_dotenv(env_file)

    language = (os.getenv("LOYALTY_LANGUAGE") or "ar").strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigError(f"Invalid LOYALTY_LANGUAGE: expected one of {SUPPORTED_LANGUAGES}, got {language!r}")

    return DashboardConfig(
        language=language,
        payment_poll_attempts=env_number("LOYALTY_PAYMENT_POLL_ATTEMPTS", 10, int, minimum=0),
        payment_poll_interval_seconds=env_number("LOYALTY_PAYMENT_POLL_INTERVAL_SECONDS", 2.0, float, minimum=0.0),
        telemetry_enabled=coerce_bool(os.getenv("LOYALTY_TELEMETRY_ENABLED"), False),
        telemetry_file=(os.getenv("LOYALTY_TELEMETRY_FILE") or "").strip() or None,
    )
