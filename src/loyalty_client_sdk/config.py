from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

N = TypeVar("N", int, float)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, exclusive: bool = False) -> N:
    """Read a numeric env var and enforce its lower bound.

    ``exclusive`` makes the bound strict (``> minimum`` rather than ``>=``).
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        value = default
    else:
        try:
            value = cast(raw.strip())
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    too_small = value <= minimum if exclusive else value < minimum
    if too_small:
        bound = ">" if exclusive else ">="
        raise ConfigError(f"Invalid {name}: expected {bound} {minimum}, got {value}")
    return value


def _base_url(env_key: str) -> str:
    for name in (f"LOYALTY_API_BASE_URL_{env_key}", "LOYALTY_API_BASE_URL"):
        value = (os.getenv(name) or "").strip()
        if value:
            return value.rstrip("/")
    raise ConfigError("Missing required config values: LOYALTY_API_BASE_URL")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from the environment; a ``.env`` file fills gaps.

    ``LOYALTY_API_BASE_URL_<ENV>`` wins over the plain variable so one file can
    carry every backend profile. ``LOYALTY_TIMEOUT_SECONDS`` caps the connect
    timeout and floors the read timeout unless those are set explicitly.
    """
    load_dotenv(env_file)
    env_name = (os.getenv("LOYALTY_ENV") or "dev").strip()

    timeout = env_number("LOYALTY_TIMEOUT_SECONDS", 10.0, float, minimum=0.0, exclusive=True)
    connect = env_number("LOYALTY_CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float, minimum=0.0, exclusive=True)
    read = env_number("LOYALTY_READ_TIMEOUT_SECONDS", max(timeout, connect), float, minimum=0.0, exclusive=True)

    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name.upper()),
        connect_timeout_seconds=connect,
        read_timeout_seconds=read,
        retries=env_number("LOYALTY_RETRIES", 3, int, minimum=0),
        retry_backoff_seconds=env_number("LOYALTY_RETRY_BACKOFF_SECONDS", 0.3, float, minimum=0.0),
        max_connections=env_number("LOYALTY_MAX_CONNECTIONS", 20, int, minimum=1),
        verify_ssl=coerce_bool(os.getenv("LOYALTY_VERIFY_SSL"), True),
    )
