from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import TextIO

from loyalty_client_sdk.config import coerce_bool
from platformdirs import user_log_dir

from .events import TelemetryEvent

logger = logging.getLogger(__name__)


def default_telemetry_path(app_name: str) -> Path:
    return Path(user_log_dir("loyalty-dashboard", "Loyalty")) / f"{app_name}.jsonl"


class TelemetryLogger:
    """JSONL event sink for the dashboard.

    Every line is stamped with the app name and, when known, the dashboard
    language and backend environment. A disabled logger drops every event.
    Writes are serialised because progress tickers and overview fetches emit
    from worker threads.
    """

    def __init__(
        self,
        *,
        app_name: str,
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        language: str | None = None,
        env_name: str | None = None,
        echo: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = enabled if enabled is not None else coerce_bool(os.getenv("LOYALTY_TELEMETRY_ENABLED"), False)
        self.log_file = Path(log_file) if log_file else default_telemetry_path(app_name)
        self.language = language
        self.env_name = env_name
        self.echo = echo
        self._lock = threading.Lock()

    def _line(self, event: TelemetryEvent) -> str:
        payload = event.to_dict()
        payload["app_name"] = self.app_name
        if self.language:
            payload["language"] = self.language
        if self.env_name:
            payload["env"] = self.env_name
        return json.dumps(payload, sort_keys=True, ensure_ascii=False)

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        line = self._line(event)
        with self._lock:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(f"{line}\n")
            if self.echo is not None:
                self.echo.write(f"{line}\n")
                self.echo.flush()
        logger.debug("telemetry_event", extra={"category": event.category, "event": event.name})
        return True
