from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError as PydanticValidationError

from .models import SessionData

logger = logging.getLogger(__name__)

_BUSINESS_FIELDS = ("session_token", "business_id", "business_name", "user_email", "business_status", "subscription")
_ADMIN_FIELDS = ("admin_access_token", "admin_session_token", "admin_info")


@dataclass
class AuthStore:
    """Persists the signed-in business and admin identities between runs.

    The file lives under the platform user-data dir and is written owner-only.
    An unreadable file is treated as signed out and removed.
    """

    app_name: str = "loyalty-dashboard"
    filename: str = "session.json"
    base_dir: Path | None = None

    @property
    def path(self) -> Path:
        return (self.base_dir or Path(user_data_dir(self.app_name, "Loyalty"))) / self.filename

    def save(self, session: SessionData) -> None:
        target = self.path
        target.parent.mkdir(parents=True, exist_ok=True)
        staging = target.with_suffix(".tmp")
        staging.write_text(json.dumps(session.model_dump(mode="json"), indent=2), encoding="utf-8")
        if os.name == "posix":
            staging.chmod(0o600)
        staging.replace(target)

    def load(self) -> SessionData | None:
        target = self.path
        if not target.exists():
            return None
        try:
            return SessionData.model_validate(json.loads(target.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, PydanticValidationError) as exc:
            logger.warning("auth_store_discarded", extra={"path": str(target), "reason": type(exc).__name__})
            self.clear()
            return None

    def update(self, **fields: object) -> SessionData:
        merged = (self.load() or SessionData()).model_copy(update=fields)
        self.save(merged)
        return merged

    def clear_business(self) -> SessionData | None:
        return self._forget(_BUSINESS_FIELDS)

    def clear_admin(self) -> SessionData | None:
        return self._forget(_ADMIN_FIELDS)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def _forget(self, fields: tuple[str, ...]) -> SessionData | None:
        current = self.load()
        if current is None:
            return None
        remaining = current.model_copy(update=dict.fromkeys(fields))
        if remaining.session_token or remaining.admin_access_token:
            self.save(remaining)
            return remaining
        self.clear()
        return None
