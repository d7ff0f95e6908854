from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from loyalty_client_sdk import ApiSession
from loyalty_client_sdk.logo_validation import guess_content_type, validate_logo_file
from loyalty_client_sdk.models_analytics import LogoInfo

from .errors import ServiceError, issues_text, normalize_error

logger = logging.getLogger(__name__)


class LogoUploadService:
    def __init__(self, session: ApiSession, *, on_progress: Callable[[int], None] | None = None) -> None:
        self.session = session
        self.on_progress = on_progress
        self.progress = 0

    def _set_progress(self, percent: int) -> None:
        self.progress = percent
        if self.on_progress:
            self.on_progress(percent)

    def info(self) -> LogoInfo:
        try:
            return self.session.logo_client().info()
        except Exception as exc:
            raise normalize_error(exc) from exc

    def upload(self, filename: str, content: bytes, *, content_type: str | None = None) -> LogoInfo:
        resolved_type = content_type or guess_content_type(filename)
        check = validate_logo_file(filename, resolved_type, len(content))
        if not check.ok:
            raise ServiceError(
                message=check.first_message or "Invalid logo file",
                details=issues_text(check.issues),
                code="CLIENT_VALIDATION",
            )

        def report(sent: int, total: int) -> None:
            self._set_progress(int(sent * 100 / total) if total else 100)

        self._set_progress(0)
        try:
            info = self.session.logo_client().upload(filename, content, content_type=resolved_type, progress=report)
        except Exception as exc:
            self._set_progress(0)
            raise normalize_error(exc) from exc
        logger.info("logo_upload_complete", extra={"logo_filename": filename})
        self._set_progress(0)
        return info

    def upload_path(self, path: str | Path) -> LogoInfo:
        file_path = Path(path)
        return self.upload(file_path.name, file_path.read_bytes())

    def delete(self) -> None:
        try:
            self.session.logo_client().delete()
        except Exception as exc:
            raise normalize_error(exc) from exc
