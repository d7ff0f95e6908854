from __future__ import annotations

import logging

from .. import endpoints
from ..envelope import unwrap
from ..http_client import ProgressCallback
from ..logo_validation import guess_content_type, validate_logo_file
from ..models_analytics import LogoInfo
from ..validation import raise_for_issues
from .base import BaseClient

logger = logging.getLogger(__name__)

LOGO_FIELD = "logo"


class LogoClient(BaseClient):
    def info(self) -> LogoInfo:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.MY_LOGO_INFO,
            use_get_cache=False,
            module="logo",
            operation="info",
        )
        return LogoInfo.model_validate(data if isinstance(data, dict) else {})

    def upload(
        self,
        filename: str,
        content: bytes,
        *,
        content_type: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> LogoInfo:
        resolved_type = content_type or guess_content_type(filename)
        raise_for_issues(validate_logo_file(filename, resolved_type, len(content)))
        self._require_auth()
        payload = self.http.upload(
            endpoints.MY_LOGO,
            field=LOGO_FIELD,
            filename=filename,
            content=content,
            content_type=resolved_type or "application/octet-stream",
            headers=self._auth_headers(),
            progress=progress,
            module="logo",
            operation="upload",
            invalidate_paths=[endpoints.MY_LOGO_INFO],
        )
        data = unwrap(payload, trace_id=self.http.trace.trace_id if self.http.trace else None)
        logger.info("logo_upload_success", extra={"size": len(content)})
        info = dict(data) if isinstance(data, dict) else {}
        info.setdefault("has_logo", True)
        return LogoInfo.model_validate(info)

    def delete(self) -> None:
        self._require_auth()
        self._data(
            "DELETE",
            endpoints.MY_LOGO,
            module="logo",
            operation="delete",
            invalidate_paths=[endpoints.MY_LOGO_INFO],
        )
