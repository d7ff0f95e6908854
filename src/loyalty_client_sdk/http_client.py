from __future__ import annotations

import io
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, AuthError, TransportError
from .tracing import TRACE_HEADER, TraceContext

logger = logging.getLogger(__name__)

Payload = dict[str, Any] | list[Any] | None
UnauthorizedHook = Callable[[ApiError], None]
ProgressCallback = Callable[[int, int], None]

_IDEMPOTENT = frozenset({"GET", "HEAD"})
# a cached GET may only be replayed for the identity that fetched it
_IDENTITY_HEADERS = ("Authorization", "X-Session-Token", "x-session-token", "x-business-id")


@dataclass
class CallRecord:
    module: str
    operation: str
    duration_ms: int
    outcome: str
    trace_id: str | None


class ResponseCache:
    """Short-lived GET cache so tab switches do not refetch identical lists."""

    def __init__(self, ttl_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, Payload]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def key(url: str, headers: Mapping[str, str], params: Mapping[str, Any] | None) -> str:
        identity = {name: headers[name] for name in _IDENTITY_HEADERS if name in headers}
        return json.dumps([url, identity, dict(params or {})], sort_keys=True, default=str)

    def get(self, key: str) -> Payload:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return payload

    def put(self, key: str, payload: Payload) -> None:
        self._entries[key] = (time.monotonic() + self.ttl_seconds, payload)

    def drop_matching(self, paths: list[str]) -> int:
        stale = [key for key in self._entries if any(path in key for path in paths)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class UploadProgressReader:
    """File-like multipart body that reports ``(sent, total)`` per read.

    Exposing ``__len__`` makes requests send a Content-Length header rather
    than chunking the body.
    """

    def __init__(self, payload: bytes, progress: ProgressCallback | None = None) -> None:
        self._buffer = io.BytesIO(payload)
        self._total = len(payload)
        self._progress = progress
        self.sent = 0

    def __len__(self) -> int:
        return self._total

    def _report(self) -> None:
        if self._progress:
            self._progress(self.sent, self._total)

    def read(self, size: int = -1) -> bytes:
        chunk = self._buffer.read(size)
        if chunk:
            self.sent += len(chunk)
            self._report()
        return chunk

    def finish(self) -> None:
        if self.sent >= self._total:
            return
        self.sent = self._total
        self._report()


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    on_unauthorized: UnauthorizedHook | None = None
    cache_ttl_seconds: float = 3.0
    enable_get_cache: bool = True
    last_call: CallRecord | None = None
    cache: ResponseCache = field(init=False)
    _generations: dict[str, int] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.trace = self.trace or TraceContext()
        self.cache = ResponseCache(self.cache_ttl_seconds)
        if self.session is None:
            pool = HTTPAdapter(pool_connections=self.config.max_connections, pool_maxsize=self.config.max_connections)
            self.session = requests.Session()
            for prefix in ("http://", "https://"):
                self.session.mount(prefix, pool)

    # scopes

    def scope_generation(self, scope: str) -> int:
        return self._generations.get(scope, 0)

    def advance_scope(self, scope: str) -> int:
        """Invalidate everything fetched under ``scope``; in-flight calls come back cancelled."""
        self._generations[scope] = self.scope_generation(scope) + 1
        self.cache.clear()
        logger.debug("http_scope_advanced", extra={"scope": scope, "generation": self._generations[scope]})
        return self._generations[scope]

    # requests

    def url_for(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        headers = {"Accept": "application/json", **(extra or {})}
        headers[TRACE_HEADER] = self.trace.ensure()
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        retry_mutation: bool = False,
        scope: str | None = None,
        generation: int | None = None,
        invalidate_paths: list[str] | None = None,
    ) -> Payload:
        verb = method.upper()
        url = self.url_for(path)
        request_headers = self._headers(headers)
        cache_key = None
        if verb == "GET" and self.enable_get_cache and use_get_cache:
            cache_key = ResponseCache.key(url, request_headers, params)
            cached = self.cache.get(cache_key)
            if cached is not None:
                self.last_call = CallRecord(module, operation, 0, "cached", self.trace.trace_id)
                return cached

        if scope is not None:
            if generation is None:
                generation = self.scope_generation(scope)
            self._ensure_current(scope, generation, "Request cancelled before dispatch")

        started = time.monotonic()
        response = self._send(
            verb,
            url,
            attempts=self.config.retries + 1 if verb in _IDEMPOTENT or retry_mutation else 1,
            headers=request_headers,
            json=dict(json_body) if json_body is not None else None,
            params=dict(params) if params is not None else None,
        )
        if scope is not None:
            self._ensure_current(scope, generation, "Request cancelled due to context switch")

        payload = self._parse(response, module=module, operation=operation, started=started)
        if cache_key and payload is not None:
            self.cache.put(cache_key, payload)
        if verb != "GET" and invalidate_paths:
            self.cache.drop_matching(invalidate_paths)
        return payload

    def upload(
        self,
        path: str,
        *,
        field: str,
        filename: str,
        content: bytes,
        content_type: str,
        headers: Mapping[str, str] | None = None,
        progress: ProgressCallback | None = None,
        module: str = "unknown",
        operation: str = "upload",
        invalidate_paths: list[str] | None = None,
    ) -> Payload:
        """POST one multipart file field, reporting body progress as it streams."""
        url = self.url_for(path)
        encoded = requests.Request("POST", url, files={field: (filename, content, content_type)}).prepare()
        request_headers = self._headers({k: v for k, v in (headers or {}).items() if k.lower() != "content-type"})
        request_headers["Content-Type"] = encoded.headers["Content-Type"]
        body = encoded.body if isinstance(encoded.body, bytes) else bytes(encoded.body or b"")
        reader = UploadProgressReader(body, progress)

        started = time.monotonic()
        response = self._send("POST", url, attempts=1, headers=request_headers, data=reader)
        payload = self._parse(response, module=module, operation=operation, started=started)
        reader.finish()
        if invalidate_paths:
            self.cache.drop_matching(invalidate_paths)
        return payload

    def _send(self, verb: str, url: str, *, attempts: int, **kwargs: Any) -> requests.Response:
        timeout = (self.config.connect_timeout_seconds, self.config.read_timeout_seconds)
        for attempt in range(1, attempts + 1):
            final = attempt == attempts
            try:
                response = self.session.request(verb, url, timeout=timeout, verify=self.config.verify_ssl, **kwargs)
            except requests.RequestException as exc:
                if final:
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=self.trace.ensure(),
                        status_code=0,
                    ) from exc
            else:
                if response.status_code < 500 or final:
                    return response
            logger.debug("http_retry", extra={"method": verb, "url": url, "attempt": attempt})
            time.sleep(self.config.retry_backoff_seconds * 2 ** (attempt - 1))
        raise RuntimeError("retry loop exited without a response")

    def _parse(self, response: requests.Response, *, module: str, operation: str, started: float) -> Payload:
        self.trace.adopt(headers=response.headers)
        elapsed = int((time.monotonic() - started) * 1000)
        if response.ok:
            self.last_call = CallRecord(module, operation, elapsed, "ok", self.trace.trace_id)
            return response.json() if response.content else None

        try:
            body = response.json()
        except json.JSONDecodeError:
            body = {"message": response.text}
        if not isinstance(body, dict):
            body = {"message": str(body)}
        self.trace.adopt(payload=body)
        self.last_call = CallRecord(module, operation, elapsed, "error", self.trace.trace_id)
        error = map_error(response.status_code, body, self.trace.trace_id)
        logger.info(
            "http_error",
            extra={"api_module": module, "operation": operation, "status": response.status_code, "code": error.code},
        )
        if isinstance(error, AuthError) and self.on_unauthorized:
            self.on_unauthorized(error)
        raise error

    def _ensure_current(self, scope: str, generation: int, message: str) -> None:
        if self.scope_generation(scope) == generation:
            return
        raise TransportError(
            code="REQUEST_CANCELLED",
            message=message,
            details={"scope": scope},
            trace_id=self.trace.trace_id,
            status_code=0,
        )
