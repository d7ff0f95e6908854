from __future__ import annotations

from dataclasses import dataclass

from ..services.errors import ServiceError


@dataclass
class ErrorBanner:
    message: str | None = None
    details: str | None = None
    trace_id: str | None = None

    @property
    def visible(self) -> bool:
        return self.message is not None

    def show(self, message: str, *, details: str | None = None, trace_id: str | None = None) -> None:
        self.message = message
        self.details = details
        self.trace_id = trace_id

    def show_error(self, error: ServiceError) -> None:
        self.show(error.message, details=error.details, trace_id=error.trace_id)

    def clear(self) -> None:
        self.message = None
        self.details = None
        self.trace_id = None
