from __future__ import annotations

import logging
from typing import Any, Mapping

from loyalty_client_sdk import ApiSession, Branch
from loyalty_client_sdk.branch_rules import (
    BranchSummary,
    apply_location,
    filter_branches,
    reconstruct_location,
    summarize,
)

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class BranchesService:
    """Branch list state for the branches tab: load, filter, mutate, reload."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.branches: list[Branch] = []

    def load(self) -> list[Branch]:
        try:
            self.branches = self.session.branches_client().list()
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("branches_loaded", extra={"count": len(self.branches)})
        return self.branches

    def visible(self, *, status: str | None = "all", city: str | None = "all", search: str | None = "") -> list[Branch]:
        return filter_branches(self.branches, status=status, city=city, search=search)

    def cities(self) -> list[str]:
        return sorted({branch.city for branch in self.branches if branch.city})

    def summary(self) -> BranchSummary:
        return summarize(self.branches)

    def find(self, branch_id: str) -> Branch | None:
        return next((branch for branch in self.branches if branch.secure_id == branch_id), None)

    def edit_location(self, branch_id: str) -> dict[str, Any] | None:
        branch = self.find(branch_id)
        return reconstruct_location(branch) if branch else None

    def create(self, payload: Mapping[str, Any], *, location: Mapping[str, Any] | None = None) -> Branch:
        body = apply_location(dict(payload), location)
        try:
            created = self.session.branches_client().create(body)
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("branch_create_success", extra={"branch_id": created.secure_id})
        self.load()
        return created

    def update(self, branch_id: str, payload: Mapping[str, Any], *, location: Mapping[str, Any] | None = None) -> Branch:
        body = apply_location(dict(payload), location)
        try:
            updated = self.session.branches_client().update(branch_id, body)
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("branch_update_success", extra={"branch_id": branch_id})
        self.load()
        return updated

    def delete(self, branch_id: str) -> None:
        try:
            self.session.branches_client().delete(branch_id, branches=self.branches)
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("branch_delete_success", extra={"branch_id": branch_id})
        self.load()

    def toggle_status(self, branch_id: str) -> Branch:
        try:
            toggled = self.session.branches_client().toggle_status(branch_id)
        except Exception as exc:
            raise normalize_error(exc) from exc
        self.load()
        return toggled

    def duplicate(self, branch_id: str) -> Branch:
        source = self.find(branch_id)
        if source is None:
            raise ServiceError(message=f"Branch {branch_id} not found", code="BRANCH_NOT_FOUND")
        try:
            copy = self.session.branches_client().duplicate(source)
        except Exception as exc:
            raise normalize_error(exc) from exc
        logger.info("branch_duplicate_success", extra={"source_id": branch_id, "branch_id": copy.secure_id})
        self.load()
        return copy
