from __future__ import annotations

from typing import Any, Iterable, Mapping

from .. import endpoints
from ..branch_rules import (
    duplicate_branch_payload,
    ensure_deletable,
    validate_branch_payload,
    validate_manager_pin,
)
from ..envelope import extract_list, extract_object
from ..exceptions import NotFoundError
from ..models_branches import Branch, BranchAnalytics
from ..validation import raise_for_issues
from .base import BaseClient


class BranchesClient(BaseClient):
    def list(self) -> list[Branch]:
        self._require_auth()
        data = self._data("GET", endpoints.MY_BRANCHES, module="branches", operation="list")
        return [Branch.model_validate(row) for row in extract_list(data, "branches")]

    def get(self, branch_id: str) -> Branch:
        for branch in self.list():
            if branch.secure_id == branch_id:
                return branch
        raise NotFoundError.local("BRANCH_NOT_FOUND", f"Branch {branch_id} not found", {"branch_id": branch_id})

    def create(self, payload: Mapping[str, Any]) -> Branch:
        self._require_auth()
        raise_for_issues(validate_branch_payload(payload))
        data = self._data(
            "POST",
            endpoints.MY_BRANCHES,
            json_body=dict(payload),
            module="branches",
            operation="create",
            invalidate_paths=[endpoints.MY_BRANCHES],
        )
        return Branch.model_validate(extract_object(data, "branch"))

    def update(self, branch_id: str, payload: Mapping[str, Any]) -> Branch:
        self._require_auth()
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.MY_BRANCHES, branch_id),
            json_body=dict(payload),
            module="branches",
            operation="update",
            invalidate_paths=[endpoints.MY_BRANCHES],
        )
        return Branch.model_validate(extract_object(data, "branch"))

    def delete(self, branch_id: str, *, branches: Iterable[Branch] | None = None) -> None:
        """Delete a branch; when the current list is known, refuse locally first."""
        self._require_auth()
        if branches is not None:
            known = list(branches)
            target = next((item for item in known if item.secure_id == branch_id), None)
            if target is not None:
                ensure_deletable(target, known)
        self._data(
            "DELETE",
            endpoints.resource(endpoints.MY_BRANCHES, branch_id),
            module="branches",
            operation="delete",
            invalidate_paths=[endpoints.MY_BRANCHES],
        )

    def toggle_status(self, branch_id: str) -> Branch:
        self._require_auth()
        data = self._data(
            "PATCH",
            endpoints.resource(endpoints.MY_BRANCHES, branch_id, "status"),
            module="branches",
            operation="toggle_status",
            invalidate_paths=[endpoints.MY_BRANCHES],
        )
        return Branch.model_validate(extract_object(data, "branch"))

    def duplicate(self, branch: Branch | Mapping[str, Any]) -> Branch:
        return self.create(duplicate_branch_payload(branch))

    def set_manager_pin(self, branch_id: str, pin: str) -> Branch | None:
        self._require_auth()
        raise_for_issues(validate_manager_pin(pin))
        data = self._data(
            "PUT",
            endpoints.resource(endpoints.MY_BRANCHES, branch_id, "manager-pin"),
            json_body={"manager_pin": pin},
            module="branches",
            operation="set_manager_pin",
            invalidate_paths=[endpoints.MY_BRANCHES],
        )
        if isinstance(data, dict) and data:
            return Branch.model_validate(extract_object(data, "branch"))
        return None

    def analytics(self, branch_id: str) -> BranchAnalytics:
        self._require_auth()
        data = self._data(
            "GET",
            endpoints.resource(endpoints.MY_BRANCHES, branch_id, "analytics"),
            module="branches",
            operation="analytics",
        )
        if not isinstance(data, dict):
            raise ValueError("Expected branch analytics response to be a JSON object")
        return BranchAnalytics.model_validate(data)
