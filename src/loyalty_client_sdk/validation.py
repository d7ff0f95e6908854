from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def first_message(self) -> str | None:
        if not self.issues:
            return None
        return self.issues[0].reason

    def by_field(self) -> dict[str, str]:
        mapped: dict[str, str] = {}
        for issue in self.issues:
            mapped[issue.field] = issue.reason
        return mapped


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        return f"{issue.field}: {issue.reason}"


def result(issues: list[ValidationIssue]) -> ValidationResult:
    return ValidationResult(ok=not issues, issues=issues)


def raise_for_issues(check: ValidationResult) -> None:
    if not check.ok:
        raise ClientValidationError(check.issues)


def require_text(value: str | None, field_name: str, issues: list[ValidationIssue], reason: str | None = None) -> bool:
    if value is None or not str(value).strip():
        issues.append(ValidationIssue(field=field_name, reason=reason or f"{field_name} is required"))
        return False
    return True
