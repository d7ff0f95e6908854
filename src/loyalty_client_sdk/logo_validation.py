from __future__ import annotations

import mimetypes

from .validation import ValidationIssue, ValidationResult, result

ALLOWED_LOGO_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
MAX_LOGO_BYTES = 5 * 1024 * 1024


def guess_content_type(filename: str) -> str | None:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed


def validate_logo_file(filename: str, content_type: str | None, size: int) -> ValidationResult:
    issues: list[ValidationIssue] = []
    resolved_type = content_type or guess_content_type(filename)
    if resolved_type not in ALLOWED_LOGO_TYPES:
        issues.append(
            ValidationIssue(
                "logo",
                "Invalid file type. Please upload a JPEG, PNG, GIF, or WebP image.",
            )
        )
    if size <= 0:
        issues.append(ValidationIssue("logo", "File is empty"))
    elif size > MAX_LOGO_BYTES:
        issues.append(ValidationIssue("logo", "File size too large. Please upload an image smaller than 5MB."))
    return result(issues)
