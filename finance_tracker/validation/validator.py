"""
Submission Validation

DESIGN DECISION: Validation is presence checks plus type coercion, nothing more.
The form must supply an amount, a category and a description; type and
date fall back to the form defaults (expense, today).

A failed validation is a DECLINED operation: the caller gets a
ValidationResult back and re-prompts the user. Nothing is raised and
nothing is written.

Category names are expected to match the default categories for the
selected type, but this is not enforced. A mismatch is a warning only.
"""

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from finance_tracker.models.transaction import (
    TransactionFields,
    TransactionType,
    find_category,
)
from finance_tracker.models.validation import ValidationIssue, ValidationResult


REQUIRED_TRANSACTION_FIELDS = {
    "amount": "Amount",
    "category": "Category",
    "description": "Description",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _missing(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=f"{label} is required",
        severity="error",
    )


class TransactionValidator:
    """Validates add/edit form submissions."""

    def __init__(self, today: Optional[Callable[[], date]] = None):
        """
        Args:
            today: Source of the default transaction date. Defaults to date.today.
        """
        self._today = today or date.today

    def _check_presence(self, data: Mapping[str, Any]) -> list[ValidationIssue]:
        return [
            _missing(field, label)
            for field, label in REQUIRED_TRANSACTION_FIELDS.items()
            if _is_blank(data.get(field))
        ]

    def _parse(
        self,
        data: Mapping[str, Any],
    ) -> tuple[Optional[TransactionFields], list[ValidationIssue]]:
        """Coerce the raw form values into TransactionFields."""
        candidate = {
            "type": data.get("type") or TransactionType.EXPENSE,
            "amount": data.get("amount"),
            "category": data.get("category"),
            "description": data.get("description"),
            "date": data.get("date") or self._today(),
        }

        try:
            return TransactionFields.model_validate(candidate), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "transaction"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_value",
                    message=f"{field.capitalize()}: {error['msg']}",
                    severity="error",
                ))
            return None, issues

    def _check_category(self, fields: TransactionFields) -> list[ValidationIssue]:
        category = find_category(fields.category)
        if category is not None and category.type == fields.type:
            return []
        return [ValidationIssue(
            field="category",
            issue_type="unknown_category",
            message=f"'{fields.category}' is not a known {fields.type.value} category",
            severity="warning",
        )]

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a raw submission.

        Args:
            data: Form values keyed by type, amount, category, description, date

        Returns:
            ValidationResult; `parsed` is set only when valid
        """
        issues = self._check_presence(data)
        if issues:
            return ValidationResult(is_valid=False, issues=issues)

        parsed, issues = self._parse(data)
        if parsed is None:
            return ValidationResult(is_valid=False, issues=issues)

        issues = self._check_category(parsed)
        return ValidationResult(
            is_valid=True,
            issues=issues,
            warnings=[issue.message for issue in issues],
            parsed=parsed,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short message to show next to the form."""
        if result.is_valid and not result.warnings:
            return "Transaction saved."

        lines = []
        if not result.is_valid:
            lines.append("Please fill in the missing details:")
            for message in result.error_messages:
                lines.append(f"   • {message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)


def validate_signup(email: str, password: str, name: str) -> ValidationResult:
    """Presence checks for the signup form."""
    issues = [
        _missing(field, label)
        for field, label, value in (
            ("email", "Email", email),
            ("password", "Password", password),
            ("name", "Name", name),
        )
        if _is_blank(value)
    ]
    return ValidationResult(is_valid=not issues, issues=issues)
