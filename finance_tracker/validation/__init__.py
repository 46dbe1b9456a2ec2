"""Submission validation package."""

from finance_tracker.validation.validator import (
    REQUIRED_TRANSACTION_FIELDS,
    TransactionValidator,
    validate_signup,
)

__all__ = [
    "REQUIRED_TRANSACTION_FIELDS",
    "TransactionValidator",
    "validate_signup",
]
