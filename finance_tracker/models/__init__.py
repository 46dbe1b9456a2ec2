"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
Everything read from or written to storage conforms to these schemas.
"""

from finance_tracker.models.transaction import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    Category,
    Transaction,
    TransactionFields,
    TransactionType,
    categories_for_type,
    category_color,
    find_category,
    transaction_to_dict,
)
from finance_tracker.models.user import (
    Credential,
    Session,
    User,
)
from finance_tracker.models.summary import (
    ChartSeries,
    DashboardView,
    FinancialSummary,
    MonthlyTotal,
)
from finance_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY_COLOR",
    "Category",
    "Transaction",
    "TransactionFields",
    "TransactionType",
    "categories_for_type",
    "category_color",
    "find_category",
    "transaction_to_dict",
    # User models
    "Credential",
    "Session",
    "User",
    # Derived views
    "ChartSeries",
    "DashboardView",
    "FinancialSummary",
    "MonthlyTotal",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
