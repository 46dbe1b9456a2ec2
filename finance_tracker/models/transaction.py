"""
Core Data Models for Finance Tracker

These models define the strict schemas for transactions and categories.
They are designed to:
1. Enforce type safety at runtime
2. Round-trip through the key-value store unchanged
3. Keep the web app's localStorage JSON layout (camelCase keys)

DESIGN DECISION: Amounts are magnitudes. The sign is implied by the type,
so an expense of 300 is stored as amount=300, type=expense.

KNOWN LIMITATION: amounts are held as Decimal but written to JSON as
numbers (via float), so digits beyond about 15 significant figures are
lost on save.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionFields(BaseModel):
    """
    The user-editable part of a transaction.

    Used both when adding a transaction and when updating one.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Magnitude of the transaction"
    )
    category: str = Field(
        ...,
        max_length=100,
        description="Category name, expected to match a known category"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Free-text description"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date the transaction occurred"
    )

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> Any:
        # JSON number, as in the web app's localStorage records
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)


class Transaction(TransactionFields):
    """
    A recorded income or expense event.

    `id` and `created_at` are assigned once by the store and never change.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique transaction ID"
    )
    created_at: dt.datetime = Field(
        ...,
        description="When the record was created (distinct from `date`)"
    )

    @property
    def editable_fields(self) -> TransactionFields:
        """The mutable part of this transaction."""
        return TransactionFields.model_validate(
            self.model_dump(include=set(TransactionFields.model_fields))
        )

    def with_fields(self, fields: TransactionFields) -> "Transaction":
        """Return a copy with the mutable fields replaced."""
        return self.model_copy(update=fields.model_dump())

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the type."""
        if self.type == TransactionType.EXPENSE:
            return -self.amount
        return self.amount


# =============================================================================
# CATEGORIES (static reference data)
# =============================================================================

class Category(BaseModel):
    """A label used to classify transactions for reporting."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: TransactionType
    color: str = Field(
        ...,
        pattern="^#[0-9A-Fa-f]{6}$",
        description="Display color (hex)"
    )
    icon: str


DEFAULT_CATEGORY_COLOR = "#6B7280"

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    # Income categories
    Category(id="1", name="Salary", type=TransactionType.INCOME, color="#10B981", icon="💰"),
    Category(id="2", name="Freelance", type=TransactionType.INCOME, color="#059669", icon="💻"),
    Category(id="3", name="Investment", type=TransactionType.INCOME, color="#047857", icon="📈"),
    Category(id="4", name="Other Income", type=TransactionType.INCOME, color="#065F46", icon="💵"),

    # Expense categories
    Category(id="5", name="Food & Dining", type=TransactionType.EXPENSE, color="#EF4444", icon="🍔"),
    Category(id="6", name="Transportation", type=TransactionType.EXPENSE, color="#F97316", icon="🚗"),
    Category(id="7", name="Shopping", type=TransactionType.EXPENSE, color="#8B5CF6", icon="🛍️"),
    Category(id="8", name="Entertainment", type=TransactionType.EXPENSE, color="#EC4899", icon="🎬"),
    Category(id="9", name="Bills & Utilities", type=TransactionType.EXPENSE, color="#F59E0B", icon="⚡"),
    Category(id="10", name="Healthcare", type=TransactionType.EXPENSE, color="#06B6D4", icon="🏥"),
    Category(id="11", name="Education", type=TransactionType.EXPENSE, color="#3B82F6", icon="📚"),
    Category(id="12", name="Other Expense", type=TransactionType.EXPENSE, color="#6B7280", icon="💸"),
)


def categories_for_type(transaction_type: TransactionType) -> list[Category]:
    """Categories offered by the add/edit form for the selected type."""
    return [c for c in DEFAULT_CATEGORIES if c.type == transaction_type]


def find_category(name: str) -> Optional[Category]:
    """Look up a default category by its (unique) name."""
    for category in DEFAULT_CATEGORIES:
        if category.name == name:
            return category
    return None


def category_color(name: str) -> str:
    """Display color for a category name; gray for unknown names."""
    category = find_category(name)
    return category.color if category else DEFAULT_CATEGORY_COLOR


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    """Convert a transaction to a JSON-friendly dict in stored (camelCase) form."""
    return transaction.model_dump(mode="json", by_alias=True)
