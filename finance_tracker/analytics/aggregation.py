"""
Aggregation Engine

DESIGN DECISION: Every function here is PURE.
It takes a snapshot of the transaction list and returns derived values.
No storage access, no caching, no side effects.

Everything is recomputed from the full list on each call. At personal
data volumes (thousands of records at most) a linear scan is cheap, and
there is no cache to invalidate when the list changes.

None of the functions assume the list is in any particular order.
"""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from finance_tracker.models.summary import FinancialSummary, MonthlyTotal
from finance_tracker.models.transaction import Transaction, TransactionType


ZERO = Decimal("0")

DateLike = Union[date, datetime]


def _as_date(reference: DateLike) -> date:
    """Reduce a datetime to its calendar date."""
    if isinstance(reference, datetime):
        return reference.date()
    return reference


# =============================================================================
# TIME WINDOWS
# =============================================================================

def month_bounds(reference: DateLike) -> tuple[date, date]:
    """First and last day of the calendar month containing `reference`."""
    day = _as_date(reference)
    last_day = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def year_bounds(reference: DateLike) -> tuple[date, date]:
    """First and last day of the calendar year containing `reference`."""
    day = _as_date(reference)
    return date(day.year, 1, 1), date(day.year, 12, 31)


def filter_between(
    transactions: Iterable[Transaction],
    start: DateLike,
    end: DateLike,
) -> list[Transaction]:
    """Transactions dated within [start, end], both boundaries inclusive."""
    start_day, end_day = _as_date(start), _as_date(end)
    return [t for t in transactions if start_day <= t.date <= end_day]


def filter_by_month(
    transactions: Iterable[Transaction],
    reference: DateLike,
) -> list[Transaction]:
    """Transactions in the calendar month containing `reference`."""
    return filter_between(transactions, *month_bounds(reference))


def filter_by_year(
    transactions: Iterable[Transaction],
    reference: DateLike,
) -> list[Transaction]:
    """Transactions in the calendar year containing `reference`."""
    return filter_between(transactions, *year_bounds(reference))


# =============================================================================
# TOTALS AND RATIOS
# =============================================================================

def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    """Sum of amounts of the given type. 0 for empty input."""
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        ZERO,
    )


def group_sum_by_category(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> dict[str, Decimal]:
    """
    Sum amounts per category among transactions of the given type.

    Categories without transactions are absent (not zero-filled).
    Keys appear in order of first occurrence.
    """
    totals: dict[str, Decimal] = {}
    for t in transactions:
        if t.type != transaction_type:
            continue
        totals[t.category] = totals.get(t.category, ZERO) + t.amount
    return totals


def net_income(transactions: Sequence[Transaction]) -> Decimal:
    """Income total minus expense total. May be negative."""
    return (
        total_by_type(transactions, TransactionType.INCOME)
        - total_by_type(transactions, TransactionType.EXPENSE)
    )


def savings_rate(transactions: Sequence[Transaction]) -> Decimal:
    """
    Net income as a percentage of income.

    POLICY: defined as 0 when there is no income, whatever the expenses.
    A rate against zero income has no meaning, so we report "no savings"
    rather than an infinity or an error.
    """
    income = total_by_type(transactions, TransactionType.INCOME)
    if income == ZERO:
        return ZERO
    return net_income(transactions) / income * 100


def summarize(transactions: Sequence[Transaction]) -> FinancialSummary:
    """All dashboard stat-card numbers for a set of transactions."""
    income = total_by_type(transactions, TransactionType.INCOME)
    expenses = total_by_type(transactions, TransactionType.EXPENSE)
    return FinancialSummary(
        total_income=income,
        total_expenses=expenses,
        net_income=income - expenses,
        savings_rate=savings_rate(transactions),
        transaction_count=len(transactions),
    )


def monthly_totals(transactions: Iterable[Transaction]) -> list[MonthlyTotal]:
    """Income and expenses per calendar month, oldest month first."""
    months: dict[str, dict[TransactionType, Decimal]] = {}
    for t in transactions:
        key = t.date.strftime("%Y-%m")
        bucket = months.setdefault(
            key,
            {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO},
        )
        bucket[t.type] += t.amount

    return [
        MonthlyTotal(
            month=key,
            income=bucket[TransactionType.INCOME],
            expenses=bucket[TransactionType.EXPENSE],
        )
        for key, bucket in sorted(months.items())
    ]


# =============================================================================
# LISTING HELPERS
# =============================================================================

def search_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    transaction_type: Optional[TransactionType] = None,
    category: Optional[str] = None,
) -> list[Transaction]:
    """
    Filter the transaction list the way the list view does.

    Args:
        search: Case-insensitive substring matched against description or category
        transaction_type: Keep only this type (None = all)
        category: Keep only this exact category (None = all)
    """
    needle = search.strip().lower()
    results = []
    for t in transactions:
        if needle and needle not in t.description.lower() and needle not in t.category.lower():
            continue
        if transaction_type is not None and t.type != transaction_type:
            continue
        if category is not None and t.category != category:
            continue
        results.append(t)
    return results


def distinct_categories(transactions: Iterable[Transaction]) -> list[str]:
    """Categories used by the transactions, in order of first appearance."""
    return list(dict.fromkeys(t.category for t in transactions))


def recent_transactions(
    transactions: Sequence[Transaction],
    limit: int = 10,
) -> list[Transaction]:
    """The first `limit` transactions in stored (newest-first) order."""
    return list(transactions[:max(limit, 0)])
