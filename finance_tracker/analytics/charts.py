"""
Chart Series

Turns transactions into chart-ready series (labels, values, colors).
Rendering is the presentation layer's job.
"""

from collections.abc import Sequence

from finance_tracker.analytics.aggregation import group_sum_by_category, total_by_type
from finance_tracker.models.summary import ChartSeries
from finance_tracker.models.transaction import (
    Transaction,
    TransactionType,
    category_color,
)


INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"


def expense_breakdown_series(transactions: Sequence[Transaction]) -> ChartSeries:
    """Expenses per category, colored by the category table."""
    by_category = group_sum_by_category(transactions, TransactionType.EXPENSE)
    return ChartSeries(
        title="Expenses by Category",
        labels=list(by_category),
        values=list(by_category.values()),
        colors=[category_color(name) for name in by_category],
    )


def income_breakdown_series(transactions: Sequence[Transaction]) -> ChartSeries:
    """Income per category, colored by the category table."""
    by_category = group_sum_by_category(transactions, TransactionType.INCOME)
    return ChartSeries(
        title="Income by Category",
        labels=list(by_category),
        values=list(by_category.values()),
        colors=[category_color(name) for name in by_category],
    )


def income_vs_expenses_series(transactions: Sequence[Transaction]) -> ChartSeries:
    """Two bars: total income and total expenses."""
    return ChartSeries(
        title="Income vs Expenses",
        labels=["Income", "Expenses"],
        values=[
            total_by_type(transactions, TransactionType.INCOME),
            total_by_type(transactions, TransactionType.EXPENSE),
        ],
        colors=[INCOME_COLOR, EXPENSE_COLOR],
    )
