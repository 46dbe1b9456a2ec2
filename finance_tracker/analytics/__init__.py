"""Aggregation and chart series package."""

from finance_tracker.analytics.aggregation import (
    distinct_categories,
    filter_between,
    filter_by_month,
    filter_by_year,
    group_sum_by_category,
    month_bounds,
    monthly_totals,
    net_income,
    recent_transactions,
    savings_rate,
    search_transactions,
    summarize,
    total_by_type,
    year_bounds,
)
from finance_tracker.analytics.charts import (
    expense_breakdown_series,
    income_breakdown_series,
    income_vs_expenses_series,
)
from finance_tracker.analytics.formatting import (
    format_currency,
    format_date,
    format_percentage,
    format_signed,
    month_label,
)

__all__ = [
    # Aggregation
    "distinct_categories",
    "filter_between",
    "filter_by_month",
    "filter_by_year",
    "group_sum_by_category",
    "month_bounds",
    "monthly_totals",
    "net_income",
    "recent_transactions",
    "savings_rate",
    "search_transactions",
    "summarize",
    "total_by_type",
    "year_bounds",
    # Charts
    "expense_breakdown_series",
    "income_breakdown_series",
    "income_vs_expenses_series",
    # Formatting
    "format_currency",
    "format_date",
    "format_percentage",
    "format_signed",
    "month_label",
]
