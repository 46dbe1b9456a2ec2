"""
Derived View Models

Results of the aggregation engine, shaped for the presentation layer.
None of these are persisted; they are recomputed from the transaction
list on every query.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import Transaction


class FinancialSummary(BaseModel):
    """Totals shown on the dashboard stat cards."""

    total_income: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Sum of income amounts"
    )
    total_expenses: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Sum of expense amounts"
    )
    net_income: Decimal = Field(
        default=Decimal("0"),
        description="Income minus expenses (may be negative)"
    )
    savings_rate: Decimal = Field(
        default=Decimal("0"),
        description="Net income as a percentage of income; 0 when there is no income"
    )
    transaction_count: int = Field(
        default=0,
        ge=0
    )


class MonthlyTotal(BaseModel):
    """Income and expenses for one calendar month."""

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month in YYYY-MM format"
    )
    income: Decimal = Field(default=Decimal("0"), ge=0)
    expenses: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class ChartSeries(BaseModel):
    """
    A single chart-ready series.

    labels, values and colors are parallel lists.
    """

    title: str
    labels: list[str] = Field(default_factory=list)
    values: list[Decimal] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.values

    @property
    def total(self) -> Decimal:
        return sum(self.values, Decimal("0"))


class DashboardView(BaseModel):
    """Everything the dashboard page renders, computed in one pass."""

    period_label: str = Field(
        ...,
        description="Human-readable period the summary covers, e.g. 'March 2024'"
    )
    summary: FinancialSummary
    stat_cards: dict[str, str] = Field(
        default_factory=dict,
        description="Stat-card values formatted with the configured currency symbol"
    )
    recent_transactions: list[Transaction] = Field(default_factory=list)
    expense_breakdown: ChartSeries
    income_vs_expenses: ChartSeries
