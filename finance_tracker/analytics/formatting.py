"""Display formatting for amounts, dates and periods."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.models.transaction import Transaction, TransactionType


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount like $1,234.56 (negative as -$1,234.56)."""
    rounded = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_signed(transaction: Transaction, symbol: str = "$") -> str:
    """Amount with a +/- prefix by type, as listed in the transaction views."""
    prefix = "+" if transaction.type == TransactionType.INCOME else "-"
    return f"{prefix}{format_currency(transaction.amount, symbol)}"


def format_percentage(value: Decimal) -> str:
    """One decimal place, e.g. 70.0%."""
    return f"{value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


def format_date(day: date) -> str:
    """e.g. Mar 01, 2024"""
    return day.strftime("%b %d, %Y")


def month_label(reference: date) -> str:
    """Label of the calendar month containing `reference`, e.g. March 2024."""
    return reference.strftime("%B %Y")
