"""
CSV Export

Fixed layout, kept byte-compatible with the files the web app
produced:

    Date,Type,Category,Description,Amount
    2024-01-01,expense,Food,"a,b",5

- One row per transaction, in the list's current order (no re-sorting)
- Description is ALWAYS wrapped in double quotes
- Every other field is written raw

KNOWN LIMITATION: nothing is escaped. A double quote inside a description,
or a comma inside a category, produces a row that CSV readers will split
differently. Kept as-is for compatibility with previously exported files.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from finance_tracker.config import get_settings
from finance_tracker.models.transaction import Transaction


CSV_HEADER = ("Date", "Type", "Category", "Description", "Amount")


def format_amount(amount: Decimal) -> str:
    """Plain notation without trailing zeros: 5, 12.5, 0.25."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _row(transaction: Transaction) -> str:
    return ",".join([
        transaction.date.isoformat(),
        transaction.type.value,
        transaction.category,
        f'"{transaction.description}"',
        format_amount(transaction.amount),
    ])


def to_csv(transactions: Iterable[Transaction]) -> bytes:
    """Encode transactions as a UTF-8 CSV document (no trailing newline)."""
    lines = [",".join(CSV_HEADER)]
    lines.extend(_row(t) for t in transactions)
    return "\n".join(lines).encode("utf-8")


def export_filename(today: Optional[date] = None, prefix: Optional[str] = None) -> str:
    """e.g. financial-data-2024-03-15.csv"""
    today = today or date.today()
    prefix = prefix or get_settings().app.export_filename_prefix
    return f"{prefix}-{today.isoformat()}.csv"


def write_csv(
    transactions: Iterable[Transaction],
    directory: Union[str, Path],
    today: Optional[date] = None,
    prefix: Optional[str] = None,
) -> Path:
    """
    Write the export into `directory` under the dated filename.

    Returns:
        Path of the written file
    """
    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(today, prefix)
    path.write_bytes(to_csv(transactions))
    return path
