"""CSV export package."""

from finance_tracker.export.csv_export import (
    CSV_HEADER,
    export_filename,
    format_amount,
    to_csv,
    write_csv,
)

__all__ = [
    "CSV_HEADER",
    "export_filename",
    "format_amount",
    "to_csv",
    "write_csv",
]
