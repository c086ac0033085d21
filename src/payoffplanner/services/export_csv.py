"""CSV export helpers for payoff schedules."""

from __future__ import annotations

import csv
from decimal import Decimal
from pathlib import Path

from .schedule import PayoffResult

SCHEDULE_HEADERS = [
    "month",
    "date",
    "debt_id",
    "payment",
    "interest",
    "principal",
    "new_balance",
    "is_minimum",
    "is_final",
]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def export_schedule_csv(*, result: PayoffResult, output_path: Path) -> Path:
    """Write one row per debt per month of *result* to `output_path`.

    Columns are deterministic (see ``SCHEDULE_HEADERS``). Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=SCHEDULE_HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for month in result.months:
            for payment in month.payments:
                writer.writerow(
                    {
                        "month": _serialize_value(month.month),
                        "date": _serialize_value(month.date),
                        "debt_id": _serialize_value(payment.debt_id),
                        "payment": _serialize_value(payment.payment),
                        "interest": _serialize_value(payment.interest),
                        "principal": _serialize_value(payment.principal),
                        "new_balance": _serialize_value(payment.new_balance),
                        "is_minimum": _serialize_value(payment.is_minimum),
                        "is_final": _serialize_value(payment.is_final),
                    }
                )

    return output_path
