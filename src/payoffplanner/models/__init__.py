"""Data model exports."""

from .debt_record import DebtRecord, DebtType, debts_from_records

__all__ = [
    "DebtRecord",
    "DebtType",
    "debts_from_records",
]
