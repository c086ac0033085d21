"""Service module exports."""

from . import debts, demo, export_csv, import_csv, schedule

__all__ = [
    "debts",
    "demo",
    "export_csv",
    "import_csv",
    "schedule",
]
