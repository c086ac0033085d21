"""CSV ingestion of debt records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping
from uuid import uuid4

import pandas as pd
from pydantic import ValidationError

from ..logging_config import get_logger
from ..models.debt_record import DebtRecord, DebtType

logger = get_logger(__name__)


@dataclass(slots=True)
class ColumnMapping:
    """Maps debt record fields to CSV headers."""

    name: str = "name"
    balance: str = "balance"
    rate: str = "rate"
    min_payment: str = "min_payment"
    debt_type: str = "type"
    id: str | None = "id"


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing.

    Every cell is read as text so amounts reach ``Decimal`` without float
    rounding.
    """

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    return frame


def _cell(row: Mapping, column: str | None) -> str:
    if not column:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return str(value).strip().replace(",", "").lstrip("$")


def parse_debt_rows(*, rows: Iterable[Mapping], mapping: ColumnMapping | None = None) -> list[DebtRecord]:
    """Convert dict-like rows into validated :class:`DebtRecord` objects.

    Rows with no name and no balance are skipped as blank lines. Any other
    invalid row raises ``ValueError`` naming its 1-based position.
    """

    mapping = mapping or ColumnMapping()
    records: list[DebtRecord] = []
    for index, row in enumerate(rows, start=1):
        name = _cell(row, mapping.name)
        balance = _cell(row, mapping.balance)
        if not name and not balance:
            continue

        raw_type = _cell(row, mapping.debt_type).lower() or DebtType.OTHER.value
        try:
            record = DebtRecord(
                id=_cell(row, mapping.id) or str(uuid4()),
                name=name,
                debt_type=DebtType(raw_type),
                rate=_cell(row, mapping.rate) or "0",
                balance=balance,
                min_payment=_cell(row, mapping.min_payment) or "0",
            )
        except (ValidationError, ValueError) as exc:
            raise ValueError(f"Invalid debt on row {index}: {exc}") from exc
        records.append(record)
    return records


def load_debt_records(
    *, file_path: Path, mapping: ColumnMapping | None = None, encoding: str = "utf-8"
) -> list[DebtRecord]:
    """Read debt records from a CSV file (``id,name,balance,rate,min_payment,type``)."""

    frame = normalize_frame(file_path=file_path, encoding=encoding)
    mapping = mapping or ColumnMapping()
    missing = [
        column
        for column in (mapping.name, mapping.balance, mapping.rate)
        if column not in frame.columns
    ]
    if missing:
        raise ValueError(f"CSV {file_path} is missing required columns: {', '.join(missing)}")

    records = parse_debt_rows(rows=frame.to_dict(orient="records"), mapping=mapping)
    logger.info("Loaded debt records", extra={"path": str(file_path), "count": len(records)})
    return records
