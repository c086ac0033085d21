"""Debt records as supplied by the persistence/sync layer."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import ClassVar, Iterable
from uuid import uuid4

from sqlmodel import Field, SQLModel

from ..services.debts import Debt


class DebtType(str, Enum):
    AUTO = "auto"
    HOME = "home"
    CREDIT = "credit"
    SCHOOL = "school"
    PERSONAL = "personal"
    OTHER = "other"


class DebtRecord(SQLModel):
    """Installment or revolving debt as entered by the user.

    ``rate`` is the annual percentage (``18.99`` for 18.99% APR). The stated
    ``min_payment`` only drives the simulation for installment categories
    (auto and home loans); revolving categories use the statement-minimum
    formula and keep the stated value for display.
    """

    INSTALLMENT_TYPES: ClassVar[frozenset[DebtType]] = frozenset({DebtType.AUTO, DebtType.HOME})

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = Field(min_length=1, max_length=48)
    debt_type: DebtType = Field(default=DebtType.OTHER)
    rate: Decimal = Field(ge=0, le=100)
    balance: Decimal = Field(ge=0)
    min_payment: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def is_installment(self) -> bool:
        return self.debt_type in self.INSTALLMENT_TYPES

    def to_debt(self) -> Debt:
        """Build the engine's view of this record."""

        return Debt(
            id=self.id,
            name=self.name,
            start_balance=self.balance,
            annual_rate=self.rate / Decimal(100),
            fixed_min_payment=self.min_payment if self.is_installment else None,
        )


def debts_from_records(records: Iterable[DebtRecord]) -> list[Debt]:
    """Convert records to engine debts, preserving order."""

    return [record.to_debt() for record in records]


__all__ = ["DebtRecord", "DebtType", "debts_from_records"]
