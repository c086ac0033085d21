"""Debt payoff engine primitives (debts, monthly cells, periods, allocation).

A simulation month is a :class:`Period` holding one :class:`PaymentCell` per
debt. Each cell rolls the prior month's ending balance forward, charges one
month of interest and starts out paying the debt's minimum. The allocator then
spreads whatever budget is left over the minimums across the cells in the
order dictated by the payoff strategy.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
MONTHS_PER_YEAR = Decimal(12)

# Revolving minimum: the greater of $35 (or the whole balance when smaller)
# and 1% of the balance plus the month's interest.
MIN_PAYMENT_FLOOR = Decimal("35.00")
MIN_PAYMENT_BALANCE_PCT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """Quantize to cents with round-half-even."""

    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def as_decimal(value: Decimal | int | str) -> Decimal:
    """Coerce a money/rate input into ``Decimal`` without going through float."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError("float amounts are not accepted; pass a str or Decimal")
    return Decimal(value)


def next_month(value: date) -> date:
    """Return the first day of the month after *value*."""

    month = value.month + 1
    year = value.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return value.replace(year=year, month=month, day=1)


class PayoffStrategy(str, Enum):
    """Order in which surplus budget is applied to debts."""

    AVALANCHE = "avalanche"  # highest annual rate first
    SNOWBALL = "snowball"  # lowest current balance first


@dataclass(frozen=True, slots=True)
class Debt:
    """A single liability as seen by the payoff engine.

    ``annual_rate`` is a fraction (``0.1899`` for 18.99% APR).
    ``fixed_min_payment`` is set for installment loans only; revolving credit
    leaves it ``None`` and falls back to the statement-minimum formula.
    """

    id: str
    name: str
    start_balance: Decimal
    annual_rate: Decimal
    fixed_min_payment: Optional[Decimal] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_balance", as_decimal(self.start_balance))
        object.__setattr__(self, "annual_rate", as_decimal(self.annual_rate))
        if self.fixed_min_payment is not None:
            object.__setattr__(self, "fixed_min_payment", as_decimal(self.fixed_min_payment))
        if self.start_balance < 0:
            raise ValueError(f"Debt {self.id!r} has a negative balance: {self.start_balance}")

    @property
    def is_installment(self) -> bool:
        return self.fixed_min_payment is not None

    def min_payment(self, start_balance: Decimal, interest: Decimal) -> Decimal:
        """Return the minimum payment due for a month opening at *start_balance*."""

        if start_balance <= 0:
            return ZERO

        if self.fixed_min_payment is not None:
            # Never ask for more than what retires the loan this month.
            return min(start_balance + interest, self.fixed_min_payment)

        return max(
            min(start_balance, MIN_PAYMENT_FLOOR),
            to_cents(start_balance * MIN_PAYMENT_BALANCE_PCT) + interest,
        )


class PaymentCell:
    """One debt's state for one simulated month.

    ``start_balance``, ``interest`` and ``min_payment`` are fixed at
    construction. ``payment`` starts at the minimum and may only grow through
    :meth:`add_payment` until the owning period closes the cell.
    """

    __slots__ = ("debt", "start_balance", "interest", "min_payment", "_payment", "_closed")

    def __init__(self, debt: Debt, prior: Optional["PaymentCell"] = None) -> None:
        self.debt = debt
        self.start_balance: Decimal = prior.end_balance if prior is not None else debt.start_balance
        self.interest: Decimal = to_cents(self.start_balance * debt.annual_rate / MONTHS_PER_YEAR)
        self.min_payment: Decimal = debt.min_payment(self.start_balance, self.interest)
        self._payment: Decimal = min(self.min_payment, self.payoff_amount)
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"PaymentCell(debt={self.debt.id!r}, start={self.start_balance}, "
            f"interest={self.interest}, payment={self._payment})"
        )

    @property
    def payoff_amount(self) -> Decimal:
        """Amount that retires the debt this month."""

        return self.start_balance + self.interest

    @property
    def payment(self) -> Decimal:
        return self._payment

    @property
    def room(self) -> Decimal:
        """How much more this cell can absorb before the debt hits zero."""

        return self.payoff_amount - self._payment

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def end_balance(self) -> Decimal:
        return max(ZERO, self.payoff_amount - self._payment)

    @property
    def principal(self) -> Decimal:
        return max(ZERO, self._payment - self.interest)

    @property
    def is_minimum_payment(self) -> bool:
        return self._payment == self.min_payment and self.end_balance > 0

    @property
    def is_final_payment(self) -> bool:
        return self._payment > 0 and self.end_balance == 0

    def add_payment(self, extra: Decimal) -> Decimal:
        """Apply up to *extra* on top of the current payment; return what is left."""

        if self._closed:
            raise RuntimeError(f"Cannot change payment for closed month of debt {self.debt.id!r}")
        if extra <= 0:
            return extra
        applied = min(extra, self.room)
        self._payment += applied
        return extra - applied

    def close(self) -> None:
        self._closed = True


class Period:
    """One simulated calendar month across every debt."""

    __slots__ = ("month_index", "month", "cells")

    def __init__(self, month_index: int, month: date, cells: Sequence[PaymentCell]) -> None:
        self.month_index = month_index
        self.month = month
        self.cells: tuple[PaymentCell, ...] = tuple(cells)

    def __repr__(self) -> str:
        return f"Period(index={self.month_index}, month={self.label}, cells={len(self.cells)})"

    @classmethod
    def create_first(cls, debts: Iterable[Debt], start_month: date) -> "Period":
        """Build month 0 from the debts' opening balances."""

        return cls(0, start_month.replace(day=1), [PaymentCell(debt) for debt in debts])

    def next(self) -> "Period":
        """Close this month and open the following one from its ending balances."""

        self.close()
        cells = [PaymentCell(cell.debt, cell) for cell in self.cells]
        return Period(self.month_index + 1, next_month(self.month), cells)

    def close(self) -> None:
        for cell in self.cells:
            cell.close()

    @property
    def label(self) -> str:
        """Calendar month as ``YYYY-MM``."""

        return self.month.strftime("%Y-%m")

    def cell_for(self, debt_id: str) -> PaymentCell:
        for cell in self.cells:
            if cell.debt.id == debt_id:
                return cell
        raise KeyError(debt_id)

    @property
    def total_min_payment(self) -> Decimal:
        return sum((cell.min_payment for cell in self.cells), ZERO)

    @property
    def total_payment(self) -> Decimal:
        return sum((cell.payment for cell in self.cells), ZERO)

    @property
    def total_interest(self) -> Decimal:
        return sum((cell.interest for cell in self.cells), ZERO)

    @property
    def total_principal(self) -> Decimal:
        return sum((cell.principal for cell in self.cells), ZERO)

    @property
    def remaining_balance(self) -> Decimal:
        return sum((cell.end_balance for cell in self.cells), ZERO)


_ORDER_KEYS: dict[PayoffStrategy, Callable[[PaymentCell], Decimal]] = {
    PayoffStrategy.AVALANCHE: lambda cell: -cell.debt.annual_rate,
    PayoffStrategy.SNOWBALL: lambda cell: cell.start_balance,
}


def order_cells(cells: Iterable[PaymentCell], strategy: PayoffStrategy) -> list[PaymentCell]:
    """Return the cells eligible for extra money, highest priority first.

    Debts already at zero are skipped. ``sorted`` is stable, so ties keep the
    order in which the debts were supplied.
    """

    key = _ORDER_KEYS[PayoffStrategy(strategy)]
    return sorted((cell for cell in cells if cell.start_balance > 0), key=key)


def allocate(period: Period, total_budget: Decimal, strategy: PayoffStrategy) -> Decimal:
    """Distribute the budget beyond the minimums across *period* in place.

    Returns the surplus that could not be applied because every debt was
    already retired this month. It is not carried into the next month.
    """

    extra = total_budget - period.total_min_payment
    if extra <= 0:
        return ZERO

    for cell in order_cells(period.cells, strategy):
        if extra <= 0:
            break
        extra = cell.add_payment(extra)

    return max(extra, ZERO)


__all__ = [
    "CENT",
    "Debt",
    "MIN_PAYMENT_FLOOR",
    "PayoffStrategy",
    "PaymentCell",
    "Period",
    "ZERO",
    "allocate",
    "as_decimal",
    "next_month",
    "order_cells",
    "to_cents",
]
