"""Month-by-month payoff simulation and result assembly."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional

from ..logging_config import get_logger
from .debts import ZERO, Debt, PaymentCell, PayoffStrategy, Period, allocate, as_decimal

logger = get_logger(__name__)

# Hard cap on simulated months (30 years); guarantees termination.
MAX_MONTHS = 360


class InsufficientBudgetError(ValueError):
    """The monthly budget does not cover the month-0 minimum payments."""

    def __init__(self, minimum_budget: Decimal, total_budget: Decimal) -> None:
        self.minimum_budget = minimum_budget
        self.total_budget = total_budget
        super().__init__(f"Monthly payment must be at least ${minimum_budget:,.2f}")


class ScheduleStatus(str, Enum):
    PAID_OFF = "paid_off"
    HORIZON_EXCEEDED = "horizon_exceeded"


@dataclass(frozen=True, slots=True)
class MonthlyPayment:
    """One debt's line in a month of the payoff schedule."""

    debt_id: str
    payment: Decimal
    interest: Decimal
    principal: Decimal
    new_balance: Decimal
    is_minimum: bool
    is_final: bool

    @classmethod
    def from_cell(cls, cell: PaymentCell) -> "MonthlyPayment":
        return cls(
            debt_id=cell.debt.id,
            payment=cell.payment,
            interest=cell.interest,
            principal=cell.principal,
            new_balance=cell.end_balance,
            is_minimum=cell.is_minimum_payment,
            is_final=cell.is_final_payment,
        )


@dataclass(frozen=True, slots=True)
class MonthlySchedule:
    """All payments made in one simulated month plus period totals."""

    month: int
    date: str
    payments: tuple[MonthlyPayment, ...]
    total_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal
    remaining_balance: Decimal

    @classmethod
    def from_period(cls, period: Period) -> "MonthlySchedule":
        return cls(
            month=period.month_index,
            date=period.label,
            payments=tuple(MonthlyPayment.from_cell(cell) for cell in period.cells),
            total_payment=period.total_payment,
            total_interest=period.total_interest,
            total_principal=period.total_principal,
            remaining_balance=period.remaining_balance,
        )


@dataclass(frozen=True, slots=True)
class PayoffResult:
    """Schedule and summary handed to the presentation layer."""

    strategy: PayoffStrategy
    total_monthly_payment: Decimal
    months: tuple[MonthlySchedule, ...]
    total_interest_paid: Decimal
    debt_free_date: Optional[str]
    months_to_payoff: int
    horizon_exceeded: bool

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["strategy"] = self.strategy.value
        return data


@dataclass(slots=True)
class Schedule:
    """Every simulated month of one payoff run, in order."""

    debts: tuple[Debt, ...]
    strategy: PayoffStrategy
    total_budget: Decimal
    periods: list[Period] = field(default_factory=list)
    status: ScheduleStatus = ScheduleStatus.PAID_OFF

    @property
    def months_to_payoff(self) -> int:
        return len(self.periods)

    @property
    def total_interest_paid(self) -> Decimal:
        return sum((period.total_interest for period in self.periods), ZERO)

    @property
    def debt_free_date(self) -> Optional[date]:
        if not self.periods:
            return None
        return self.periods[-1].month

    @property
    def remaining_balance(self) -> Decimal:
        if not self.periods:
            return ZERO
        return self.periods[-1].remaining_balance

    @property
    def horizon_exceeded(self) -> bool:
        return self.status is ScheduleStatus.HORIZON_EXCEEDED

    def to_payoff_result(self) -> PayoffResult:
        """Map the simulated periods into the externally consumed structure."""

        return PayoffResult(
            strategy=self.strategy,
            total_monthly_payment=self.total_budget,
            months=tuple(MonthlySchedule.from_period(period) for period in self.periods),
            total_interest_paid=self.total_interest_paid,
            debt_free_date=self.periods[-1].label if self.periods else None,
            months_to_payoff=self.months_to_payoff,
            horizon_exceeded=self.horizon_exceeded,
        )


def minimum_budget(debts: Iterable[Debt]) -> Decimal:
    """Return the sum of month-0 minimum payments for *debts*.

    This is the smallest budget :func:`calculate` accepts and needs no
    simulation beyond the first month's interest.
    """

    return sum((PaymentCell(debt).min_payment for debt in debts), ZERO)


def is_budget_sufficient(debts: Iterable[Debt], total_budget: Decimal | int | str) -> bool:
    return as_decimal(total_budget) >= minimum_budget(debts)


def calculate(
    debts: Iterable[Debt],
    strategy: PayoffStrategy | str,
    total_budget: Decimal | int | str,
    *,
    start_month: date,
) -> Schedule:
    """Simulate paying off *debts* with a fixed monthly budget.

    Runs until every balance is zero or :data:`MAX_MONTHS` months have been
    simulated. Raises :class:`InsufficientBudgetError` when the budget is
    below the month-0 minimum sum.
    """

    strategy = PayoffStrategy(strategy)
    budget = as_decimal(total_budget)
    if budget < 0:
        raise ValueError("Monthly budget cannot be negative.")
    debts = tuple(debts)
    schedule = Schedule(debts=debts, strategy=strategy, total_budget=budget)

    if not debts:
        logger.debug("No debts supplied; returning empty schedule")
        return schedule

    period = Period.create_first(debts, start_month)
    required = period.total_min_payment
    if budget < required:
        logger.warning(
            "Rejected payoff budget below minimum payments",
            extra={"total_budget": budget, "minimum_budget": required},
        )
        raise InsufficientBudgetError(required, budget)

    logger.debug(
        "Starting payoff simulation",
        extra={
            "strategy": strategy.value,
            "debts": len(debts),
            "total_budget": budget,
            "start_month": period.label,
        },
    )

    allocate(period, budget, strategy)
    schedule.periods.append(period)

    while True:
        if period.remaining_balance == 0:
            schedule.status = ScheduleStatus.PAID_OFF
            break
        if len(schedule.periods) >= MAX_MONTHS:
            schedule.status = ScheduleStatus.HORIZON_EXCEEDED
            logger.warning(
                "Payoff schedule truncated at horizon",
                extra={
                    "strategy": strategy.value,
                    "months": MAX_MONTHS,
                    "remaining_balance": period.remaining_balance,
                },
            )
            break
        period = period.next()
        allocate(period, budget, strategy)
        schedule.periods.append(period)

    period.close()
    logger.info(
        "Payoff simulation finished",
        extra={
            "strategy": strategy.value,
            "status": schedule.status.value,
            "months": schedule.months_to_payoff,
            "total_interest": schedule.total_interest_paid,
        },
    )
    return schedule


@dataclass(frozen=True, slots=True)
class StrategyComparison:
    """Avalanche and snowball results for the same debts and budget."""

    avalanche: PayoffResult
    snowball: PayoffResult

    @property
    def interest_savings(self) -> Decimal:
        """Interest avalanche saves over snowball (negative if it costs more)."""

        return self.snowball.total_interest_paid - self.avalanche.total_interest_paid

    @property
    def months_difference(self) -> int:
        return self.snowball.months_to_payoff - self.avalanche.months_to_payoff

    def for_strategy(self, strategy: PayoffStrategy | str) -> PayoffResult:
        if PayoffStrategy(strategy) is PayoffStrategy.AVALANCHE:
            return self.avalanche
        return self.snowball


def compare_strategies(
    debts: Iterable[Debt],
    total_budget: Decimal | int | str,
    *,
    start_month: date,
) -> StrategyComparison:
    """Run one independent simulation per strategy."""

    debts = tuple(debts)
    results = {
        strategy: calculate(debts, strategy, total_budget, start_month=start_month).to_payoff_result()
        for strategy in PayoffStrategy
    }
    return StrategyComparison(
        avalanche=results[PayoffStrategy.AVALANCHE],
        snowball=results[PayoffStrategy.SNOWBALL],
    )


__all__ = [
    "InsufficientBudgetError",
    "MAX_MONTHS",
    "MonthlyPayment",
    "MonthlySchedule",
    "PayoffResult",
    "Schedule",
    "ScheduleStatus",
    "StrategyComparison",
    "calculate",
    "compare_strategies",
    "is_budget_sufficient",
    "minimum_budget",
]
