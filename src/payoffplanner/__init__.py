"""PayoffPlanner debt payoff simulation package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, get_config
from .models import DebtRecord, DebtType, debts_from_records
from .services.debts import Debt, PayoffStrategy
from .services.schedule import (
    InsufficientBudgetError,
    PayoffResult,
    Schedule,
    calculate,
    compare_strategies,
    minimum_budget,
)

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "Debt",
    "DebtRecord",
    "DebtType",
    "DevConfig",
    "InsufficientBudgetError",
    "PayoffResult",
    "PayoffStrategy",
    "Schedule",
    "calculate",
    "compare_strategies",
    "debts_from_records",
    "get_config",
    "minimum_budget",
]
