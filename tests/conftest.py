"""Pytest configuration and shared fixtures for PayoffPlanner tests.

Provides debt factories, an isolated data directory for config/logging and
helpers shared by the engine tests.
"""

from __future__ import annotations

import itertools
import logging
from datetime import date
from decimal import Decimal

import pytest

from payoffplanner.services.debts import Debt

START_MONTH = date(2025, 1, 1)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at a throwaway data dir and keep console logging quiet."""

    monkeypatch.setenv("PAYOFFPLANNER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PAYOFFPLANNER_ENV", "test")
    monkeypatch.setenv("PAYOFFPLANNER_DEV_MODE", "false")
    monkeypatch.delenv("PAYOFFPLANNER_DEFAULT_STRATEGY", raising=False)
    monkeypatch.delenv("PAYOFFPLANNER_LOG_LEVEL", raising=False)
    yield
    # setup_logging attaches handlers to streams/files owned by this test
    logger = logging.getLogger("payoffplanner")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for engine debts with sensible defaults.

    Returns:
        Callable: Function that creates :class:`Debt` instances
    """

    counter = itertools.count(1)

    def _create_debt(
        balance: str = "1000.00",
        rate: str = "0.12",
        fixed_min_payment: str | None = None,
        debt_id: str | None = None,
        name: str | None = None,
    ) -> Debt:
        number = next(counter)
        return Debt(
            id=debt_id or f"debt-{number}",
            name=name or f"Debt {number}",
            start_balance=Decimal(balance),
            annual_rate=Decimal(rate),
            fixed_min_payment=Decimal(fixed_min_payment) if fixed_min_payment is not None else None,
        )

    return _create_debt


@pytest.fixture
def two_debts(debt_factory):
    """A: $1000 at 20%, B: $500 at 10%. Both open with a $35 minimum."""

    return [
        debt_factory(balance="1000.00", rate="0.20", debt_id="a", name="Card A"),
        debt_factory(balance="500.00", rate="0.10", debt_id="b", name="Card B"),
    ]


@pytest.fixture
def start_month() -> date:
    return START_MONTH
