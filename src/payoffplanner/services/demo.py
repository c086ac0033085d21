"""Sample debt portfolio for trying out the planner."""

from __future__ import annotations

from decimal import Decimal

from ..models.debt_record import DebtRecord, DebtType

# Credit cards use 1% of balance + interest for the simulated minimum;
# the car loan keeps its fixed installment.
DEMO_DEBTS = (
    ("demo-chase", "Credit Card - Chase", DebtType.CREDIT, "18.99", "15420.00", "397.00"),
    ("demo-student", "Student Loan", DebtType.SCHOOL, "4.5", "32500.00", "447.00"),
    ("demo-car", "Car Loan", DebtType.AUTO, "6.25", "8200.00", "185.00"),
    ("demo-discover", "Credit Card - Discover", DebtType.CREDIT, "24.99", "3850.00", "119.00"),
    ("demo-personal", "Personal Loan", DebtType.PERSONAL, "11.99", "19500.00", "390.00"),
)


def demo_debt_records() -> list[DebtRecord]:
    """Return fresh copies of the demo records."""

    return [
        DebtRecord(
            id=debt_id,
            name=name,
            debt_type=debt_type,
            rate=Decimal(rate),
            balance=Decimal(balance),
            min_payment=Decimal(min_payment),
        )
        for debt_id, name, debt_type, rate, balance, min_payment in DEMO_DEBTS
    ]
