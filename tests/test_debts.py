"""Tests for the payoff engine primitives: debts, payment cells and periods."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from payoffplanner.services.debts import Debt, PaymentCell, Period, next_month, to_cents


class TestMinimumPayment:
    """Minimum-payment rule for revolving and installment debts."""

    def test_revolving_uses_floor_when_formula_is_lower(self, debt_factory):
        debt = debt_factory(balance="1000.00", rate="0.12")
        cell = PaymentCell(debt)

        assert cell.interest == Decimal("10.00")
        # max(min(1000, 35), 1000 * 1% + 10) = max(35, 20)
        assert cell.min_payment == Decimal("35.00")
        assert cell.payment == Decimal("35.00")
        assert cell.end_balance == Decimal("975.00")
        assert cell.principal == Decimal("25.00")

    def test_revolving_uses_percent_plus_interest_when_higher(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="5000.00", rate="0.18"))

        assert cell.interest == Decimal("75.00")
        assert cell.min_payment == Decimal("125.00")

    def test_small_balance_minimum_is_whole_balance(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="20.00", rate="0"))

        assert cell.min_payment == Decimal("20.00")
        assert cell.end_balance == Decimal("0")
        assert cell.is_final_payment
        assert not cell.is_minimum_payment

    def test_small_balance_minimum_leaves_interest_behind(self, debt_factory):
        """Under $35 the floor is the balance itself, not balance plus interest."""
        cell = PaymentCell(debt_factory(balance="20.00", rate="0.12"))

        assert cell.interest == Decimal("0.20")
        assert cell.min_payment == Decimal("20.00")
        assert cell.end_balance == Decimal("0.20")
        assert cell.is_minimum_payment

    def test_zero_balance_has_no_minimum(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="0", rate="0.25"))

        assert cell.interest == Decimal("0")
        assert cell.min_payment == Decimal("0")
        assert cell.payment == Decimal("0")
        assert not cell.is_minimum_payment
        assert not cell.is_final_payment

    def test_installment_pays_fixed_amount(self, debt_factory):
        debt = debt_factory(balance="200.00", rate="0.06", fixed_min_payment="185.00")
        cell = PaymentCell(debt)

        assert cell.interest == Decimal("1.00")
        assert cell.min_payment == Decimal("185.00")
        assert cell.end_balance == Decimal("16.00")
        assert cell.is_minimum_payment

    def test_installment_final_month_pays_only_what_is_owed(self, debt_factory):
        debt = debt_factory(balance="200.00", rate="0.06", fixed_min_payment="185.00")
        following = PaymentCell(debt, PaymentCell(debt))

        assert following.start_balance == Decimal("16.00")
        assert following.interest == Decimal("0.08")
        assert following.min_payment == Decimal("16.08")
        assert following.end_balance == Decimal("0")
        assert following.is_final_payment

    def test_installment_ignores_percent_formula(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="8200.00", rate="0.0625", fixed_min_payment="185.00"))

        assert cell.interest == Decimal("42.71")
        assert cell.min_payment == Decimal("185.00")

    def test_min_payment_is_pure(self, debt_factory):
        debt = debt_factory(balance="1000.00", rate="0.12")

        assert debt.min_payment(Decimal("0"), Decimal("0")) == Decimal("0")
        assert debt.min_payment(Decimal("-5"), Decimal("0")) == Decimal("0")
        assert debt.min_payment(Decimal("300.00"), Decimal("3.00")) == Decimal("35")


class TestInterestRounding:
    """Interest is rounded to cents half-to-even."""

    def test_half_cent_rounds_to_even_down(self, debt_factory):
        # 15 * 10% / 12 = 0.125
        assert PaymentCell(debt_factory(balance="15.00", rate="0.10")).interest == Decimal("0.12")

    def test_half_cent_rounds_to_even_up(self, debt_factory):
        # 45 * 10% / 12 = 0.375
        assert PaymentCell(debt_factory(balance="45.00", rate="0.10")).interest == Decimal("0.38")

    def test_to_cents(self):
        assert to_cents(Decimal("121.875")) == Decimal("121.88")
        assert to_cents(Decimal("2.665")) == Decimal("2.66")


class TestDebtValidation:
    def test_negative_balance_rejected(self):
        with pytest.raises(ValueError):
            Debt(id="x", name="Bad", start_balance=Decimal("-1"), annual_rate=Decimal("0.1"))

    def test_float_amounts_rejected(self):
        with pytest.raises(TypeError):
            Debt(id="x", name="Float", start_balance=100.5, annual_rate=Decimal("0.1"))

    def test_string_amounts_coerced(self):
        debt = Debt(id="x", name="Text", start_balance="250.00", annual_rate="0.05", fixed_min_payment="50")

        assert debt.start_balance == Decimal("250.00")
        assert debt.fixed_min_payment == Decimal("50")
        assert debt.is_installment

    def test_debt_is_immutable(self, debt_factory):
        debt = debt_factory()
        with pytest.raises(AttributeError):
            debt.start_balance = Decimal("1")  # type: ignore[misc]


class TestAddPayment:
    def test_extra_within_room_is_fully_absorbed(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="1000.00", rate="0.12"))

        remainder = cell.add_payment(Decimal("100.00"))

        assert remainder == Decimal("0")
        assert cell.payment == Decimal("135.00")
        assert cell.end_balance == Decimal("875.00")

    def test_extra_beyond_payoff_returns_remainder(self, debt_factory):
        cell = PaymentCell(debt_factory(balance="1000.00", rate="0.12"))

        remainder = cell.add_payment(Decimal("2000.00"))

        assert cell.payment == Decimal("1010.00")
        assert remainder == Decimal("1025.00")
        assert cell.end_balance == Decimal("0")
        assert cell.is_final_payment

    def test_non_positive_extra_is_ignored(self, debt_factory):
        cell = PaymentCell(debt_factory())

        assert cell.add_payment(Decimal("0")) == Decimal("0")
        assert cell.payment == cell.min_payment

    def test_closed_cell_rejects_payment(self, debt_factory):
        cell = PaymentCell(debt_factory())
        cell.close()

        with pytest.raises(RuntimeError):
            cell.add_payment(Decimal("1.00"))


class TestPeriod:
    def test_create_first_normalizes_month(self, two_debts):
        period = Period.create_first(two_debts, date(2025, 3, 17))

        assert period.month_index == 0
        assert period.month == date(2025, 3, 1)
        assert period.label == "2025-03"
        assert [cell.debt.id for cell in period.cells] == ["a", "b"]

    def test_totals_are_sums_over_cells(self, two_debts, start_month):
        period = Period.create_first(two_debts, start_month)

        # A: 1000 * 20% / 12 = 16.67, B: 500 * 10% / 12 = 4.17
        assert period.total_interest == Decimal("20.84")
        assert period.total_min_payment == Decimal("70.00")
        assert period.total_payment == Decimal("70.00")
        assert period.remaining_balance == Decimal("1000.00") + Decimal("500.00") + Decimal("20.84") - Decimal("70.00")
        assert period.total_principal == Decimal("70.00") - Decimal("20.84")

    def test_next_rolls_balances_and_closes_prior(self, two_debts, start_month):
        first = Period.create_first(two_debts, start_month)
        second = first.next()

        assert second.month_index == 1
        assert second.label == "2025-02"
        assert all(cell.closed for cell in first.cells)
        assert not any(cell.closed for cell in second.cells)
        for before, after in zip(first.cells, second.cells):
            assert after.debt is before.debt
            assert after.start_balance == before.end_balance

    def test_paid_off_debt_keeps_a_zero_cell(self, debt_factory, start_month):
        debt = debt_factory(balance="20.00", rate="0")
        second = Period.create_first([debt], start_month).next()

        cell = second.cell_for(debt.id)
        assert cell.start_balance == Decimal("0")
        assert cell.interest == Decimal("0")
        assert cell.min_payment == Decimal("0")
        assert cell.payment == Decimal("0")

    def test_cell_for_unknown_debt(self, two_debts, start_month):
        period = Period.create_first(two_debts, start_month)
        with pytest.raises(KeyError):
            period.cell_for("missing")

    def test_next_month_rolls_over_year(self):
        assert next_month(date(2024, 12, 1)) == date(2025, 1, 1)
        assert next_month(date(2025, 1, 31)) == date(2025, 2, 1)
