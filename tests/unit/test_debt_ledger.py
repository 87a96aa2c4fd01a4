"""
Debt ledger: one month of interest accrual, minimum payments and extra-payment allocation.
"""

import math

import pytest

from core.schema import Debt, DebtState, Strategy
from engine.debt import initialize_debts, step_debts_one_month, total_debt


def _state(debt_id, balance, apr=0.0, min_payment=0.0):
    return DebtState(id=debt_id, name=debt_id, balance=balance, apr=apr, min_payment=min_payment)


class TestInitializeDebts:
    """Working state is built from scenario debts with silent clamping"""

    def test_negative_values_are_clamped_to_zero(self):
        debts = initialize_debts([Debt(id="d1", name="Bad", balance=-50.0, apr=-0.1, min_payment=-10.0)])
        assert debts[0].balance == 0.0
        assert debts[0].apr == 0.0
        assert debts[0].min_payment == 0.0

    def test_non_finite_values_are_zeroed(self):
        debts = initialize_debts([Debt(id="d1", name="NaN", balance=math.nan, apr=math.inf, min_payment=math.nan)])
        assert (debts[0].balance, debts[0].apr, debts[0].min_payment) == (0.0, 0.0, 0.0)

    def test_balances_rounded_to_cents(self):
        debts = initialize_debts([Debt(id="d1", name="Card", balance=100.456, apr=0.2, min_payment=25.004)])
        assert debts[0].balance == 100.46
        assert debts[0].min_payment == 25.0


class TestStepDebtsOneMonth:
    """Order of operations: accrue, pay minimums, allocate extra, snap"""

    def test_interest_accrues_at_apr_over_twelve(self):
        result = step_debts_one_month([_state("d1", 1000.0, apr=0.12)], Strategy(extra_payment=0.0))
        assert result.interest_paid == 10.0
        assert result.debts[0].balance == 1010.0

    def test_minimum_payment_capped_at_balance(self):
        result = step_debts_one_month([_state("d1", 50.0, min_payment=100.0)], Strategy())
        assert result.min_paid == 50.0
        assert result.principal_paid == 50.0
        assert result.debts[0].balance == 0.0

    def test_minimum_counts_fully_as_principal(self):
        result = step_debts_one_month([_state("d1", 1200.0, apr=0.12, min_payment=100.0)], Strategy())
        assert result.interest_paid == 12.0
        assert result.min_paid == 100.0
        assert result.principal_paid == 100.0
        assert result.debts[0].balance == 1112.0

    def test_extra_payment_follows_avalanche_order(self):
        debts = [_state("low", 500.0, apr=0.06), _state("high", 1000.0, apr=0.12)]
        result = step_debts_one_month(debts, Strategy(method="avalanche", extra_payment=1100.0))

        balances = {d.id: d.balance for d in result.debts}
        assert balances["high"] == 0.0
        assert balances["low"] == 412.5
        assert result.interest_paid == 12.5
        assert result.extra_paid == 1100.0
        assert result.principal_paid == 1100.0

    def test_extra_payment_follows_snowball_order(self):
        debts = [_state("big", 1000.0), _state("small", 200.0)]
        result = step_debts_one_month(debts, Strategy(method="snowball", extra_payment=300.0))

        balances = {d.id: d.balance for d in result.debts}
        assert balances["small"] == 0.0
        assert balances["big"] == 900.0

    def test_custom_target_receives_extra_first(self):
        debts = [_state("a", 1000.0, apr=0.3), _state("b", 1000.0, apr=0.0)]
        result = step_debts_one_month(
            debts, Strategy(method="custom", extra_payment=200.0, custom_target_debt_id="b")
        )

        balances = {d.id: d.balance for d in result.debts}
        assert balances["b"] == 800.0
        assert balances["a"] == 1025.0

    def test_leftover_extra_is_not_spent(self):
        result = step_debts_one_month([_state("d1", 100.0)], Strategy(extra_payment=500.0))
        assert result.extra_paid == 100.0
        assert result.debts[0].balance == 0.0

    def test_paid_off_debt_stays_at_zero(self):
        result = step_debts_one_month([_state("d1", 0.0, apr=0.25, min_payment=50.0)], Strategy(extra_payment=100.0))
        assert result.interest_paid == 0.0
        assert result.min_paid == 0.0
        assert result.extra_paid == 0.0
        assert result.debts[0].balance == 0.0

    def test_sub_cent_balance_snaps_to_zero(self):
        result = step_debts_one_month([_state("d1", 0.004)], Strategy())
        assert result.debts[0].balance == 0.0

    def test_negative_extra_payment_is_ignored(self):
        result = step_debts_one_month([_state("d1", 100.0)], Strategy(extra_payment=-50.0))
        assert result.extra_paid == 0.0
        assert result.debts[0].balance == 100.0

    def test_input_states_are_not_modified(self):
        debts = (_state("d1", 1000.0, apr=0.12, min_payment=100.0),)
        step_debts_one_month(debts, Strategy(extra_payment=200.0))
        assert debts[0].balance == 1000.0

    @pytest.mark.parametrize("method", ["avalanche", "snowball", "custom"])
    def test_balances_never_negative(self, method):
        debts = [_state("a", 10.0, apr=0.2, min_payment=50.0), _state("b", 30.0, apr=0.1, min_payment=5.0)]
        result = step_debts_one_month(debts, Strategy(method=method, extra_payment=1000.0, custom_target_debt_id="b"))
        assert all(d.balance == 0.0 for d in result.debts)
        assert total_debt(result.debts) == 0.0


class TestTotalDebt:
    def test_sums_and_rounds(self):
        assert total_debt([_state("a", 0.1), _state("b", 0.2)]) == 0.3

    def test_empty(self):
        assert total_debt([]) == 0.0
