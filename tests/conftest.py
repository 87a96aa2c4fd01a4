"""Shared pytest configuration and scenario builders for the test suite."""
from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable

import pytest


# Ensure the repository root (which holds the top-level packages) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.schema import Debt, Expense, Income, OneTimeItem, Scenario, Settings, Strategy  # noqa: E402


def build_scenario(**overrides) -> Scenario:
    """Income 1000/mo, expenses 900/mo, no debts, 3 months, cash 100, buffer 100."""
    scenario = Scenario(
        id="s1",
        name="Test",
        incomes=(Income(id="i1", name="Income", amount=1000.0),),
        expenses=(Expense(id="e1", name="Expense", amount=900.0, category="fixed"),),
        one_time_items=(),
        debts=(),
        strategy=Strategy(method="avalanche", extra_payment=0.0),
        settings=Settings(
            start_date_iso="2026-01-01",
            months=3,
            cash_buffer=100.0,
            starting_cash=100.0,
        ),
        created_at_iso="2026-01-01T00:00:00.000Z",
        updated_at_iso="2026-01-01T00:00:00.000Z",
    )
    return replace(scenario, **overrides)


@pytest.fixture
def make_scenario() -> Callable[..., Scenario]:
    return build_scenario


@pytest.fixture
def base_scenario() -> Scenario:
    return build_scenario()


@pytest.fixture
def debt_scenario() -> Scenario:
    """Income 1000, expenses 600, one 0% debt of 1000 with 300 minimum, 4 months, cash 500."""
    return build_scenario(
        expenses=(Expense(id="e1", name="Expense", amount=600.0, category="fixed"),),
        debts=(Debt(id="d1", name="Debt", balance=1000.0, apr=0.0, min_payment=300.0),),
        settings=Settings(
            start_date_iso="2026-01-01",
            months=4,
            cash_buffer=100.0,
            starting_cash=500.0,
        ),
    )


@pytest.fixture
def household_scenario() -> Scenario:
    """Several debts, one-time items and an extra payment over two years."""
    return build_scenario(
        id="household",
        name="Household",
        incomes=(
            Income(id="i1", name="Paycheck", amount=4000.0),
            Income(id="i2", name="Side gig", amount=350.0),
        ),
        expenses=(
            Expense(id="e1", name="Rent", amount=1500.0, category="fixed"),
            Expense(id="e2", name="Food", amount=650.0, category="variable"),
        ),
        debts=(
            Debt(id="card", name="Credit Card", balance=4500.0, apr=0.2499, min_payment=150.0),
            Debt(id="car", name="Car Loan", balance=9000.0, apr=0.069, min_payment=280.0),
            Debt(id="store", name="Store Card", balance=800.0, apr=0.2499, min_payment=40.0),
        ),
        one_time_items=(
            OneTimeItem(id="o1", name="Tax refund", amount=1200.0, month_index=3, kind="income"),
            OneTimeItem(id="o2", name="Car repair", amount=900.0, month_index=5, kind="expense"),
        ),
        strategy=Strategy(method="avalanche", extra_payment=400.0),
        settings=Settings(
            start_date_iso="2026-01-01",
            months=24,
            cash_buffer=1000.0,
            starting_cash=1500.0,
        ),
    )
