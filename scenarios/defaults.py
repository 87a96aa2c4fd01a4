"""
Starter scenario shown when nothing has been loaded yet.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from core.schema import Debt, Expense, Income, Scenario, Settings, Strategy


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    """UTC timestamp, e.g. 2026-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_scenario(today: Optional[date] = None) -> Scenario:
    today = today or datetime.now(timezone.utc).date()
    stamp = now_iso()
    return Scenario(
        id=new_id(),
        name="Base Scenario",
        incomes=(
            Income(id=new_id(), name="Paycheck", amount=4000.0),
        ),
        expenses=(
            Expense(id=new_id(), name="Rent/Mortgage", amount=1200.0, category="fixed"),
            Expense(id=new_id(), name="Utilities", amount=250.0, category="fixed"),
            Expense(id=new_id(), name="Food", amount=600.0, category="variable"),
            Expense(id=new_id(), name="Gas", amount=200.0, category="variable"),
        ),
        debts=(
            Debt(id=new_id(), name="Credit Card", balance=4500.0, apr=0.2499, min_payment=150.0),
        ),
        one_time_items=(),
        strategy=Strategy(method="avalanche", extra_payment=200.0),
        settings=Settings(
            start_date_iso=f"{today.year:04d}-{today.month:02d}-01",
            months=36,
            cash_buffer=1000.0,
            starting_cash=500.0,
        ),
        created_at_iso=stamp,
        updated_at_iso=stamp,
    )
