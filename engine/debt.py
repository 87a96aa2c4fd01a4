"""
Debt Ledger — advances every debt by exactly one calendar month.

Order of operations within a month:
  1. Accrue simple monthly interest (apr / 12) on every open balance
  2. Pay the minimum on every open debt, capped at its balance
  3. Apply the strategy's extra payment greedily in payoff order
  4. Snap sub-cent balances to zero

Minimum payments are counted entirely as principal even though part of them
covers the interest accrued in step 1 (simplified accounting, kept so saved
projections stay reproducible).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import Debt, DebtState, Strategy
from core.utils import finite_or, non_negative_money, round2
from strategies.resolver import resolve_payoff_order


@dataclass(frozen=True)
class DebtStepResult:
    """Result of simulating all debts for one month."""
    interest_paid: float
    principal_paid: float
    min_paid: float
    extra_paid: float
    debts: Tuple[DebtState, ...]


def monthly_rate(apr: float) -> float:
    return apr / 12.0


def initialize_debts(debts: Iterable[Debt]) -> Tuple[DebtState, ...]:
    """Working copies of the scenario debts with balance, rate and minimum clamped to >= 0."""
    return tuple(
        DebtState(
            id=d.id,
            name=d.name,
            balance=non_negative_money(d.balance),
            apr=max(0.0, finite_or(d.apr, 0.0)),
            min_payment=non_negative_money(d.min_payment),
        )
        for d in debts
    )


def total_debt(debts: Iterable[DebtState]) -> float:
    total = 0.0
    for d in debts:
        total += d.balance
    return round2(total)


def step_debts_one_month(
    debts: Sequence[DebtState],
    strategy: Strategy,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DebtStepResult:
    """
    Advance `debts` by one month under `strategy`.

    Returns new DebtState values; the input sequence is left untouched.
    Leftover extra payment (more than the remaining total debt) is not spent.
    """
    # 1) accrue interest
    interest_paid = 0.0
    balances: List[float] = []
    for d in debts:
        if d.balance <= 0:
            balances.append(0.0)
            continue
        interest = round2(d.balance * monthly_rate(d.apr))
        interest_paid = round2(interest_paid + interest)
        balances.append(round2(d.balance + interest))

    # 2) pay minimums
    min_paid = 0.0
    principal_paid = 0.0
    for i, d in enumerate(debts):
        if balances[i] <= 0:
            continue
        pay = min(d.min_payment, balances[i])
        min_paid = round2(min_paid + pay)
        balances[i] = round2(balances[i] - pay)
        principal_paid = round2(principal_paid + pay)

    # 3) allocate extra payment; first debt wins when ids repeat
    extra_paid = 0.0
    extra = non_negative_money(strategy.extra_payment)
    position = {}
    for i, d in enumerate(debts):
        position.setdefault(d.id, i)

    current = [replace(d, balance=balances[i]) for i, d in enumerate(debts)]
    for debt_id in resolve_payoff_order(strategy, current):
        if extra <= 0:
            break
        i = position.get(debt_id)
        if i is None or balances[i] <= 0:
            continue
        pay = min(extra, balances[i])
        extra_paid = round2(extra_paid + pay)
        balances[i] = round2(balances[i] - pay)
        principal_paid = round2(principal_paid + pay)
        extra = round2(extra - pay)

    # 4) snap sub-cent residue
    threshold = config.balance_snap_threshold
    next_debts = tuple(
        replace(d, balance=0.0 if balances[i] < threshold else balances[i])
        for i, d in enumerate(debts)
    )

    return DebtStepResult(
        interest_paid=round2(interest_paid),
        principal_paid=round2(principal_paid),
        min_paid=round2(min_paid),
        extra_paid=round2(extra_paid),
        debts=next_debts,
    )
