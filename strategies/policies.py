"""
The three payoff policies: Avalanche, Snowball and CustomTarget.

Sorting is stable, so debts that tie on both keys keep their scenario order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.schema import DebtState

from .base import PayoffPolicy, avalanche_key, snowball_key


@dataclass(frozen=True)
class Avalanche(PayoffPolicy):
    """Highest interest rate first. Minimizes total interest for a fixed extra payment."""

    def order(self, debts: Sequence[DebtState]) -> List[str]:
        return [d.id for d in sorted(debts, key=avalanche_key)]


@dataclass(frozen=True)
class Snowball(PayoffPolicy):
    """Smallest balance first. Clears individual debts sooner."""

    def order(self, debts: Sequence[DebtState]) -> List[str]:
        return [d.id for d in sorted(debts, key=snowball_key)]


@dataclass(frozen=True)
class CustomTarget(PayoffPolicy):
    """
    A user-chosen debt first, everything else in avalanche order.

    When the target id is unset or not among the current debts the result is
    exactly the avalanche order.
    """

    target_debt_id: Optional[str] = None

    def order(self, debts: Sequence[DebtState]) -> List[str]:
        rest = Avalanche().order(debts)
        if self.target_debt_id is None or self.target_debt_id not in rest:
            return rest
        ordered = [self.target_debt_id]
        for debt_id in rest:
            if debt_id not in ordered:
                ordered.append(debt_id)
        return ordered
