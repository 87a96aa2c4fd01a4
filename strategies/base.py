"""
Base class for debt payoff ordering policies.
A policy only decides which debt receives the extra payment first; minimum
payments are always made on every open debt regardless of order.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from core.schema import DebtState


def avalanche_key(debt: DebtState) -> Tuple[float, float]:
    """Highest APR first, smaller balance breaks ties."""
    return (-debt.apr, debt.balance)


def snowball_key(debt: DebtState) -> Tuple[float, float]:
    """Smallest balance first, higher APR breaks ties."""
    return (debt.balance, -debt.apr)


class PayoffPolicy:
    """Interface for producing the extra-payment order of a set of debts."""

    def order(self, debts: Sequence[DebtState]) -> List[str]:
        raise NotImplementedError
