"""
Strategy Resolver — maps a scenario Strategy onto exactly one payoff policy
and produces the debt order used for that month's extra payment.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from core.schema import PAYOFF_METHODS, DebtState, Strategy

from .base import PayoffPolicy
from .policies import Avalanche, CustomTarget, Snowball


def policy_for(strategy: Strategy) -> PayoffPolicy:
    """
    Select the payoff policy for `strategy.method`.

    "snowball" and "custom" map to their own policy; "avalanche" and any
    unrecognized method map to Avalanche, the default.
    """
    method = strategy.method
    if method == "snowball":
        return Snowball()
    if method == "custom":
        return CustomTarget(target_debt_id=strategy.custom_target_debt_id or None)
    return Avalanche()


def resolve_payoff_order(strategy: Strategy, debts: Sequence[DebtState]) -> List[str]:
    """Debt ids in the order the extra payment should be applied."""
    return policy_for(strategy).order(debts)


def fallback_reason(strategy: Strategy, debt_ids: Sequence[str]) -> Optional[str]:
    """
    Explain why `strategy` resolves to plain avalanche ordering against its
    intent, or None when it resolves as configured.
    """
    if strategy.method not in PAYOFF_METHODS:
        return f"Unknown payoff method {strategy.method!r}; avalanche order is used."
    if strategy.method == "custom":
        target = strategy.custom_target_debt_id
        if not target:
            return "Custom payoff method has no target debt; avalanche order is used."
        if target not in set(debt_ids):
            return f"Custom payoff target {target!r} is not a known debt; avalanche order is used."
    return None
