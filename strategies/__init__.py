"""
Payoff strategies — decide which debt receives the monthly extra payment first.
"""

from .base import PayoffPolicy
from .policies import Avalanche, CustomTarget, Snowball
from .resolver import fallback_reason, policy_for, resolve_payoff_order

__all__ = [
    "PayoffPolicy",
    "Avalanche",
    "Snowball",
    "CustomTarget",
    "fallback_reason",
    "policy_for",
    "resolve_payoff_order",
]
