"""
Safe-Spend Solver — largest one-time expense a scenario can absorb in a given
month without projected cash ever falling below the buffer.

Safety is monotone in the amount: a bigger expense in one month can only
lower or keep every later cash value, so worst cash never rises. That lets
the solver binary-search whole cents between 0 and the configured cap, each
probe being a full re-projection of the scenario with one synthetic expense
appended.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable, Optional

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import OneTimeItem, Scenario
from core.utils import clamp, finite_or, money, round2
from strategies.resolver import fallback_reason

from .projection import project_scenario, scenario_horizon

logger = logging.getLogger(__name__)

PROBE_ITEM_ID = "safe-spend-probe"


def build_probe_expense(amount: float, month_index: int) -> OneTimeItem:
    return OneTimeItem(
        id=PROBE_ITEM_ID,
        name="Safe Spend Test",
        amount=amount,
        month_index=month_index,
        kind="expense",
    )


def _clamp_month(scenario: Scenario, month_index, config: EngineConfig) -> int:
    months = scenario_horizon(scenario, config)
    m = math.floor(finite_or(month_index, 0.0))
    return int(clamp(m, 0, months - 1))


def _resolve_buffer(scenario: Scenario, buffer_override: Optional[float]) -> float:
    override = finite_or(buffer_override, math.nan)
    if math.isfinite(override):
        return round2(override)
    return money(scenario.settings.cash_buffer)


def safety_check(
    scenario: Scenario,
    month_index,
    buffer_override: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Callable[[int], bool]:
    """
    Predicate over whole cents: True iff a one-time expense of that many cents
    at the (clamped) month keeps worst projected cash at or above the buffer.
    """
    month = _clamp_month(scenario, month_index, config)
    buffer = _resolve_buffer(scenario, buffer_override)
    base_items = tuple(scenario.one_time_items)

    reason = fallback_reason(scenario.strategy, [d.id for d in scenario.debts])
    if reason is not None:
        logger.warning("Scenario %s: %s", scenario.id, reason)

    def is_safe(amount_cents: int) -> bool:
        probe = build_probe_expense(amount_cents / 100.0, month)
        test_scenario = replace(scenario, one_time_items=base_items + (probe,))
        projection = project_scenario(test_scenario, config=config, warn_on_fallback=False)
        return projection.summary.worst_cash >= buffer

    return is_safe


def is_safe_one_time_expense(
    scenario: Scenario,
    amount: float,
    month_index,
    buffer_override: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> bool:
    """Whether spending `amount` once at `month_index` keeps cash at or above the buffer."""
    cents = int(round(round2(amount) * 100))
    return safety_check(scenario, month_index, buffer_override, config=config)(cents)


def max_one_time_expense_without_buffer_breach(
    scenario: Scenario,
    month_index,
    buffer_override: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """
    Maximum one-time expense at `month_index` that keeps worst cash >= buffer.

    Parameters
    ----------
    scenario : Scenario
        Scenario to probe; never modified
    month_index : int
        Month of the expense, clamped into [0, horizon - 1]
    buffer_override : float, optional
        Cash floor to use instead of settings.cash_buffer; ignored if not finite

    Returns 0 when the scenario breaches the buffer with no extra spending, and
    at most config.safe_spend_cap. The result is itself safe, and adding one
    cent to it is not (unless the cap was reached).
    """
    is_safe = safety_check(scenario, month_index, buffer_override, config=config)

    if not is_safe(0):
        logger.debug("Scenario %s already breaches its buffer; safe spend is 0", scenario.id)
        return 0.0

    low = 0
    high = int(round(config.safe_spend_cap * 100))
    while low < high:
        mid = (low + high + 1) // 2
        if is_safe(mid):
            low = mid
        else:
            high = mid - 1

    result = round2(low / 100.0)
    logger.debug("Safe one-time spend for scenario %s at month %s: %.2f", scenario.id, month_index, result)
    return result
