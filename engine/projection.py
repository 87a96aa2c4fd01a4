"""
Monthly Projector — runs a scenario month by month over its horizon.

Each month starts from the previous month's ending state:
  debts are stepped by the ledger, one-time items for the month are merged in,
  cash moves by income - expenses - minimums - extra, and the summary trackers
  (worst cash, first buffer breach, first negative month, debt-free month)
  are updated.

Every monetary value is rounded to cents before it is stored or reused.
The projector is a pure function of the scenario: it never mutates its input
and keeps no state between calls.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import MonthRow, OneTimeItem, Projection, ProjectionSummary, Scenario
from core.utils import add_months_iso, clamp_horizon, finite_or, money, round2
from strategies.resolver import fallback_reason

from .debt import initialize_debts, step_debts_one_month, total_debt

logger = logging.getLogger(__name__)


def scenario_horizon(scenario: Scenario, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    return clamp_horizon(
        scenario.settings.months,
        max_months=config.max_months,
        min_months=config.min_months,
    )


def one_time_totals_by_month(
    items: Iterable[OneTimeItem],
    horizon: int,
) -> Dict[int, Tuple[float, float]]:
    """
    Sum valid one-time items per month index -> (income, expense).

    Items with a negative or non-finite amount, a non-finite month index,
    a month outside [0, horizon) or an unknown kind are dropped.
    """
    totals: Dict[int, List[float]] = {}
    dropped = 0
    for item in items:
        amount = finite_or(item.amount, -1.0)
        month = finite_or(item.month_index, -1.0)
        if amount < 0 or month < 0:
            dropped += 1
            continue
        m = int(math.floor(month))
        if m >= horizon or item.kind not in ("income", "expense"):
            dropped += 1
            continue
        bucket = totals.setdefault(m, [0.0, 0.0])
        if item.kind == "income":
            bucket[0] += amount
        else:
            bucket[1] += amount
    if dropped:
        logger.debug("Dropped %d one-time item(s) outside the %d-month horizon or invalid", dropped, horizon)
    return {m: (round2(inc), round2(exp)) for m, (inc, exp) in totals.items()}


def project_scenario(
    scenario: Scenario,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    warn_on_fallback: bool = True,
) -> Projection:
    """
    Project `scenario` over its clamped horizon.

    When the strategy falls back to avalanche order a warning is logged,
    unless `warn_on_fallback` is False (callers re-projecting the same
    scenario many times report it themselves).

    Raises
    ------
    InvalidDateFormat
        If settings.start_date_iso is not a parseable calendar date.
    """
    settings = scenario.settings
    months = scenario_horizon(scenario, config)
    cash = money(settings.starting_cash)
    cash_buffer = money(settings.cash_buffer)

    base_income = round2(sum(money(i.amount) for i in scenario.incomes))
    base_expenses = round2(sum(money(e.amount) for e in scenario.expenses))

    debts = initialize_debts(scenario.debts)
    reason = fallback_reason(scenario.strategy, [d.id for d in debts]) if warn_on_fallback else None
    if reason is not None:
        logger.warning("Scenario %s: %s", scenario.id, reason)

    one_time = one_time_totals_by_month(scenario.one_time_items, months)

    rows: List[MonthRow] = []
    total_interest_paid = 0.0
    total_one_time_income = 0.0
    total_one_time_expense = 0.0
    debt_free_month_index: Optional[int] = None
    worst_cash = cash
    first_below_buffer_month_index: Optional[int] = None
    first_negative_cash_month_index: Optional[int] = None

    for m in range(months):
        date_iso = add_months_iso(settings.start_date_iso, m)

        step = step_debts_one_month(debts, scenario.strategy, config=config)
        debts = step.debts

        one_time_income, one_time_expense = one_time.get(m, (0.0, 0.0))
        income = round2(base_income + one_time_income)
        expenses = round2(base_expenses + one_time_expense)

        total_one_time_income = round2(total_one_time_income + one_time_income)
        total_one_time_expense = round2(total_one_time_expense + one_time_expense)

        net_change = round2(income - expenses - step.min_paid - step.extra_paid)
        cash = round2(cash + net_change)

        total_interest_paid = round2(total_interest_paid + step.interest_paid)
        debt_end = total_debt(debts)

        if debt_free_month_index is None and debt_end <= 0:
            debt_free_month_index = m
        worst_cash = min(worst_cash, cash)
        if first_below_buffer_month_index is None and cash < cash_buffer:
            first_below_buffer_month_index = m
        if first_negative_cash_month_index is None and cash < 0:
            first_negative_cash_month_index = m

        rows.append(MonthRow(
            month_index=m,
            date_iso=date_iso,
            base_income=base_income,
            one_time_income=one_time_income,
            base_expenses=base_expenses,
            one_time_expense=one_time_expense,
            debt_min_payments=step.min_paid,
            debt_extra_payment=step.extra_paid,
            interest_paid=step.interest_paid,
            principal_paid=step.principal_paid,
            net_change=net_change,
            cash_end=cash,
            total_debt_end=debt_end,
        ))

    summary = ProjectionSummary(
        end_cash=rows[-1].cash_end if rows else cash,
        end_debt=rows[-1].total_debt_end if rows else total_debt(debts),
        total_interest_paid=total_interest_paid,
        total_one_time_income=total_one_time_income,
        total_one_time_expense=total_one_time_expense,
        debt_free_month_index=debt_free_month_index,
        worst_cash=worst_cash,
        first_below_buffer_month_index=first_below_buffer_month_index,
        first_negative_cash_month_index=first_negative_cash_month_index,
    )
    logger.debug(
        "Projected scenario %s over %d months: end cash %.2f, end debt %.2f, worst cash %.2f",
        scenario.id, months, summary.end_cash, summary.end_debt, summary.worst_cash,
    )
    return Projection(rows=tuple(rows), summary=summary)
