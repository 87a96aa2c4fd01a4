"""
Data quality checks for scenarios before they are projected or saved.

The engine sanitizes bad values on its own; these checks tell the user what
will be sanitized:
- Start date that cannot be parsed (the only blocking problem)
- Horizon outside the supported range
- Negative or non-finite amounts, balances, rates and payments
- One-time items that fall outside the horizon
- Custom strategy without a usable target debt
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import List

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.errors import InvalidDateFormat
from core.schema import ONE_TIME_KINDS, Scenario
from core.utils import add_months_iso, clamp_horizon, finite_or, parse_iso_date
from strategies.resolver import fallback_reason


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a scenario."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _is_finite(x) -> bool:
    return math.isfinite(finite_or(x, math.nan))


def _check_amount(result: ValidationResult, label: str, value) -> None:
    if not _is_finite(value):
        result.warnings.append(f"{label} is not a finite number and will be treated as 0.")
    elif float(value) < 0:
        result.warnings.append(f"{label} is negative ({float(value):,.2f}).")


def validate_scenario(
    scenario: Scenario,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ValidationResult:
    """
    Run all validation checks on a scenario.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()
    settings = scenario.settings

    # --- Settings ---
    horizon = clamp_horizon(settings.months, max_months=config.max_months, min_months=config.min_months)
    try:
        parse_iso_date(settings.start_date_iso)
    except InvalidDateFormat:
        result.errors.append(f"Start date {settings.start_date_iso!r} is not a valid ISO date.")
    else:
        try:
            add_months_iso(settings.start_date_iso, horizon - 1)
        except InvalidDateFormat:
            result.errors.append(
                f"A {horizon}-month horizon from {settings.start_date_iso!r} runs past the last supported date."
            )

    if not _is_finite(settings.months) or float(settings.months) != horizon:
        result.warnings.append(
            f"Horizon {settings.months!r} months is adjusted to {horizon} "
            f"(supported range {config.min_months}-{config.max_months})."
        )
    for label, value in (("Starting cash", settings.starting_cash), ("Cash buffer", settings.cash_buffer)):
        if not _is_finite(value):
            result.warnings.append(f"{label} is not a finite number and will be treated as 0.")

    # --- Recurring flows ---
    for inc in scenario.incomes:
        _check_amount(result, f"Income {inc.name!r} amount", inc.amount)
    for exp in scenario.expenses:
        _check_amount(result, f"Expense {exp.name!r} amount", exp.amount)
        if exp.category not in ("fixed", "variable"):
            result.warnings.append(f"Expense {exp.name!r} has unknown category {exp.category!r}.")

    # --- Debts ---
    for d in scenario.debts:
        _check_amount(result, f"Debt {d.name!r} balance", d.balance)
        _check_amount(result, f"Debt {d.name!r} minimum payment", d.min_payment)
        _check_amount(result, f"Debt {d.name!r} APR", d.apr)
        if _is_finite(d.apr) and float(d.apr) > 1.0:
            result.warnings.append(
                f"Debt {d.name!r} APR is {float(d.apr):.4f}; check whether it is in "
                f"percent vs decimal form (e.g. 0.2499)."
            )

    n_dup = sum(c - 1 for c in Counter(d.id for d in scenario.debts).values() if c > 1)
    if n_dup > 0:
        result.warnings.append(f"{n_dup} duplicate debt id(s) found.")

    # --- One-time items ---
    for item in scenario.one_time_items:
        label = f"One-time item {item.name!r}"
        if not _is_finite(item.amount) or float(item.amount) < 0:
            result.warnings.append(f"{label} has an invalid amount and will be ignored.")
        if not _is_finite(item.month_index):
            result.warnings.append(f"{label} has an invalid month and will be ignored.")
        elif not 0 <= math.floor(float(item.month_index)) < horizon:
            result.warnings.append(
                f"{label} is in month {item.month_index!r}, outside the {horizon}-month horizon, and will be ignored."
            )
        if item.kind not in ONE_TIME_KINDS:
            result.warnings.append(f"{label} has unknown kind {item.kind!r} and will be ignored.")

    # --- Strategy ---
    _check_amount(result, "Extra payment", scenario.strategy.extra_payment)
    reason = fallback_reason(scenario.strategy, [d.id for d in scenario.debts])
    if reason is not None:
        result.warnings.append(reason)

    return result
