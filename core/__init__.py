"""
Core package — scenario types, configuration, errors, and shared utilities.
No business logic lives here.
"""

from .schema import (
    EXPORT_COLUMNS,
    Debt,
    DebtState,
    Expense,
    Income,
    MonthRow,
    OneTimeItem,
    Projection,
    ProjectionSummary,
    Scenario,
    Settings,
    Strategy,
)
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig, StoreConfig
from .errors import DecisionEngineError, InvalidDateFormat
from .utils import add_months_iso, clamp_horizon, round2

__all__ = [
    "EXPORT_COLUMNS",
    "Debt",
    "DebtState",
    "Expense",
    "Income",
    "MonthRow",
    "OneTimeItem",
    "Projection",
    "ProjectionSummary",
    "Scenario",
    "Settings",
    "Strategy",
    "DEFAULT_ENGINE_CONFIG",
    "EngineConfig",
    "StoreConfig",
    "DecisionEngineError",
    "InvalidDateFormat",
    "add_months_iso",
    "clamp_horizon",
    "round2",
]
