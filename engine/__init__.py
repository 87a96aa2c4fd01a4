"""
Simulation engine — debt ledger, monthly projector, and safe-spend solver.
"""

from .debt import DebtStepResult, initialize_debts, step_debts_one_month, total_debt
from .projection import project_scenario
from .safe_spend import is_safe_one_time_expense, max_one_time_expense_without_buffer_breach

__all__ = [
    "DebtStepResult",
    "initialize_debts",
    "step_debts_one_month",
    "total_debt",
    "project_scenario",
    "is_safe_one_time_expense",
    "max_one_time_expense_without_buffer_breach",
]
