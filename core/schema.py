"""
Scenario input types and derived projection types.

Inputs are frozen dataclasses; the engine never mutates them and builds
new values for every derived result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence, Tuple

from .utils import round2

PayoffMethod = Literal["avalanche", "snowball", "custom"]
ExpenseCategory = Literal["fixed", "variable"]
OneTimeKind = Literal["income", "expense"]

PAYOFF_METHODS: Tuple[str, ...] = ("avalanche", "snowball", "custom")
ONE_TIME_KINDS: Tuple[str, ...] = ("income", "expense")

# Column headers of the tabular export, in order.
EXPORT_COLUMNS: Tuple[str, ...] = (
    "Month (YYYY-MM)",
    "Income (base)",
    "One-time income",
    "Expenses (base)",
    "One-time expense",
    "Debt min",
    "Debt extra",
    "Interest paid",
    "Net change",
    "Cash end",
    "Total debt end",
)


@dataclass(frozen=True)
class Income:
    id: str
    name: str
    amount: float  # monthly


@dataclass(frozen=True)
class Expense:
    id: str
    name: str
    amount: float  # monthly
    category: ExpenseCategory = "fixed"


@dataclass(frozen=True)
class Debt:
    id: str
    name: str
    balance: float
    apr: float  # annual, e.g. 0.2499
    min_payment: float  # monthly


@dataclass(frozen=True)
class OneTimeItem:
    id: str
    name: str
    amount: float
    month_index: float  # 0-based from the scenario start month
    kind: OneTimeKind = "expense"


@dataclass(frozen=True)
class Strategy:
    method: PayoffMethod = "avalanche"
    extra_payment: float = 0.0  # beyond minimums
    custom_target_debt_id: Optional[str] = None


@dataclass(frozen=True)
class Settings:
    start_date_iso: str  # YYYY-MM-01 recommended
    months: int = 36
    cash_buffer: float = 0.0
    starting_cash: float = 0.0


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    settings: Settings
    incomes: Sequence[Income] = ()
    expenses: Sequence[Expense] = ()
    debts: Sequence[Debt] = ()
    one_time_items: Sequence[OneTimeItem] = ()
    strategy: Strategy = field(default_factory=Strategy)
    created_at_iso: str = ""
    updated_at_iso: str = ""


@dataclass(frozen=True)
class DebtState:
    """Per-debt working state advanced month by month by the debt ledger."""
    id: str
    name: str
    balance: float
    apr: float
    min_payment: float


@dataclass(frozen=True)
class MonthRow:
    """Snapshot of one simulated month. Rows are ordered chronologically, month 0 first."""
    month_index: int
    date_iso: str
    base_income: float
    one_time_income: float
    base_expenses: float
    one_time_expense: float
    debt_min_payments: float
    debt_extra_payment: float
    interest_paid: float
    principal_paid: float
    net_change: float
    cash_end: float
    total_debt_end: float

    @property
    def income(self) -> float:
        return round2(self.base_income + self.one_time_income)

    @property
    def expenses(self) -> float:
        return round2(self.base_expenses + self.one_time_expense)


@dataclass(frozen=True)
class ProjectionSummary:
    end_cash: float
    end_debt: float
    total_interest_paid: float
    total_one_time_income: float
    total_one_time_expense: float
    debt_free_month_index: Optional[int]
    worst_cash: float
    first_below_buffer_month_index: Optional[int]
    first_negative_cash_month_index: Optional[int]


@dataclass(frozen=True)
class Projection:
    rows: Tuple[MonthRow, ...]
    summary: ProjectionSummary
