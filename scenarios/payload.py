"""
JSON payload models for persisted scenarios.

The persisted layout is camelCase (startDateISO, minPayment, oneTimeItems, ...).
Values are parsed leniently: negative or non-finite numbers are passed through
and sanitized later by the engine. Only the shape is enforced.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from core.errors import ScenarioPayloadError
from core.schema import (
    Debt,
    Expense,
    Income,
    OneTimeItem,
    Scenario,
    Settings,
    Strategy,
)


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class IncomePayload(_Payload):
    id: str
    name: str = ""
    amount: float = 0.0


class ExpensePayload(_Payload):
    id: str
    name: str = ""
    amount: float = 0.0
    category: str = Field(default="fixed", alias="type")


class DebtPayload(_Payload):
    id: str
    name: str = ""
    balance: float = 0.0
    apr: float = 0.0
    min_payment: float = 0.0


class OneTimeItemPayload(_Payload):
    id: str
    name: str = ""
    amount: float = 0.0
    month_index: Union[int, float] = 0
    kind: str = "expense"


class StrategyPayload(_Payload):
    method: str = "avalanche"
    custom_target_debt_id: Optional[str] = None
    extra_payment: float = 0.0


class SettingsPayload(_Payload):
    start_date_iso: str = Field(alias="startDateISO")
    months: Union[int, float] = 36
    cash_buffer: float = 0.0
    starting_cash: float = 0.0


class ScenarioPayload(_Payload):
    id: str
    name: str
    incomes: List[IncomePayload] = Field(default_factory=list)
    expenses: List[ExpensePayload] = Field(default_factory=list)
    one_time_items: List[OneTimeItemPayload] = Field(default_factory=list)
    debts: List[DebtPayload] = Field(default_factory=list)
    strategy: StrategyPayload = Field(default_factory=StrategyPayload)
    settings: SettingsPayload
    created_at_iso: str = Field(default="", alias="createdAtISO")
    updated_at_iso: str = Field(default="", alias="updatedAtISO")

    def to_scenario(self) -> Scenario:
        s = self.settings
        months = int(s.months) if math.isfinite(s.months) else s.months
        return Scenario(
            id=self.id,
            name=self.name,
            incomes=tuple(Income(id=i.id, name=i.name, amount=i.amount) for i in self.incomes),
            expenses=tuple(
                Expense(id=e.id, name=e.name, amount=e.amount, category=e.category)
                for e in self.expenses
            ),
            debts=tuple(
                Debt(id=d.id, name=d.name, balance=d.balance, apr=d.apr, min_payment=d.min_payment)
                for d in self.debts
            ),
            one_time_items=tuple(
                OneTimeItem(
                    id=o.id, name=o.name, amount=o.amount,
                    month_index=o.month_index, kind=o.kind,
                )
                for o in self.one_time_items
            ),
            strategy=Strategy(
                method=self.strategy.method,
                extra_payment=self.strategy.extra_payment,
                custom_target_debt_id=self.strategy.custom_target_debt_id,
            ),
            settings=Settings(
                start_date_iso=s.start_date_iso,
                months=months,
                cash_buffer=s.cash_buffer,
                starting_cash=s.starting_cash,
            ),
            created_at_iso=self.created_at_iso,
            updated_at_iso=self.updated_at_iso,
        )

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "ScenarioPayload":
        st = scenario.settings
        strategy = scenario.strategy
        return cls(
            id=scenario.id,
            name=scenario.name,
            incomes=[IncomePayload(id=i.id, name=i.name, amount=i.amount) for i in scenario.incomes],
            expenses=[
                ExpensePayload(id=e.id, name=e.name, amount=e.amount, category=e.category)
                for e in scenario.expenses
            ],
            one_time_items=[
                OneTimeItemPayload(
                    id=o.id, name=o.name, amount=o.amount,
                    month_index=o.month_index, kind=o.kind,
                )
                for o in scenario.one_time_items
            ],
            debts=[
                DebtPayload(id=d.id, name=d.name, balance=d.balance, apr=d.apr, min_payment=d.min_payment)
                for d in scenario.debts
            ],
            strategy=StrategyPayload(
                method=strategy.method,
                custom_target_debt_id=strategy.custom_target_debt_id,
                extra_payment=strategy.extra_payment,
            ),
            settings=SettingsPayload(
                start_date_iso=st.start_date_iso,
                months=st.months,
                cash_buffer=st.cash_buffer,
                starting_cash=st.starting_cash,
            ),
            created_at_iso=scenario.created_at_iso,
            updated_at_iso=scenario.updated_at_iso,
        )


def scenario_from_dict(data: Dict[str, Any]) -> Scenario:
    try:
        return ScenarioPayload.model_validate(data).to_scenario()
    except ValidationError as exc:
        raise ScenarioPayloadError(f"Invalid scenario payload: {exc}") from exc


def scenario_to_dict(scenario: Scenario) -> Dict[str, Any]:
    """camelCase dict in the persisted layout. customTargetDebtId is omitted when unset."""
    data = ScenarioPayload.from_scenario(scenario).model_dump(by_alias=True)
    if data["strategy"].get("customTargetDebtId") is None:
        data["strategy"].pop("customTargetDebtId", None)
    return data


def scenario_from_json(text: str) -> Scenario:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScenarioPayloadError(f"Scenario JSON could not be decoded: {exc}") from exc
    if not isinstance(data, dict):
        raise ScenarioPayloadError("Scenario JSON must be an object.")
    return scenario_from_dict(data)


def scenario_to_json(scenario: Scenario, *, indent: Optional[int] = None) -> str:
    return json.dumps(scenario_to_dict(scenario), indent=indent)
