"""
Decision Engine — Cash-Flow & Debt Payoff Dashboard
===================================================

Edit a household scenario, see the month-by-month cash and debt projection,
ask how much can safely be spent once in a given month, and compare against
saved scenarios.

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pandas as pd
import streamlit as st

try:
    import altair as alt
    _HAS_ALTAIR = True
except ImportError:
    alt = None
    _HAS_ALTAIR = False

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import StoreConfig
from core.errors import DecisionEngineError
from core.logger import setup_logger
from core.schema import Debt, Expense, Income, OneTimeItem, Scenario, Settings, Strategy
from core.utils import clamp_horizon, month_label, month_option_label

from engine.projection import project_scenario
from engine.safe_spend import max_one_time_expense_without_buffer_breach

from scenarios.defaults import default_scenario, new_id, now_iso
from scenarios.store import ScenarioStore
from scenarios.validators import validate_scenario

from reporting.compare import compare_projections
from reporting.export import projection_rows_to_csv, sanitize_file_name
from reporting.summary import (
    describe_debt_free,
    projection_to_dataframe,
    projection_warnings,
)

logger = setup_logger("app")
for _package in ("engine", "scenarios", "strategies", "reporting"):
    setup_logger(_package)

PAYOFF_METHOD_OPTIONS = ["avalanche", "snowball", "custom"]


@st.cache_resource
def _store() -> ScenarioStore:
    return ScenarioStore(StoreConfig.from_env())


# ---------------------------------------------------------------------------
# Formatting / chart helpers
# ---------------------------------------------------------------------------
def _fmt_money(val):
    """Format currency with commas and cents."""
    return f"${val:,.2f}"


def _plot_cash_and_debt(df, *, height=320):
    if not isinstance(df, pd.DataFrame) or len(df) == 0:
        st.info("No data to plot.")
        return
    d = df[["date", "cash_end", "total_debt_end"]].rename(
        columns={"cash_end": "Cash", "total_debt_end": "Debt"}
    )
    if not _HAS_ALTAIR:
        st.line_chart(d.set_index("date")[["Cash", "Debt"]])
        return
    long = d.melt(id_vars=["date"], value_vars=["Cash", "Debt"], var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_line()
        .encode(
            x=alt.X("date:T", title="Month"),
            y=alt.Y("value:Q", title="Amount ($)", axis=alt.Axis(format=",.0f")),
            color=alt.Color("series:N", title="Series"),
        )
        .properties(title="Cash vs Debt", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ---------------------------------------------------------------------------
# Scenario <-> editable tables
# ---------------------------------------------------------------------------
def _tables_from_scenario(s: Scenario) -> dict:
    return {
        "incomes": pd.DataFrame(
            [{"id": i.id, "name": i.name, "amount": i.amount} for i in s.incomes],
            columns=["id", "name", "amount"],
        ),
        "expenses": pd.DataFrame(
            [{"id": e.id, "name": e.name, "amount": e.amount, "category": e.category} for e in s.expenses],
            columns=["id", "name", "amount", "category"],
        ),
        "debts": pd.DataFrame(
            [{"id": d.id, "name": d.name, "balance": d.balance, "apr": d.apr, "min_payment": d.min_payment}
             for d in s.debts],
            columns=["id", "name", "balance", "apr", "min_payment"],
        ),
        "one_time_items": pd.DataFrame(
            [{"id": o.id, "name": o.name, "amount": o.amount, "month_index": o.month_index, "kind": o.kind}
             for o in s.one_time_items],
            columns=["id", "name", "amount", "month_index", "kind"],
        ),
    }


def _records(df: pd.DataFrame):
    """Edited rows with blank ids filled in; fully empty rows dropped."""
    out = []
    for rec in df.to_dict("records"):
        if all(pd.isna(v) or v == "" for v in rec.values()):
            continue
        if not rec.get("id") or pd.isna(rec.get("id")):
            rec["id"] = new_id()
        out.append(rec)
    return out


def _num(v, default=0.0):
    return default if v is None or pd.isna(v) else float(v)


def _debts_from_table(df: pd.DataFrame):
    return tuple(
        Debt(id=r["id"], name=str(r.get("name") or ""), balance=_num(r.get("balance")),
             apr=_num(r.get("apr")), min_payment=_num(r.get("min_payment")))
        for r in _records(df)
    )


def _scenario_from_tables(base: Scenario, tables: dict, debts, settings: Settings, strategy: Strategy,
                          name: str) -> Scenario:
    return replace(
        base,
        name=name,
        settings=settings,
        strategy=strategy,
        incomes=tuple(
            Income(id=r["id"], name=str(r.get("name") or ""), amount=_num(r.get("amount")))
            for r in _records(tables["incomes"])
        ),
        expenses=tuple(
            Expense(id=r["id"], name=str(r.get("name") or ""), amount=_num(r.get("amount")),
                    category=r.get("category") or "fixed")
            for r in _records(tables["expenses"])
        ),
        debts=debts,
        one_time_items=tuple(
            OneTimeItem(id=r["id"], name=str(r.get("name") or ""), amount=_num(r.get("amount")),
                        month_index=int(_num(r.get("month_index"))), kind=r.get("kind") or "expense")
            for r in _records(tables["one_time_items"])
        ),
        updated_at_iso=now_iso(),
    )


def main():
    st.set_page_config(page_title="Decision Engine", layout="wide")
    st.title("Decision Engine")
    st.caption("Local-first cash-flow and debt payoff projection. Monthly buckets.")

    if "scenario" not in st.session_state:
        st.session_state["scenario"] = default_scenario()
    scenario: Scenario = st.session_state["scenario"]
    store = _store()

    # ═══════════════════════════════════════════════════════════════════════
    # SIDEBAR — Saved scenarios
    # ═══════════════════════════════════════════════════════════════════════
    with st.sidebar:
        st.header("Saved Scenarios")
        try:
            saved = store.list()
        except DecisionEngineError as e:
            logger.error("Scenario store unavailable: %s", e)
            st.error(f"Scenario store unavailable: {e}")
            saved = []

        if st.button("New scenario"):
            st.session_state["scenario"] = default_scenario()
            st.rerun()

        labels = {r.id: f"{r.name} ({r.updated_at_iso[:10]})" for r in saved}
        selected_id = st.selectbox(
            "Saved", options=[""] + list(labels), format_func=lambda k: labels.get(k, "(none)")
        )
        c1, c2 = st.columns(2)
        if c1.button("Load", disabled=not selected_id):
            loaded = store.load(selected_id)
            if loaded is not None:
                st.session_state["scenario"] = loaded
                st.rerun()
        if c2.button("Delete", disabled=not selected_id):
            store.delete(selected_id)
            if scenario.id == selected_id:
                st.session_state["scenario"] = default_scenario()
            st.rerun()

        compare_id = st.selectbox(
            "Compare against", options=[""] + list(labels), format_func=lambda k: labels.get(k, "(none)")
        )

    # ═══════════════════════════════════════════════════════════════════════
    # INPUTS
    # ═══════════════════════════════════════════════════════════════════════
    left, right = st.columns([1, 1])
    with left:
        st.subheader("Inputs")
        name = st.text_input("Scenario name", value=scenario.name)
        s = scenario.settings
        c1, c2 = st.columns(2)
        start_date = c1.text_input("Start date (YYYY-MM-01)", value=s.start_date_iso)
        months = c2.number_input("Months", min_value=1, max_value=600, value=clamp_horizon(s.months))
        starting_cash = c1.number_input("Starting cash", value=float(s.starting_cash), step=100.0)
        cash_buffer = c2.number_input("Cash buffer", value=float(s.cash_buffer), step=100.0)
        settings = Settings(
            start_date_iso=start_date, months=int(months),
            cash_buffer=float(cash_buffer), starting_cash=float(starting_cash),
        )

        tables = _tables_from_scenario(scenario)
        edited = {}
        st.markdown("**Incomes (monthly)**")
        edited["incomes"] = st.data_editor(tables["incomes"], num_rows="dynamic", hide_index=True,
                                           column_config={"id": None}, key="ed_incomes")
        st.markdown("**Expenses (monthly)**")
        edited["expenses"] = st.data_editor(
            tables["expenses"], num_rows="dynamic", hide_index=True, key="ed_expenses",
            column_config={
                "id": None,
                "category": st.column_config.SelectboxColumn(options=["fixed", "variable"]),
            },
        )
        st.markdown("**Debts** (APR as decimal, e.g. 0.2499)")
        edited["debts"] = st.data_editor(tables["debts"], num_rows="dynamic", hide_index=True,
                                         column_config={"id": None}, key="ed_debts")
        st.markdown("**One-time items** (month index is 0-based)")
        edited["one_time_items"] = st.data_editor(
            tables["one_time_items"], num_rows="dynamic", hide_index=True, key="ed_one_time",
            column_config={
                "id": None,
                "kind": st.column_config.SelectboxColumn(options=["income", "expense"]),
            },
        )

        st.markdown("**Strategy**")
        c1, c2, c3 = st.columns(3)
        method = c1.selectbox(
            "Method", PAYOFF_METHOD_OPTIONS,
            index=PAYOFF_METHOD_OPTIONS.index(scenario.strategy.method)
            if scenario.strategy.method in PAYOFF_METHOD_OPTIONS else 0,
        )
        extra = c2.number_input("Extra payment (monthly)", value=float(scenario.strategy.extra_payment), step=50.0)
        # rows are picked by position; ids of unsaved rows change on every rerun
        debts = _debts_from_table(edited["debts"])
        saved_target = [i for i, d in enumerate(debts) if d.id == scenario.strategy.custom_target_debt_id]
        target_pos = c3.selectbox(
            "Custom target", options=[None] + list(range(len(debts))),
            index=saved_target[0] + 1 if saved_target else 0,
            format_func=lambda i: "(none)" if i is None else (debts[i].name or f"Debt {i + 1}"),
            disabled=method != "custom",
        )
        target = debts[target_pos].id if target_pos is not None else None
        strategy = Strategy(method=method, extra_payment=float(extra), custom_target_debt_id=target)

    current = _scenario_from_tables(scenario, edited, debts, settings, strategy, name)

    vr = validate_scenario(current)
    if not vr.is_valid:
        right.error("Scenario validation failed:\n" + vr.summary())
        return
    if vr.warnings:
        right.warning(vr.summary())

    if left.button("Save scenario", type="primary"):
        store.save(current)
        st.session_state["scenario"] = current
        st.rerun()

    projection = project_scenario(current)
    summary = projection.summary
    df = projection_to_dataframe(projection)

    # ═══════════════════════════════════════════════════════════════════════
    # RESULTS
    # ═══════════════════════════════════════════════════════════════════════
    with right:
        st.subheader("Results")
        k1, k2, k3 = st.columns(3)
        k1.metric("End Cash", _fmt_money(summary.end_cash))
        k2.metric("End Debt", _fmt_money(summary.end_debt))
        k3.metric("Total Interest", _fmt_money(summary.total_interest_paid))
        k1.metric("Worst Cash", _fmt_money(summary.worst_cash))
        k2.metric("One-time Income", _fmt_money(summary.total_one_time_income))
        k3.metric("One-time Expense", _fmt_money(summary.total_one_time_expense))
        st.markdown(f"**Debt-free:** {describe_debt_free(projection)}")

        warnings = projection_warnings(projection)
        for w in warnings:
            if w.startswith("Cash goes negative"):
                st.error(w)
            else:
                st.warning(w)
        if not warnings:
            st.success("Buffer never breached.")

        _plot_cash_and_debt(df)

        st.divider()
        st.subheader("Safe one-time spend")
        month_count = clamp_horizon(current.settings.months)
        spend_month = st.selectbox(
            "Month", options=list(range(month_count)),
            format_func=lambda m: month_option_label(current.settings.start_date_iso, m),
        )
        safe = max_one_time_expense_without_buffer_breach(current, spend_month)
        st.metric("Max one-time expense without breaching buffer", _fmt_money(safe))

        if compare_id:
            other = store.load(compare_id)
            if other is not None:
                st.divider()
                st.subheader(f"Comparison vs: {other.name}")
                cmp = compare_projections(projection, project_scenario(other))
                st.dataframe(cmp.to_dataframe(), use_container_width=True, hide_index=True)

        with st.expander("Monthly projection table", expanded=False):
            display = df.copy()
            display["date"] = [month_label(current.settings.start_date_iso, m) for m in display["month_index"]]
            st.dataframe(display, use_container_width=True, hide_index=True)

        st.download_button(
            "Download CSV",
            data="\ufeff" + projection_rows_to_csv(projection.rows),
            file_name=f"{sanitize_file_name(current.name)}.csv",
            mime="text/csv",
        )


main()
