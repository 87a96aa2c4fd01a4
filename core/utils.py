from __future__ import annotations

import math

import numpy as np
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .errors import InvalidDateFormat

MAX_HORIZON_MONTHS = 600


def excel_round(x, decimals: int = 2):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def round2(x: float) -> float:
    """Scalar excel_round to cents. Used on every engine accumulation step."""
    x = float(x)
    if not math.isfinite(x):
        return x
    r = math.floor(abs(x) * 100.0 + 0.5) / 100.0
    # no negative zero
    return -r if x < 0 and r else r


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def finite_or(x, default: float = 0.0) -> float:
    """Coerce to float, replacing None/NaN/inf/unparseable values with `default`."""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return default
    return v if math.isfinite(v) else default


def money(x) -> float:
    """Non-finite -> 0, then rounded to cents."""
    return round2(finite_or(x, 0.0))


def non_negative_money(x) -> float:
    return max(0.0, money(x))


def clamp_horizon(months, max_months: int = MAX_HORIZON_MONTHS, min_months: int = 1) -> int:
    """Whole-month horizon clamped into [min_months, max_months]; non-finite -> min_months."""
    m = finite_or(months, float(min_months))
    return int(clamp(math.floor(m), min_months, max_months))


def parse_iso_date(value: str):
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateFormat(value)
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError) as exc:
        raise InvalidDateFormat(value) from exc


def add_months_iso(start_iso: str, months_to_add: int) -> str:
    """First-of-month ISO date `months_to_add` whole months after the month of `start_iso`."""
    start = parse_iso_date(start_iso)
    try:
        first = start.replace(day=1) + relativedelta(months=int(months_to_add))
    except (ValueError, OverflowError) as exc:
        raise InvalidDateFormat(start_iso) from exc
    return f"{first.year:04d}-{first.month:02d}-01"


def month_label(start_iso: str, month_index: int) -> str:
    """Short display label, e.g. 'Jan 2026'."""
    d = parse_iso_date(add_months_iso(start_iso, month_index))
    return d.strftime("%b %Y")


def month_option_label(start_iso: str, month_index: int) -> str:
    """Selector label, e.g. 'Month 1 (2026-01)'."""
    return f"Month {month_index + 1} ({add_months_iso(start_iso, month_index)[:7]})"
