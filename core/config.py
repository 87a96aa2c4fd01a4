"""
Engine and storage configuration.
Scenario-level knobs (horizon, buffer, starting cash) live on core.schema.Settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    # horizon bounds applied to Settings.months
    min_months: int = 1
    max_months: int = 600

    # upper bound for the safe-spend search, in currency units
    safe_spend_cap: float = 200_000.0

    # balances under this are snapped to zero after each month
    balance_snap_threshold: float = 0.01


DEFAULT_ENGINE_CONFIG = EngineConfig()

DEFAULT_DATABASE_URL = "sqlite:///decision_engine.db"


@dataclass(frozen=True)
class StoreConfig:
    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            database_url=os.environ.get("DECISION_ENGINE_DB_URL", DEFAULT_DATABASE_URL),
            echo=os.environ.get("DECISION_ENGINE_DB_ECHO", "").lower() in ("1", "true", "yes"),
        )
