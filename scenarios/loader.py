from __future__ import annotations

from pathlib import Path
from typing import Union

from core.schema import Scenario

from .payload import scenario_from_json, scenario_to_json


def load_scenario_file(path: Union[str, Path]) -> Scenario:
    """
    Load a scenario saved in the persisted camelCase JSON layout.
    """
    return scenario_from_json(Path(path).read_text(encoding="utf-8"))


def save_scenario_file(scenario: Scenario, path: Union[str, Path]) -> Path:
    out = Path(path)
    out.write_text(scenario_to_json(scenario, indent=2), encoding="utf-8")
    return out
