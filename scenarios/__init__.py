"""
Scenario I/O — JSON payloads, files, validation, defaults, and the scenario store.
"""

from .defaults import default_scenario, new_id, now_iso
from .loader import load_scenario_file, save_scenario_file
from .payload import scenario_from_dict, scenario_from_json, scenario_to_dict, scenario_to_json
from .store import ScenarioListing, ScenarioStore
from .validators import ValidationResult, validate_scenario

__all__ = [
    "default_scenario",
    "new_id",
    "now_iso",
    "load_scenario_file",
    "save_scenario_file",
    "scenario_from_dict",
    "scenario_from_json",
    "scenario_to_dict",
    "scenario_to_json",
    "ScenarioListing",
    "ScenarioStore",
    "ValidationResult",
    "validate_scenario",
]
