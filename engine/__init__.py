"""
Projection engine — yearly wealth/wellbeing math + single-run and Monte Carlo runners.
"""

from .runner import PathResults, run_paths, simulate
from .legacy import LegacyResult, simulate_legacy
from .cache import ScenarioCache, scenario_key

__all__ = [
    "simulate",
    "run_paths",
    "PathResults",
    "simulate_legacy",
    "LegacyResult",
    "ScenarioCache",
    "scenario_key",
]
