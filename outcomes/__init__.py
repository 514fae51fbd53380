"""
Outcomes — derived metrics, multi-path aggregation, and end-of-run interpretation.
"""

from .metrics import (
    FreedomMetrics,
    GoalProgress,
    freedom_metrics,
    goal_progress,
    present_value,
    stress_level,
)
from .aggregator import aggregate_path_results, aggregate_wealth_by_age, compare_presets
from .decisions import (
    OutcomeReport,
    classify_scene,
    generate_outcome_report,
    scenario_message,
    wellbeing_band,
)

__all__ = [
    "FreedomMetrics",
    "GoalProgress",
    "freedom_metrics",
    "goal_progress",
    "present_value",
    "stress_level",
    "aggregate_path_results",
    "aggregate_wealth_by_age",
    "compare_presets",
    "OutcomeReport",
    "classify_scene",
    "generate_outcome_report",
    "scenario_message",
    "wellbeing_band",
]
