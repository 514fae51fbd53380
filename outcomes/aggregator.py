"""
Aggregate many projections into distribution summaries.

A single run answers "what happened in this draw". Across paths we can answer:
  "How likely am I to hit the goal?"        → share of paths with a goal age
  "How bad is a bad decade?"                → P05 of final wealth
  "What does the wealth fan look like?"     → P05/P50/P95 wealth per age
  "How do the presets compare?"             → one row per preset, same seed
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import SimulationInput
from engine.runner import simulate
from inputs.presets import PRESET_ALLOCATIONS, apply_preset


def aggregate_path_results(
    path_summary: pd.DataFrame,
    *,
    percentiles: Tuple[float, ...] = (0.05, 0.25, 0.50, 0.75, 0.95),
) -> Dict[str, object]:
    """
    Aggregate per-path results into distribution summaries.

    Parameters
    ----------
    path_summary : pd.DataFrame
        PathResults.path_summary from engine.run_paths(), one row per path.
    percentiles : tuple of float
        Percentile levels to report

    Returns
    -------
    Dict with:
      "summary_table":        One row per metric with mean/std/min/percentiles/max
      "goal_hit_probability": Share of paths that reached the goal
      "median_years_to_goal": Median over paths that reached it (None if none did)
      "n_paths":              Number of paths
    """
    if path_summary.empty:
        raise ValueError("No path results to aggregate.")

    metrics_to_summarize = {
        "Final Wealth": "final_wealth",
        "Final Risky": "final_risky",
        "Final Stable": "final_stable",
        "Final Cash": "final_cash",
        "Avg Health": "avg_health",
        "Avg Stress": "avg_stress",
        "Avg Happiness": "avg_happiness",
        "High-Stress Years": "high_stress_years",
    }

    rows = []
    for label, col in metrics_to_summarize.items():
        if col not in path_summary.columns:
            continue

        values = path_summary[col].dropna().to_numpy(dtype=float)
        if len(values) == 0:
            continue

        row = {
            "Metric": label,
            "Mean": float(np.mean(values)),
            "Std Dev": float(np.std(values)),
            "Min": float(np.min(values)),
        }
        for p in percentiles:
            row[f"P{int(round(p * 100)):02d}"] = float(np.percentile(values, p * 100))
        row["Max"] = float(np.max(values))
        rows.append(row)

    reached = path_summary["goal_reached"].astype(bool)
    years = path_summary.loc[reached, "years_to_goal"].dropna().to_numpy(dtype=float)

    return {
        "summary_table": pd.DataFrame(rows),
        "goal_hit_probability": float(reached.mean()),
        "median_years_to_goal": float(np.median(years)) if len(years) > 0 else None,
        "n_paths": len(path_summary),
    }


def aggregate_wealth_by_age(
    wealth_by_age: pd.DataFrame,
    *,
    percentiles: Tuple[float, ...] = (0.05, 0.50, 0.95),
) -> pd.DataFrame:
    """
    Wealth fan chart data: mean and percentile bands of total wealth per age.

    Returns one row per age with columns age, mean, p05, p50, p95 (per percentiles).
    """
    if wealth_by_age.empty:
        raise ValueError("No wealth paths to aggregate.")

    out = pd.DataFrame({"age": [int(a) for a in wealth_by_age.columns]})
    out["mean"] = wealth_by_age.mean(axis=0).to_numpy()
    for p in percentiles:
        out[f"p{int(round(p * 100)):02d}"] = wealth_by_age.quantile(p, axis=0).to_numpy()
    return out


def compare_presets(
    inp: SimulationInput,
    names: Optional[Iterable[str]] = None,
    *,
    seed: Optional[int] = 7,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> pd.DataFrame:
    """
    Run each preset allocation once on inp's ages/income/goal.

    Every preset uses the same seed, so differences come from the allocation
    rather than from luck of the draw.
    """
    names = list(PRESET_ALLOCATIONS) if names is None else list(names)
    rows = []
    for name in names:
        scenario = apply_preset(inp, name)
        res = simulate(scenario, seed=seed, config=config)
        rows.append({
            "preset": name,
            "alloc_risk": scenario.alloc_risk,
            "alloc_stable": scenario.alloc_stable,
            "alloc_cash": scenario.alloc_cash,
            "alloc_self": scenario.alloc_self,
            "final_wealth": res.final_wealth,
            "goal_achieved_age": res.goal_achieved_age,
            "years_to_goal": res.years_to_goal,
            "avg_health": res.avg_health,
            "avg_stress": res.avg_stress,
            "avg_happiness": res.avg_happiness,
            "high_stress_years": res.high_stress_years,
        })
    return pd.DataFrame(rows)
