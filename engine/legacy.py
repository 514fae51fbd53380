"""
Two-bucket result shape for callers still on LegacyParams.

Runs the canonical engine once and folds its buckets back into
savings (stable + cash) and gambling (risky).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import SimulationResult
from distributions.sampler import NormalSource
from inputs.legacy import LegacyParams, to_simulation_input

from .runner import simulate


@dataclass(frozen=True)
class LegacyYearPoint:
    age: int
    savings: int
    gambling: int
    goal_achieved: bool


@dataclass(frozen=True)
class LegacyResult:
    timeline: Tuple[LegacyYearPoint, ...]
    final_savings: int
    final_gambling: int
    goal_achieved_age: Optional[int]
    years_to_goal: Optional[int]


def from_simulation_result(result: SimulationResult) -> LegacyResult:
    return LegacyResult(
        timeline=tuple(
            LegacyYearPoint(
                age=p.age,
                savings=p.stable_balance + p.cash_balance,
                gambling=p.risky_balance,
                goal_achieved=p.goal_achieved,
            )
            for p in result.timeline
        ),
        final_savings=result.final_stable + result.final_cash,
        final_gambling=result.final_risky,
        goal_achieved_age=result.goal_achieved_age,
        years_to_goal=result.years_to_goal,
    )


def simulate_legacy(
    params: LegacyParams = LegacyParams(),
    *,
    source: Optional[NormalSource] = None,
    seed: Optional[int] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> LegacyResult:
    result = simulate(to_simulation_input(params), source=source, seed=seed, config=config)
    return from_simulation_result(result)
