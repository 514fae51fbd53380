from __future__ import annotations

from typing import Iterable, List

import pytest

from core.schema import SimulationInput, SimulationResult


class ScriptedSource:
    """NormalSource that replays fixed draws, one per call, in order."""

    def __init__(self, draws: Iterable[float]):
        self.draws: List[float] = list(draws)
        self.calls = 0

    def normal(self, mean: float, std: float) -> float:
        value = self.draws[self.calls]
        self.calls += 1
        return value


def year_draws(risky: float, stable: float = 0.0) -> List[float]:
    """One year of draws: risky return, stable return, then zero wellbeing noise."""
    return [risky, stable, 0.0, 0.0, 0.0]


def make_result(**overrides) -> SimulationResult:
    fields = dict(
        timeline=(),
        final_wealth=0,
        final_risky=0,
        final_stable=0,
        final_cash=0,
        goal_achieved_age=None,
        years_to_goal=None,
        avg_health=75.0,
        avg_stress=40.0,
        avg_happiness=60.0,
        high_stress_years=0,
    )
    fields.update(overrides)
    return SimulationResult(**fields)


@pytest.fixture
def default_input() -> SimulationInput:
    return SimulationInput()


@pytest.fixture
def cash_only_input() -> SimulationInput:
    return SimulationInput(
        age_start=25,
        age_end=26,
        annual_income=30_000,
        alloc_risk=0.0,
        alloc_stable=0.0,
        alloc_cash=1.0,
        alloc_self=0.0,
        goal_amount=100_000,
    )
