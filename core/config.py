"""
Engine configuration.
Return assumptions, income growth, and wellbeing dynamics for the yearly projection.
Per-run inputs live in core/schema.py (SimulationInput).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Tuple

import pandas as pd

from .schema import SimulationInput


SAFE_WITHDRAWAL_RATE = 0.04
DEFAULT_INFLATION_RATE = 0.03

# Preset wealth goals offered to the user.
PRESET_GOALS: Dict[str, float] = {
    "Lambo Fund": 200_000,
    "Escape Velocity": 500_000,
    "Generational Wealth": 1_000_000,
    "Diamond Hands Goal": 2_000_000,
}


@dataclass(frozen=True)
class ReturnParams:
    """
    Annual return assumptions per bucket.

    Risky and stable returns are normal draws; cash earns a fixed rate.
    risky_std is the default market volatility and can be overridden per run.
    """
    risky_mean: float = 0.20
    risky_std: float = 0.80

    stable_mean: float = 0.07
    stable_std: float = 0.15

    cash_rate: float = 0.02

    def summary(self) -> pd.DataFrame:
        """Return a summary table of the return assumptions."""
        return pd.DataFrame([
            {"Bucket": "Risky", "Mean": self.risky_mean, "StdDev": self.risky_std},
            {"Bucket": "Stable", "Mean": self.stable_mean, "StdDev": self.stable_std},
            {"Bucket": "Cash", "Mean": self.cash_rate, "StdDev": 0.0},
        ])


@dataclass(frozen=True)
class EngineConfig:
    returns: ReturnParams = field(default_factory=ReturnParams)

    # income dynamics
    base_growth_rate: float = 0.03
    self_bonus_rate: float = 0.04     # extra growth at 100% self-investment

    # wellbeing starting point
    initial_health: float = 75.0
    initial_happiness: float = 60.0
    initial_stress: float = 40.0

    # wellbeing bounds (min, max)
    health_range: Tuple[float, float] = (20.0, 100.0)
    stress_range: Tuple[float, float] = (0.0, 100.0)
    happiness_range: Tuple[float, float] = (10.0, 100.0)

    # yearly noise on wellbeing updates
    health_noise: float = 2.0
    stress_noise: float = 3.0
    happiness_noise: float = 2.0

    # burnout feedback on next year's income
    high_stress_threshold: float = 70.0
    stress_income_penalty: float = 0.02

    # "end": grow the balance, then deposit; "start": deposit, then grow
    contribution_timing: Literal["end", "start"] = "end"


DEFAULT_ENGINE_CONFIG = EngineConfig()

# Starting point for a new session: age 25 to 65, 30k income, goal 500k.
DEFAULT_INPUT = SimulationInput()
