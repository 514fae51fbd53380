"""
Deterministic per-year math for the projection loop.

Everything random is drawn by the runner and passed in, so each helper here is
a plain function of its arguments:
  1. contributions()   — split this year's income across the buckets
  2. grow_balance()    — apply a return and a deposit, floored at zero
  3. next_income()     — base growth plus the self-investment bonus
  4. step_wellbeing()  — health / stress / happiness update, clamped
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from core.config import EngineConfig
from core.schema import SimulationInput
from core.utils import clamp


@dataclass(frozen=True)
class Contributions:
    risky: float
    stable: float
    cash: float
    self_investment: float


@dataclass(frozen=True)
class Wellbeing:
    health: float
    happiness: float
    stress: float


def contributions(income: float, inp: SimulationInput) -> Contributions:
    """Deposits drawn from income; allocations are not renormalised."""
    return Contributions(
        risky=income * inp.alloc_risk,
        stable=income * inp.alloc_stable,
        cash=income * inp.alloc_cash,
        self_investment=income * inp.alloc_self,
    )


def grow_balance(balance: float, rate: float, deposit: float, timing: str = "end") -> float:
    """
    One year of growth for a bucket.

    timing="end":   max(0, balance * (1 + rate)) + deposit
    timing="start": max(0, (balance + deposit) * (1 + rate))
    """
    if timing == "start":
        return max(0.0, (balance + deposit) * (1.0 + rate))
    if timing == "end":
        return max(0.0, balance * (1.0 + rate)) + deposit
    raise ValueError(f"Unknown contribution timing: {timing!r}")


def next_income(income: float, alloc_self: float, config: EngineConfig) -> float:
    return income * (1.0 + config.base_growth_rate + alloc_self * config.self_bonus_rate)


def wellbeing_drivers(alloc_risk: float, alloc_self: float) -> Tuple[float, float, float]:
    """(stress_from_risk, health_from_self, happiness_from_balance)."""
    stress_from_risk = alloc_risk * 50
    health_from_self = alloc_self * 40
    # peaks at a 20% risk allocation, -1 point per percentage point away from it
    happiness_from_balance = max(0.0, 30 - abs(alloc_risk - 0.2) * 100)
    return stress_from_risk, health_from_self, happiness_from_balance


def step_wellbeing(
    state: Wellbeing,
    inp: SimulationInput,
    config: EngineConfig,
    *,
    health_noise: float = 0.0,
    stress_noise: float = 0.0,
    happiness_noise: float = 0.0,
) -> Wellbeing:
    stress_from_risk, health_from_self, happiness_from_balance = wellbeing_drivers(
        inp.alloc_risk, inp.alloc_self
    )

    health = clamp(
        state.health + health_from_self - stress_from_risk * 0.3 + health_noise,
        *config.health_range,
    )
    stress = clamp(
        state.stress + stress_from_risk - inp.alloc_self * 30 + stress_noise,
        *config.stress_range,
    )
    happiness = clamp(
        state.happiness
        + happiness_from_balance
        + inp.alloc_self * 20
        - stress_from_risk * 0.2
        + happiness_noise,
        *config.happiness_range,
    )
    return Wellbeing(health=health, happiness=happiness, stress=stress)
