from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

# Allocation fields, in the order used for scenario keys and presets.
ALLOCATION_FIELDS: Tuple[str, ...] = (
    "alloc_risk",
    "alloc_stable",
    "alloc_cash",
    "alloc_self",
)

# Column order of SimulationResult.to_dataframe().
TIMELINE_COLUMNS: Tuple[str, ...] = (
    "age",
    "risky_balance",
    "stable_balance",
    "cash_balance",
    "total_wealth",
    "health",
    "happiness",
    "stress",
    "income",
    "goal_achieved",
    "high_stress",
)


@dataclass(frozen=True)
class SimulationInput:
    """
    One projection request.

    Allocations are fractions of the current year's income and are not
    required to sum to 1; whatever is left over is lifestyle spending.
    """
    age_start: int = 25
    age_end: int = 65
    annual_income: float = 30_000
    alloc_risk: float = 0.3
    alloc_stable: float = 0.2
    alloc_cash: float = 0.2
    alloc_self: float = 0.1
    goal_amount: float = 500_000
    market_volatility: Optional[float] = None

    @property
    def allocations(self) -> Tuple[float, float, float, float]:
        return tuple(getattr(self, f) for f in ALLOCATION_FIELDS)

    @property
    def allocation_total(self) -> float:
        return float(sum(self.allocations))

    @property
    def unallocated(self) -> float:
        return max(0.0, 1.0 - self.allocation_total)

    @property
    def years(self) -> int:
        return self.age_end - self.age_start + 1

    def replace(self, **changes) -> "SimulationInput":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class YearPoint:
    """Rounded end-of-year snapshot for one age."""
    age: int
    risky_balance: int
    stable_balance: int
    cash_balance: int
    total_wealth: int
    health: int
    happiness: int
    stress: int
    income: int
    goal_achieved: bool
    high_stress: bool


@dataclass(frozen=True)
class SimulationResult:
    timeline: Tuple[YearPoint, ...]
    final_wealth: int
    final_risky: int
    final_stable: int
    final_cash: int
    goal_achieved_age: Optional[int]
    years_to_goal: Optional[int]
    avg_health: float
    avg_stress: float
    avg_happiness: float
    high_stress_years: int

    def to_dataframe(self) -> pd.DataFrame:
        """Timeline as one row per age, ready for charting."""
        return pd.DataFrame(
            [dataclasses.astuple(p) for p in self.timeline],
            columns=list(TIMELINE_COLUMNS),
        )

    def summary(self) -> pd.DataFrame:
        """Summary fields as a two-column table."""
        rows = [
            {"Metric": f.name, "Value": getattr(self, f.name)}
            for f in dataclasses.fields(self)
            if f.name != "timeline"
        ]
        return pd.DataFrame(rows)
