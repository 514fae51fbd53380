"""
Two-bucket (savings vs. risk) parameter set from the first version of the tool.

Only the field mapping lives here; engine/legacy.py runs the canonical engine
on the mapped input and converts the result back.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.schema import SimulationInput

# Fixed buckets the two-parameter form has no slider for.
LEGACY_ALLOC_CASH = 0.10
LEGACY_ALLOC_SELF = 0.05


@dataclass(frozen=True)
class LegacyParams:
    age_start: int = 25
    age_end: int = 65
    monthly_income: float = 2_000
    savings_rate: float = 0.10   # -> alloc_stable
    risk_rate: float = 0.0       # -> alloc_risk
    goal_amount: float = 100_000


def to_simulation_input(params: LegacyParams) -> SimulationInput:
    return SimulationInput(
        age_start=params.age_start,
        age_end=params.age_end,
        annual_income=params.monthly_income * 12,
        alloc_risk=params.risk_rate,
        alloc_stable=params.savings_rate,
        alloc_cash=LEGACY_ALLOC_CASH,
        alloc_self=LEGACY_ALLOC_SELF,
        goal_amount=params.goal_amount,
    )
