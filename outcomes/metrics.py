"""
Derived metrics over already-computed results.

Pure functions. Zero denominators return a defined sentinel instead of NaN/inf
so display code never has to special-case them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config import DEFAULT_INFLATION_RATE, SAFE_WITHDRAWAL_RATE
from core.utils import clamp


@dataclass(frozen=True)
class GoalProgress:
    percentage: float
    remaining: float
    achieved: bool


@dataclass(frozen=True)
class FreedomMetrics:
    monthly_passive_income: float
    freedom_score: float
    can_retire: bool
    years_of_expenses: Optional[float]   # None when expenses are zero


def goal_progress(wealth: float, goal_amount: float) -> GoalProgress:
    """
    Progress towards goal_amount as a 0-100 percentage.

    A goal of zero (or less) counts as fully progressed.
    """
    if goal_amount <= 0:
        percentage = 100.0
    else:
        percentage = clamp(wealth / goal_amount * 100, 0.0, 100.0)
    return GoalProgress(
        percentage=percentage,
        remaining=max(0.0, goal_amount - wealth),
        achieved=wealth >= goal_amount,
    )


def freedom_metrics(final_wealth: float, annual_expenses: float) -> FreedomMetrics:
    """
    How much of monthly expenses the 4% safe-withdrawal rule would cover.

    monthly_passive_income = final_wealth * 0.04 / 12
    freedom_score          = passive / monthly_expenses * 100, clamped to [0, 100]
    years_of_expenses      = final_wealth / annual_expenses
    """
    monthly_passive = final_wealth * SAFE_WITHDRAWAL_RATE / 12
    monthly_expenses = annual_expenses / 12

    if monthly_expenses <= 0:
        # nothing to cover
        return FreedomMetrics(
            monthly_passive_income=monthly_passive,
            freedom_score=100.0,
            can_retire=True,
            years_of_expenses=None,
        )

    return FreedomMetrics(
        monthly_passive_income=monthly_passive,
        freedom_score=clamp(monthly_passive / monthly_expenses * 100, 0.0, 100.0),
        can_retire=monthly_passive >= monthly_expenses,
        years_of_expenses=final_wealth / annual_expenses,
    )


def stress_level(risk_rate: float, final_wealth: float) -> float:
    """
    Quick 0-100 stress heuristic for colouring comparisons.

    Independent of the engine's simulated stress: risk adds up to 60 points,
    wealth (capped at 100k) removes up to 40, on a base of 20.
    """
    risk_stress = risk_rate * 60
    wealth_comfort = min(final_wealth / 100_000, 1.0) * 40
    return clamp(risk_stress - wealth_comfort + 20, 0.0, 100.0)


def present_value(
    future_value: float,
    years: float,
    inflation_rate: float = DEFAULT_INFLATION_RATE,
) -> float:
    """Discount future_value back `years` years at inflation_rate."""
    if inflation_rate <= -1:
        raise ValueError(f"inflation_rate must be greater than -1, got {inflation_rate}.")
    return future_value / (1 + inflation_rate) ** years
