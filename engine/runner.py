"""
Projection runner — steps one life year by year through the growth helpers.

Two modes of operation:
  1. Single run:   simulate(inp, seed=...) — one timeline plus summary
  2. Monte Carlo:  run_paths(inp, n_paths, seed) — N independent timelines
                   sharing one seeded generator, tabulated for aggregation

Order of operations within a year:
  deposits from this year's (pre-growth) income
  → balances grow and take the deposit
  → income grows
  → wellbeing updates from this year's allocation
  → high stress cuts NEXT year's income
  → snapshot (income shown is this year's grown income, before the cut)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import SimulationInput, SimulationResult, YearPoint
from core.utils import round_half_up
from distributions.sampler import NormalSource, RandomNormalSource
from inputs.validators import validate_input

from .growth import (
    Wellbeing,
    contributions,
    grow_balance,
    next_income,
    step_wellbeing,
)

logger = logging.getLogger(__name__)


def simulate(
    inp: SimulationInput,
    *,
    source: Optional[NormalSource] = None,
    seed: Optional[int] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    validate: bool = True,
) -> SimulationResult:
    """
    Project wealth and wellbeing from inp.age_start to inp.age_end inclusive.

    Parameters
    ----------
    inp : SimulationInput
        Ages, income, allocations and goal for this run
    source : NormalSource, optional
        Random source for returns and wellbeing noise. Built from seed if omitted.
    seed : int, optional
        Seed for a fresh RandomNormalSource. None means OS entropy (not reproducible).
    config : EngineConfig
        Return assumptions and wellbeing dynamics. Deposits land after the
        year's growth by default, so a cash-only first year ends at exactly
        the deposit (30 000 on 30 000 income). Pass
        EngineConfig(contribution_timing="start") to grow the deposit within
        its first year as well (30 600).
    validate : bool
        Run validate_input() first and raise InvalidInputError on errors

    At most one of source or seed may be provided.

    Returns
    -------
    SimulationResult with one YearPoint per age.
    """
    if source is not None and seed is not None:
        raise ValueError("Provide source OR seed, not both.")
    if validate:
        validate_input(inp).raise_if_invalid()
    if source is None:
        source = RandomNormalSource(seed)

    returns = config.returns
    risky_vol = returns.risky_std if inp.market_volatility is None else inp.market_volatility
    timing = config.contribution_timing

    risky = stable = cash = 0.0
    wellbeing = Wellbeing(
        health=config.initial_health,
        happiness=config.initial_happiness,
        stress=config.initial_stress,
    )
    income = float(inp.annual_income)
    goal_age: Optional[int] = None
    timeline: List[YearPoint] = []

    logger.debug(
        "Simulating ages %d-%d, income=%.0f, allocations=%s",
        inp.age_start, inp.age_end, inp.annual_income, inp.allocations,
    )

    for age in range(inp.age_start, inp.age_end + 1):
        deposit = contributions(income, inp)

        # draw order is fixed so seeded runs repeat exactly
        risky_return = source.normal(returns.risky_mean, risky_vol)
        stable_return = source.normal(returns.stable_mean, returns.stable_std)

        risky = grow_balance(risky, risky_return, deposit.risky, timing)
        stable = grow_balance(stable, stable_return, deposit.stable, timing)
        cash = grow_balance(cash, returns.cash_rate, deposit.cash, timing)
        total = risky + stable + cash

        income = next_income(income, inp.alloc_self, config)

        health_noise = source.normal(0.0, config.health_noise)
        stress_noise = source.normal(0.0, config.stress_noise)
        happiness_noise = source.normal(0.0, config.happiness_noise)
        wellbeing = step_wellbeing(
            wellbeing,
            inp,
            config,
            health_noise=health_noise,
            stress_noise=stress_noise,
            happiness_noise=happiness_noise,
        )

        year_income = income
        high_stress = wellbeing.stress > config.high_stress_threshold
        if high_stress:
            income *= 1.0 - config.stress_income_penalty

        reached = total >= inp.goal_amount
        if goal_age is None and reached:
            goal_age = age
            logger.debug("Goal %.0f reached at age %d", inp.goal_amount, age)

        timeline.append(
            YearPoint(
                age=age,
                risky_balance=round_half_up(risky),
                stable_balance=round_half_up(stable),
                cash_balance=round_half_up(cash),
                total_wealth=round_half_up(total),
                health=round_half_up(wellbeing.health),
                happiness=round_half_up(wellbeing.happiness),
                stress=round_half_up(wellbeing.stress),
                income=round_half_up(year_income),
                goal_achieved=reached,
                high_stress=high_stress,
            )
        )

    return summarize_timeline(timeline, inp, goal_age)


def summarize_timeline(
    timeline: List[YearPoint],
    inp: SimulationInput,
    goal_age: Optional[int],
) -> SimulationResult:
    """Aggregate a completed timeline into a SimulationResult."""
    if not timeline:
        raise ValueError("Empty timeline.")
    last = timeline[-1]
    return SimulationResult(
        timeline=tuple(timeline),
        final_wealth=last.total_wealth,
        final_risky=last.risky_balance,
        final_stable=last.stable_balance,
        final_cash=last.cash_balance,
        goal_achieved_age=goal_age,
        years_to_goal=None if goal_age is None else goal_age - inp.age_start,
        avg_health=float(np.mean([p.health for p in timeline])),
        avg_stress=float(np.mean([p.stress for p in timeline])),
        avg_happiness=float(np.mean([p.happiness for p in timeline])),
        high_stress_years=sum(1 for p in timeline if p.high_stress),
    )


# =============================================================================
# Monte Carlo
# =============================================================================

@dataclass
class PathResults:
    """
    Output of run_paths().

    path_summary:  one row per path (final balances, goal age, wellbeing averages)
    wealth_by_age: paths × ages table of total wealth
    """
    path_summary: pd.DataFrame
    wealth_by_age: pd.DataFrame

    @property
    def n_paths(self) -> int:
        return len(self.path_summary)


def run_paths(
    inp: SimulationInput,
    n_paths: int = 200,
    seed: Optional[int] = 7,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> PathResults:
    """
    Run n_paths independent projections of the same input.

    All paths draw from one generator seeded with seed, so the whole set is
    reproducible while each path sees different returns and noise.
    """
    if n_paths < 1:
        raise ValueError(f"n_paths must be at least 1, got {n_paths}.")
    validate_input(inp).raise_if_invalid()

    source = RandomNormalSource(generator=np.random.default_rng(seed))
    ages = list(range(inp.age_start, inp.age_end + 1))
    wealth = np.zeros((n_paths, len(ages)), dtype=float)
    rows = []

    for p in range(n_paths):
        res = simulate(inp, source=source, config=config, validate=False)
        wealth[p, :] = [pt.total_wealth for pt in res.timeline]
        rows.append({
            "path_id": p,
            "final_wealth": res.final_wealth,
            "final_risky": res.final_risky,
            "final_stable": res.final_stable,
            "final_cash": res.final_cash,
            "goal_reached": res.goal_achieved_age is not None,
            "goal_achieved_age": res.goal_achieved_age,
            "years_to_goal": res.years_to_goal,
            "avg_health": res.avg_health,
            "avg_stress": res.avg_stress,
            "avg_happiness": res.avg_happiness,
            "high_stress_years": res.high_stress_years,
        })

    logger.debug("Ran %d paths over %d years", n_paths, len(ages))

    wealth_by_age = pd.DataFrame(
        wealth,
        columns=ages,
        index=pd.RangeIndex(n_paths, name="path_id"),
    )
    return PathResults(path_summary=pd.DataFrame(rows), wealth_by_age=wealth_by_age)
