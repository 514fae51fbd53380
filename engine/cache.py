"""
Result cache for revisiting scenarios.

Results are keyed by the allocation tuple (risk, stable, cash, self). A cache
only holds results for one set of base parameters (ages, income, goal,
volatility); asking for a different base clears it first.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from core.schema import SimulationInput, SimulationResult

from .runner import simulate

logger = logging.getLogger(__name__)

ScenarioKey = Tuple[float, float, float, float]


def scenario_key(inp: SimulationInput) -> ScenarioKey:
    return inp.allocations


def _base_key(inp: SimulationInput) -> tuple:
    return (inp.age_start, inp.age_end, inp.annual_income, inp.goal_amount, inp.market_volatility)


class ScenarioCache:
    """
    Usage:
        cache = ScenarioCache()
        result = cache.get_or_run(inp)            # runs simulate(inp)
        result = cache.get_or_run(inp)            # same allocations → cached
        result = cache.get_or_run(apply_preset(inp, "degen"))
    """

    def __init__(self, runner: Callable[[SimulationInput], SimulationResult] = simulate):
        self.runner = runner
        self._base: Optional[tuple] = None
        self._results: Dict[ScenarioKey, SimulationResult] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, inp: SimulationInput) -> bool:
        return self._base == _base_key(inp) and scenario_key(inp) in self._results

    def clear(self) -> None:
        self._results.clear()
        self._base = None

    def _sync_base(self, inp: SimulationInput) -> None:
        base = _base_key(inp)
        if self._base != base:
            if self._results:
                logger.debug("Base parameters changed, dropping %d cached results", len(self._results))
            self._results.clear()
            self._base = base

    def get(self, inp: SimulationInput) -> Optional[SimulationResult]:
        if inp not in self:
            return None
        return self._results[scenario_key(inp)]

    def put(self, inp: SimulationInput, result: SimulationResult) -> None:
        self._sync_base(inp)
        self._results[scenario_key(inp)] = result

    def get_or_run(self, inp: SimulationInput) -> SimulationResult:
        cached = self.get(inp)
        if cached is not None:
            logger.debug("Cache hit for allocations %s", scenario_key(inp))
            return cached
        result = self.runner(inp)
        self.put(inp, result)
        return result
