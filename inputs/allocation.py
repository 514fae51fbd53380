"""
Allocation slider policy.

The engine accepts any allocation mix. Callers that want allocations to stay
within 100% of income run each slider change through rebalance_allocations()
before building a SimulationInput.
"""

from __future__ import annotations

from typing import Dict, Mapping

from core.schema import ALLOCATION_FIELDS, SimulationInput


def allocation_total(allocations: Mapping[str, float]) -> float:
    return float(sum(allocations.get(f, 0.0) for f in ALLOCATION_FIELDS))


def unallocated_fraction(allocations: Mapping[str, float]) -> float:
    """Share of income left for lifestyle spending."""
    return max(0.0, 1.0 - allocation_total(allocations))


def rebalance_allocations(
    allocations: Mapping[str, float],
    field: str,
    value: float,
) -> Dict[str, float]:
    """
    Set one allocation and shrink the others if the total passes 100%.

    The excess is split evenly across the three other buckets; each non-zero
    bucket gives up min(its value, excess / 3) and never goes below zero.
    Buckets already at zero give up nothing, so the total can stay slightly
    above 100% when the excess cannot be absorbed in one pass.
    """
    if field not in ALLOCATION_FIELDS:
        raise KeyError(f"Unknown allocation '{field}'. Available: {list(ALLOCATION_FIELDS)}")

    updated = {f: float(allocations.get(f, 0.0)) for f in ALLOCATION_FIELDS}
    updated[field] = float(value)

    total = allocation_total(updated)
    if total > 1.0:
        excess = total - 1.0
        others = [f for f in ALLOCATION_FIELDS if f != field]
        for other in others:
            if updated[other] > 0:
                reduction = min(updated[other], excess / len(others))
                updated[other] = max(0.0, updated[other] - reduction)

    return updated


def rebalance_input(inp: SimulationInput, field: str, value: float) -> SimulationInput:
    """rebalance_allocations() applied to a SimulationInput."""
    current = dict(zip(ALLOCATION_FIELDS, inp.allocations))
    return inp.replace(**rebalance_allocations(current, field, value))
