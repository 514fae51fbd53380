"""
Named allocation presets.

  degen     — most income into risky trades
  balanced  — spread across all four buckets
  lockin    — safe assets and self-investment
"""

from __future__ import annotations

from typing import Dict

from core.schema import SimulationInput


PRESET_ALLOCATIONS: Dict[str, Dict[str, float]] = {
    "degen": {
        "alloc_risk": 0.70,
        "alloc_stable": 0.15,
        "alloc_cash": 0.10,
        "alloc_self": 0.05,
    },
    "balanced": {
        "alloc_risk": 0.25,
        "alloc_stable": 0.30,
        "alloc_cash": 0.25,
        "alloc_self": 0.20,
    },
    "lockin": {
        "alloc_risk": 0.05,
        "alloc_stable": 0.35,
        "alloc_cash": 0.30,
        "alloc_self": 0.30,
    },
}


def get_preset(name: str) -> Dict[str, float]:
    """
    Return the allocation mix of a named preset.

    Parameters
    ----------
    name : str
        One of: "degen", "balanced", "lockin"
    """
    if name not in PRESET_ALLOCATIONS:
        raise KeyError(
            f"Unknown preset '{name}'. "
            f"Available: {list(PRESET_ALLOCATIONS.keys())}"
        )
    return PRESET_ALLOCATIONS[name].copy()


def apply_preset(inp: SimulationInput, name: str) -> SimulationInput:
    """Copy of inp with the preset's allocations; ages, income and goal are kept."""
    return inp.replace(**get_preset(name))
