"""
Input preparation — validation, allocation rebalancing, presets, and payload parsing.
"""

from .validators import InvalidInputError, ValidationResult, validate_input
from .allocation import (
    allocation_total,
    rebalance_allocations,
    rebalance_input,
    unallocated_fraction,
)
from .presets import PRESET_ALLOCATIONS, apply_preset, get_preset
from .legacy import LegacyParams, to_simulation_input
from .payload import LegacyRequest, SimulationRequest, parse_payload

__all__ = [
    "InvalidInputError",
    "ValidationResult",
    "validate_input",
    "allocation_total",
    "rebalance_allocations",
    "rebalance_input",
    "unallocated_fraction",
    "PRESET_ALLOCATIONS",
    "apply_preset",
    "get_preset",
    "LegacyParams",
    "to_simulation_input",
    "LegacyRequest",
    "SimulationRequest",
    "parse_payload",
]
