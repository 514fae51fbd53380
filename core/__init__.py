"""
Core package — schema definitions, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import (
    ALLOCATION_FIELDS,
    TIMELINE_COLUMNS,
    SimulationInput,
    SimulationResult,
    YearPoint,
)
from .config import (
    DEFAULT_ENGINE_CONFIG,
    DEFAULT_INPUT,
    DEFAULT_INFLATION_RATE,
    PRESET_GOALS,
    SAFE_WITHDRAWAL_RATE,
    EngineConfig,
    ReturnParams,
)
from .utils import clamp, round_half_up, safe_div, is_finite_number

__all__ = [
    "ALLOCATION_FIELDS",
    "TIMELINE_COLUMNS",
    "SimulationInput",
    "SimulationResult",
    "YearPoint",
    "DEFAULT_ENGINE_CONFIG",
    "DEFAULT_INPUT",
    "DEFAULT_INFLATION_RATE",
    "PRESET_GOALS",
    "SAFE_WITHDRAWAL_RATE",
    "EngineConfig",
    "ReturnParams",
    "clamp",
    "round_half_up",
    "safe_div",
    "is_finite_number",
]
