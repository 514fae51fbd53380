from __future__ import annotations

import math
from typing import Optional

import numpy as np


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def round_half_up(x: float) -> int:
    """Round half away from zero to an int (0.5 -> 1, 2.5 -> 3)."""
    return int(np.sign(x) * np.floor(abs(x) + 0.5))


def safe_div(a: float, b: float, default: Optional[float] = None) -> Optional[float]:
    if b == 0:
        return default
    return a / b


def is_finite_number(x) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False
