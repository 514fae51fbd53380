"""
Sanity checks for simulation inputs before they enter the engine.

Catches problems early:
- Non-numeric or non-finite fields
- Age range running backwards
- Negative income or goal
- Allocations outside [0, 1]

Allocation totals above 100% are tolerated by the engine and only warned about.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from typing import List

from core.schema import ALLOCATION_FIELDS, SimulationInput
from core.utils import is_finite_number

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a SimulationInput cannot be projected."""


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an input."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)

    def raise_if_invalid(self) -> None:
        if not self.is_valid:
            raise InvalidInputError(self.summary())


def validate_input(inp: SimulationInput) -> ValidationResult:
    """
    Run all validation checks on a SimulationInput.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Finite numbers ---
    numeric = ["age_start", "age_end", "annual_income", "goal_amount", *ALLOCATION_FIELDS]
    bad = [name for name in numeric if not is_finite_number(getattr(inp, name))]
    if inp.market_volatility is not None and not is_finite_number(inp.market_volatility):
        bad.append("market_volatility")
    if bad:
        result.errors.append(f"Non-finite or non-numeric fields: {bad}")
        return result  # nothing below is meaningful

    # --- Ages ---
    for name in ("age_start", "age_end"):
        value = getattr(inp, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            result.errors.append(f"{name} must be a whole number, got {value!r}.")
    if inp.age_start < 0 or inp.age_end < 0:
        result.errors.append("Ages must be non-negative.")
    if inp.age_start > inp.age_end:
        result.errors.append(
            f"age_start ({inp.age_start}) is after age_end ({inp.age_end})."
        )

    # --- Income ---
    if inp.annual_income < 0:
        result.errors.append(f"annual_income is negative ({inp.annual_income}).")
    elif inp.annual_income == 0:
        result.warnings.append("annual_income is 0 — nothing will be deposited.")

    # --- Allocations ---
    for name in ALLOCATION_FIELDS:
        value = getattr(inp, name)
        if not 0.0 <= value <= 1.0:
            result.errors.append(f"{name} must be in [0, 1], got {value}.")

    total = inp.allocation_total
    if total > 1.0 + 1e-9:
        result.warnings.append(
            f"Allocations sum to {total:.0%} of income — deposits exceed income."
        )

    # --- Goal ---
    if inp.goal_amount < 0:
        result.errors.append(f"goal_amount is negative ({inp.goal_amount}).")
    elif inp.goal_amount == 0:
        result.warnings.append("goal_amount is 0 — goal is reached in the first year.")

    # --- Volatility override ---
    if inp.market_volatility is not None and inp.market_volatility < 0:
        result.errors.append(
            f"market_volatility must be non-negative, got {inp.market_volatility}."
        )

    for w in result.warnings:
        logger.warning("Simulation input: %s", w)

    return result
