"""
Random sources for the projection engine.

The engine never touches a global generator. Every draw goes through a
NormalSource handed in by the caller:

  RandomNormalSource  — numpy Generator, seeded for reproducible runs or
                        fresh OS entropy when seed is None
  MeanNormalSource    — always returns the mean (expected-value path, no noise)

Usage:
    source = RandomNormalSource(seed=42)
    r = source.normal(0.07, 0.15)
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class NormalSource(Protocol):
    """Anything that can produce the next normally distributed sample."""

    def normal(self, mean: float, std: float) -> float:
        ...


class RandomNormalSource:
    """
    NormalSource backed by numpy's default_rng.

    Pass either a seed or an existing Generator (to share one stream across
    several runs, e.g. Monte Carlo paths).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        generator: Optional[np.random.Generator] = None,
    ):
        if seed is not None and generator is not None:
            raise ValueError("Provide seed OR generator, not both.")
        self.rng = generator if generator is not None else np.random.default_rng(seed)

    def normal(self, mean: float, std: float) -> float:
        if std <= 0:
            return float(mean)
        return float(self.rng.normal(mean, std))


class MeanNormalSource:
    """Deterministic source: every draw is exactly the mean."""

    def normal(self, mean: float, std: float) -> float:
        return float(mean)


def make_source(seed: Optional[int] = None) -> RandomNormalSource:
    return RandomNormalSource(seed)
