"""
Distributions package — injectable random sources for the projection engine.
"""

from .sampler import MeanNormalSource, NormalSource, RandomNormalSource, make_source

__all__ = [
    "NormalSource",
    "RandomNormalSource",
    "MeanNormalSource",
    "make_source",
]
