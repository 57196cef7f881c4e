# variates/__init__.py
"""
Seedable dSFMT engine and random variate generators.
"""

from .errors import VariatesError, InvalidArgument, OutOfMemory, EngineNotSeeded, CapabilityReleased
from .params import DSFMTParams, DSFMT_19937
from .engine import DSFMTEngine
from .capability import UniformCapability, DSFMTRandom, dsfmt_random, dsfmt_random_by_seed, dsfmt_random_by_array
from .distributions import (
    bernoulli, binomial, equilikely, geometric, pascal, poisson,
    uniform, exponential, erlang, normal, lognormal, chisquare, student,
)

__all__ = [
    "VariatesError", "InvalidArgument", "OutOfMemory", "EngineNotSeeded", "CapabilityReleased",
    "DSFMTParams", "DSFMT_19937",
    "DSFMTEngine",
    "UniformCapability", "DSFMTRandom",
    "dsfmt_random", "dsfmt_random_by_seed", "dsfmt_random_by_array",
    "bernoulli", "binomial", "equilikely", "geometric", "pascal", "poisson",
    "uniform", "exponential", "erlang", "normal", "lognormal", "chisquare", "student",
]
