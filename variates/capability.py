from __future__ import annotations

import time
from typing import Callable, Iterable, Optional, Protocol, runtime_checkable

from .engine import DSFMTEngine
from .errors import CapabilityReleased
from .params import DSFMTParams, DSFMT_19937, MASK32


@runtime_checkable
class UniformCapability(Protocol):
    """What the samplers need: uniform draws in [0, 1) and a single release."""

    def next(self) -> float: ...

    def release(self) -> None: ...


class DSFMTRandom:
    """
    UniformCapability backed by an exclusively owned DSFMTEngine.
    release() must be called exactly once; afterwards every call raises CapabilityReleased.
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: DSFMTEngine):
        self._engine: Optional[DSFMTEngine] = engine

    def next(self) -> float:
        engine = self._engine
        if engine is None:
            raise CapabilityReleased("next() called after release()")
        return engine.genrand_close_open()

    def release(self) -> None:
        if self._engine is None:
            raise CapabilityReleased("release() called twice")
        self._engine = None

    @property
    def released(self) -> bool:
        return self._engine is None

    def __enter__(self) -> "DSFMTRandom":
        return self

    def __exit__(self, *exc) -> None:
        if self._engine is not None:
            self.release()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def dsfmt_random_by_seed(seed: int, params: DSFMTParams = DSFMT_19937,
                         verbose: bool = False) -> DSFMTRandom:
    """Deterministic: same seed, same stream."""
    return DSFMTRandom(DSFMTEngine(seed, params=params, verbose=verbose))


def dsfmt_random_by_array(key: Iterable[int], params: DSFMTParams = DSFMT_19937,
                          verbose: bool = False) -> DSFMTRandom:
    """Deterministic, seeded by an arbitrarily long key of 32-bit integers."""
    return DSFMTRandom(DSFMTEngine(key=key, params=params, verbose=verbose))


def dsfmt_random(clock: Callable[[], float] = time.time, params: DSFMTParams = DSFMT_19937,
                 verbose: bool = False) -> DSFMTRandom:
    """
    Seeds from the wall clock truncated to 32 bits. Not reproducible across runs;
    tests should use dsfmt_random_by_seed or pass a fixed `clock`.
    """
    return dsfmt_random_by_seed(int(clock()) & MASK32, params=params, verbose=verbose)
