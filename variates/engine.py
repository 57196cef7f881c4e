from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgument, EngineNotSeeded, OutOfMemory
from .params import DSFMTParams, DSFMT_19937
from .jitted_recursion import gen_rand_all, gen_rand_array
from .seeding import (
    allocate_status, as_uint32, coerce_key,
    init_gen_rand_py, init_by_array_py, seed_status,
)

ENCODINGS = ("close1_open2", "close_open", "open_close", "open_open")

_ONE = np.uint64(1)


class DSFMTEngine:
    """
    Double precision SIMD-oriented Fast Mersenne Twister, buffered.

    State is one (n+1, 2) uint64 array: rows [0,n) are the buffered words, which the
    initial mask keeps in the IEEE754 [1,2) encoding, row n is the lung. The same memory
    is read as n64 = 2n doubles through `_doubles`; `_idx` is the cursor into that view
    and idx >= n64 means "exhausted, regenerate before the next read".

    Not safe for concurrent use: one engine per stream.
    """

    def __init__(self, seed: Optional[int] = None, *, key: Optional[Iterable[int]] = None,
                 params: DSFMTParams = DSFMT_19937, verbose: bool = False):
        if seed is not None and key is not None:
            raise InvalidArgument("give either seed or key, not both")
        if not isinstance(params, DSFMTParams):
            raise InvalidArgument(f"params must be DSFMTParams, got {type(params).__name__}")

        self.params = params
        self.verbose = bool(verbose)

        self._status = allocate_status(params)
        try:
            self._scratch = np.zeros(1, dtype=np.uint64)
        except MemoryError as exc:
            raise OutOfMemory("cannot allocate dSFMT scratch word") from exc

        flat = self._status[:params.n].reshape(-1)       # view, lung excluded
        self._bits = flat
        self._doubles = flat.view(np.float64)
        self._scratch_d = self._scratch.view(np.float64)

        self._n64 = params.n64
        self._idx = params.n64
        self._seeded = False
        self._kernel_args = (
            params.n, params.pos1,
            np.uint64(params.sl1), np.uint64(params.sr),
            np.uint64(params.msk1), np.uint64(params.msk2),
        )

        if seed is not None:
            self.seed(seed)
        elif key is not None:
            self.seed_by_array(key)

    # ------------------------------------------------------------------ seeding

    def seed(self, value: int) -> None:
        s = as_uint32(value)
        flipped = seed_status(self._status, init_gen_rand_py(s, self.params), self.params)
        self._after_seed(f"seed={s}", flipped)

    def seed_by_array(self, key: Iterable[int]) -> None:
        k = coerce_key(key)
        flipped = seed_status(self._status, init_by_array_py(k, self.params), self.params)
        self._after_seed(f"key of length {len(k)}", flipped)

    def _after_seed(self, what: str, flipped: bool) -> None:
        self._idx = self._n64
        self._seeded = True
        if self.verbose:
            print(f"[dsfmt] {self.params.idstring} seeded by {what}", flush=True)
            if flipped:
                print("[dsfmt] period certification flipped one lung bit", flush=True)

    # ------------------------------------------------------------------ buffered draws

    def _regenerate(self) -> None:
        if not self._seeded:
            raise EngineNotSeeded("call seed() or seed_by_array() before drawing")
        gen_rand_all(self._status, *self._kernel_args)
        self._idx = 0

    def genrand_close1_open2(self) -> float:
        """Next buffered double in [1, 2)."""
        if self._idx >= self._n64:
            self._regenerate()
        r = self._doubles[self._idx]
        self._idx += 1
        return float(r)

    def genrand_close_open(self) -> float:
        """[0, 1)"""
        return self.genrand_close1_open2() - 1.0

    def genrand_open_close(self) -> float:
        """(0, 1]"""
        return 2.0 - self.genrand_close1_open2()

    def genrand_open_open(self) -> float:
        """(0, 1): the mantissa LSB is forced to 1 so the result is never 0 nor 1."""
        if self._idx >= self._n64:
            self._regenerate()
        self._scratch[0] = self._bits[self._idx] | _ONE
        self._idx += 1
        return float(self._scratch_d[0]) - 1.0

    # ------------------------------------------------------------------ bulk fill

    def _words_of(self, buffer) -> NDArray[np.uint64]:
        if not isinstance(buffer, np.ndarray):
            raise InvalidArgument(f"buffer must be a numpy array, got {type(buffer).__name__}")
        if buffer.dtype != np.float64 or buffer.ndim != 1:
            raise InvalidArgument("buffer must be a 1D float64 array")
        if not buffer.flags.c_contiguous or not buffer.flags.writeable:
            raise InvalidArgument("buffer must be C-contiguous and writeable")
        size = int(buffer.size)
        if size % 2 != 0:
            raise InvalidArgument(f"buffer size {size} must be even")
        if size < self.params.min_array_size:
            raise InvalidArgument(f"buffer size {size} is below the minimum {self.params.min_array_size}")
        return buffer.view(np.uint64).reshape(-1, 2)

    def fill_array(self, buffer: NDArray[np.float64], encoding: str = "close1_open2") -> NDArray[np.float64]:
        """
        Fills `buffer` in one recursion pass, bypassing the single-value cursor.
        The cursor is left exhausted: the next single draw continues the same stream.
        """
        if encoding not in ENCODINGS:
            raise InvalidArgument(f"unknown encoding {encoding!r}, expected one of {ENCODINGS}")
        words = self._words_of(buffer)
        if not self._seeded:
            raise EngineNotSeeded("call seed() or seed_by_array() before drawing")

        gen_rand_array(words, self._status, *self._kernel_args)
        self._idx = self._n64

        if encoding == "close_open":
            buffer -= 1.0
        elif encoding == "open_close":
            np.subtract(2.0, buffer, out=buffer)
        elif encoding == "open_open":
            words |= _ONE
            buffer -= 1.0
        return buffer

    def fill_array_close1_open2(self, buffer: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.fill_array(buffer, "close1_open2")

    def fill_array_close_open(self, buffer: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.fill_array(buffer, "close_open")

    def fill_array_open_close(self, buffer: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.fill_array(buffer, "open_close")

    def fill_array_open_open(self, buffer: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.fill_array(buffer, "open_open")

    # ------------------------------------------------------------------ introspection

    @property
    def cursor(self) -> int:
        return self._idx

    @property
    def is_seeded(self) -> bool:
        return self._seeded

    @property
    def min_array_size(self) -> int:
        return self.params.min_array_size

    @property
    def idstring(self) -> str:
        return self.params.idstring

    def __repr__(self) -> str:
        state = f"cursor={self._idx}/{self._n64}" if self._seeded else "unseeded"
        return f"DSFMTEngine({self.params.idstring}, {state})"
