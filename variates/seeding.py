from __future__ import annotations

import operator
from typing import Iterable, Sequence

import numpy as np

from .errors import InvalidArgument, OutOfMemory
from .params import DSFMTParams, MASK32, LOW_MASK, HIGH_CONST

"""
State initialisation for the dSFMT engine. Seeding runs once per stream, so it is
plain Python int arithmetic (masked to 32 bits) rather than jitted code; the result is
packed into the (n+1, 2) uint64 state array the kernels in jitted_recursion work on.
"""


# ─────────────────────────────────────────────────────────────────────────────
#  Argument coercion: C `int` semantics, negatives wrap to uint32
# ─────────────────────────────────────────────────────────────────────────────
def as_uint32(value, what: str = "seed") -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgument(f"{what} must be an integer, got bool")
    try:
        v = operator.index(value)
    except TypeError:
        raise InvalidArgument(f"{what} must be an integer, got {type(value).__name__}") from None
    if not (-(1 << 31) <= v <= MASK32):
        raise InvalidArgument(f"{what}={v} does not fit in 32 bits")
    return v & MASK32


def allocate_status(params: DSFMTParams) -> np.ndarray:
    try:
        return np.zeros((params.n + 1, 2), dtype=np.uint64)
    except MemoryError as exc:
        raise OutOfMemory(f"cannot allocate dSFMT state for mexp={params.mexp}") from exc


def _pack_lanes(lanes: Sequence[int], status: np.ndarray) -> None:
    """Lane 2k is the low half of 64-bit word k, lane 2k+1 the high half."""
    arr = np.asarray(lanes, dtype=np.uint64).reshape(-1, 2)
    words = arr[:, 0] | (arr[:, 1] << np.uint64(32))
    status.reshape(-1)[:] = words


# ─────────────────────────────────────────────────────────────────────────────
#  Seeding by a 32-bit integer
# ─────────────────────────────────────────────────────────────────────────────
def init_gen_rand_py(seed: int, params: DSFMTParams) -> list[int]:
    size = (params.n + 1) * 4
    lanes = [0] * size
    lanes[0] = seed & MASK32
    for i in range(1, size):
        prev = lanes[i - 1]
        lanes[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & MASK32
    return lanes


# ─────────────────────────────────────────────────────────────────────────────
#  Seeding by an array of 32-bit integers
# ─────────────────────────────────────────────────────────────────────────────
def _ini_func1(x: int) -> int:
    return ((x ^ (x >> 27)) * 1664525) & MASK32

def _ini_func2(x: int) -> int:
    return ((x ^ (x >> 27)) * 1566083941) & MASK32

def init_by_array_py(key: Sequence[int], params: DSFMTParams) -> list[int]:
    size = (params.n + 1) * 4
    if size >= 623:
        lag = 11
    elif size >= 68:
        lag = 7
    elif size >= 39:
        lag = 5
    else:
        lag = 3
    mid = (size - lag) // 2
    key_length = len(key)

    s = [0x8b8b8b8b] * size
    count = max(key_length + 1, size)

    r = _ini_func1(s[0] ^ s[mid % size] ^ s[(size - 1) % size])
    s[mid % size] = (s[mid % size] + r) & MASK32
    r = (r + key_length) & MASK32
    s[(mid + lag) % size] = (s[(mid + lag) % size] + r) & MASK32
    s[0] = r
    count -= 1

    i, j = 1, 0
    while j < count and j < key_length:
        r = _ini_func1(s[i] ^ s[(i + mid) % size] ^ s[(i + size - 1) % size])
        s[(i + mid) % size] = (s[(i + mid) % size] + r) & MASK32
        r = (r + key[j] + i) & MASK32
        s[(i + mid + lag) % size] = (s[(i + mid + lag) % size] + r) & MASK32
        s[i] = r
        i = (i + 1) % size
        j += 1
    while j < count:
        r = _ini_func1(s[i] ^ s[(i + mid) % size] ^ s[(i + size - 1) % size])
        s[(i + mid) % size] = (s[(i + mid) % size] + r) & MASK32
        r = (r + i) & MASK32
        s[(i + mid + lag) % size] = (s[(i + mid + lag) % size] + r) & MASK32
        s[i] = r
        i = (i + 1) % size
        j += 1
    for _ in range(size):
        r = _ini_func2((s[i] + s[(i + mid) % size] + s[(i + size - 1) % size]) & MASK32)
        s[(i + mid) % size] ^= r
        r = (r - i) & MASK32
        s[(i + mid + lag) % size] ^= r
        s[i] = r
        i = (i + 1) % size
    return s


def coerce_key(key: Iterable[int]) -> list[int]:
    if isinstance(key, (str, bytes)):
        raise InvalidArgument("key must be a sequence of integers")
    try:
        items = list(key)
    except TypeError:
        raise InvalidArgument(f"key must be iterable, got {type(key).__name__}") from None
    return [as_uint32(k, what=f"key[{idx}]") for idx, k in enumerate(items)]


# ─────────────────────────────────────────────────────────────────────────────
#  Post-processing shared by both seeding paths
# ─────────────────────────────────────────────────────────────────────────────
def initial_mask(status: np.ndarray, params: DSFMTParams) -> None:
    """Force the n buffered words (not the lung) into the [1,2) double encoding."""
    words = status[:params.n]
    words &= np.uint64(LOW_MASK)
    words |= np.uint64(HIGH_CONST)


def _parity64(x: int) -> int:
    for shift in (32, 16, 8, 4, 2, 1):
        x ^= x >> shift
    return x & 1

def period_certification(status: np.ndarray, params: DSFMTParams) -> bool:
    """
    Ensures the lung is not in a short cycle of the recurrence.
    Returns True iff a bit had to be flipped.
    """
    n = params.n
    tmp0 = int(status[n, 0]) ^ params.fix1
    tmp1 = int(status[n, 1]) ^ params.fix2
    inner = (tmp0 & params.pcv1) ^ (tmp1 & params.pcv2)
    if _parity64(inner) == 1:
        return False

    # lowest set bit of pcv, lane 1 first
    lane, pcv = (1, params.pcv2) if params.pcv2 else (0, params.pcv1)
    status[n, lane] ^= np.uint64(pcv & -pcv)
    return True


def seed_status(status: np.ndarray, lanes: Sequence[int], params: DSFMTParams) -> bool:
    """Packs the lanes, masks, certifies. Returns whether certification flipped a bit."""
    _pack_lanes(lanes, status)
    initial_mask(status, params)
    return period_certification(status, params)
