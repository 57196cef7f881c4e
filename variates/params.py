from __future__ import annotations
from dataclasses import dataclass, field

from .errors import InvalidArgument

# ─────────────────────────────────────────────────────────────────────────────
#  IEEE754 layout: every buffered word is forced into [1, 2)
# ─────────────────────────────────────────────────────────────────────────────
MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

LOW_MASK   = 0x000FFFFFFFFFFFFF   # 52 mantissa bits
HIGH_CONST = 0x3FF0000000000000   # sign 0, exponent of 1.0


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DSFMTParams:
    """
    Parameter set of one dSFMT generator (Saito & Matsumoto).
    The period of the sequence is a multiple of 2^mexp - 1.
    """
    mexp: int
    pos1: int
    sl1: int
    msk1: int
    msk2: int
    fix1: int
    fix2: int
    pcv1: int
    pcv2: int
    sr: int = 12

    # derived
    n: int = field(init=False)               # 128-bit words in the state (lung excluded)
    n64: int = field(init=False)             # doubles buffered per regeneration
    min_array_size: int = field(init=False)
    idstring: str = field(init=False)

    def __post_init__(self):
        if self.mexp < 128:
            raise InvalidArgument(f"mexp={self.mexp} must be >= 128")
        n = (self.mexp - 128) // 104 + 1
        if not (1 <= self.pos1 < n):
            raise InvalidArgument(f"pos1={self.pos1} must be in [1,{n})")
        for name in ("sl1", "sr"):
            v = getattr(self, name)
            if not (1 <= v <= 63):
                raise InvalidArgument(f"{name}={v} must be in [1,63]")
        for name in ("msk1", "msk2", "fix1", "fix2", "pcv1", "pcv2"):
            v = getattr(self, name)
            if not (0 <= v <= MASK64):
                raise InvalidArgument(f"{name} must be a 64-bit pattern")
        if self.pcv1 == 0 and self.pcv2 == 0:
            raise InvalidArgument("pcv1 and pcv2 cannot both be zero")

        object.__setattr__(self, "n", n)
        object.__setattr__(self, "n64", 2 * n)
        object.__setattr__(self, "min_array_size", 2 * n)
        object.__setattr__(
            self, "idstring",
            f"dSFMT2-{self.mexp}:{self.pos1}-{self.sl1}:{self.msk1:x}-{self.msk2:x}",
        )


DSFMT_19937 = DSFMTParams(
    mexp=19937,
    pos1=117,
    sl1=19,
    msk1=0x000ffafffffffb3f,
    msk2=0x000ffdfffc90fffd,
    fix1=0x90014964b32f4329,
    fix2=0x3b8d12ac548a7c7a,
    pcv1=0x3d84e1ac0dc82880,
    pcv2=0x0000000000000001,
)
