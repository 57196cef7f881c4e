from __future__ import annotations

"""
variates.distributions

Random variate generators built on any UniformCapability (`rng.next()` in [0,1)),
after Park & Geyer's rvgs. Every function is a pure function of (rng, parameters):
it validates the parameters, then consumes a fixed number of draws

    bernoulli, equilikely, geometric, uniform, exponential, normal, lognormal : 1
    binomial(n, .), pascal(n, .), erlang(n, .), chisquare(n)                  : n
    student(n)                                                                : n + 1
    poisson(m)                                                                : until the sum reaches m

Composite samplers never stop early, so a seeded engine reproduces the same
variates for the same sequence of calls.
"""

import math
import numbers
import operator

from .capability import UniformCapability
from .errors import InvalidArgument


# ----------------------------
# Parameter checks
# ----------------------------

def _real(name: str, x) -> float:
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise InvalidArgument(f"{name} must be a real number, got {type(x).__name__}")
    return float(x)

def _integer(name: str, x) -> int:
    if isinstance(x, bool):
        raise InvalidArgument(f"{name} must be an integer, got bool")
    try:
        return operator.index(x)
    except TypeError:
        raise InvalidArgument(f"{name} must be an integer, got {type(x).__name__}") from None

def _count(name: str, n) -> int:
    n = _integer(name, n)
    if n <= 0:
        raise InvalidArgument(f"{name}={n} must be > 0")
    return n

def _probability(p) -> float:
    p = _real("p", p)
    if not (0.0 < p < 1.0):                       # also rejects NaN
        raise InvalidArgument(f"p={p} must be in (0,1)")
    return p

def _positive(name: str, x) -> float:
    x = _real(name, x)
    if not (0.0 < x):
        raise InvalidArgument(f"{name}={x} must be > 0")
    return x

def _interval(a, b) -> tuple[float, float]:
    a = _real("a", a)
    b = _real("b", b)
    if not (a < b):
        raise InvalidArgument(f"need a < b, got a={a}, b={b}")
    return a, b


# ─────────────────────────────────────────────────────────────────────────────
#  With finite support
# ─────────────────────────────────────────────────────────────────────────────

def bernoulli(rng: UniformCapability, p: float) -> int:
    """
    1 with probability p (the draw lands in the top p of [0,1)), 0 otherwise.
    Range 0, 1.  Mean p.  Variance p(1 - p).
    """
    p = _probability(p)
    return int(rng.next() >= 1.0 - p)


def binomial(rng: UniformCapability, n: int, p: float) -> int:
    """
    Number of successes in n Bernoulli(p) trials.
    Range 0..n.  Mean np.  Variance np(1 - p).
    """
    n = _count("n", n)
    q = 1.0 - _probability(p)
    x = 0
    for _ in range(n):
        x += rng.next() >= q
    return x


def equilikely(rng: UniformCapability, a: int, b: int) -> int:
    """
    Discrete uniform on a..b inclusive.
    Mean (a + b)/2.  Variance ((b - a + 1)^2 - 1)/12.
    """
    a = _integer("a", a)
    b = _integer("b", b)
    if not (a < b):
        raise InvalidArgument(f"need a < b, got a={a}, b={b}")
    return a + int((b - a + 1) * rng.next())


def geometric(rng: UniformCapability, p: float) -> int:
    """
    Range 0, 1, ...  Mean p/(1 - p).  Variance p/(1 - p)^2.
    """
    p = _probability(p)
    return int(math.log(1.0 - rng.next()) / math.log(p))


def pascal(rng: UniformCapability, n: int, p: float) -> int:
    """
    Sum of n geometric(p).
    Range 0, 1, ...  Mean np/(1 - p).  Variance np/(1 - p)^2.
    """
    n = _count("n", n)
    p = _probability(p)
    log_p = math.log(p)
    x = 0
    for _ in range(n):
        x += int(math.log(1.0 - rng.next()) / log_p)
    return x


def poisson(rng: UniformCapability, m: float) -> int:
    """
    Counts unit-rate exponential arrivals before time m.
    Range 0, 1, ...  Mean m.  Variance m.
    """
    m = _positive("m", m)
    t = 0.0
    x = -1
    while t < m:
        t -= math.log(1.0 - rng.next())
        x += 1
    return x


# ─────────────────────────────────────────────────────────────────────────────
#  With infinite support
# ─────────────────────────────────────────────────────────────────────────────

def uniform(rng: UniformCapability, a: float, b: float) -> float:
    """Range a < x < b.  Mean (a + b)/2.  Variance (b - a)^2/12."""
    a, b = _interval(a, b)
    return a + (b - a) * rng.next()


def exponential(rng: UniformCapability, m: float) -> float:
    """Range x > 0.  Mean m.  Variance m^2."""
    m = _positive("m", m)
    return -m * math.log(1.0 - rng.next())


def erlang(rng: UniformCapability, n: int, b: float) -> float:
    """Sum of n exponential(b).  Mean nb.  Variance nb^2."""
    n = _count("n", n)
    b = _positive("b", b)
    x = 0.0
    for _ in range(n):
        x -= b * math.log(1.0 - rng.next())
    return x


# Odeh & Evans, J. Applied Statistics 23 (1974), pp 96-97
_P = (0.322232431088, 1.0, 0.342242088547, 0.204231210245e-1, 0.453642210148e-4)
_Q = (0.099348462606, 0.588581570495, 0.531103462366, 0.103537752850, 0.385607006340e-2)


def _odeh_evans(u: float) -> float:
    """Approximate standard normal quantile of u in [0, 1)."""
    if u == 0.0:
        return -math.inf
    if u < 0.5:
        t = math.sqrt(-2.0 * math.log(u))
    else:
        t = math.sqrt(-2.0 * math.log(1.0 - u))
    p = _P[0] + t * (_P[1] + t * (_P[2] + t * (_P[3] + t * _P[4])))
    q = _Q[0] + t * (_Q[1] + t * (_Q[2] + t * (_Q[3] + t * _Q[4])))
    if u < 0.5:
        return (p / q) - t
    return t - (p / q)


def normal(rng: UniformCapability, m: float, s: float) -> float:
    """
    Gaussian with mean m and standard deviation s, by inverse transform of one
    draw through the Odeh & Evans rational approximation of the normal idf.
    """
    m = _real("m", m)
    s = _positive("s", s)
    return m + s * _odeh_evans(rng.next())


def lognormal(rng: UniformCapability, a: float, b: float) -> float:
    """
    exp(a + b Z).  Mean exp(a + b^2/2).  Variance (exp(b^2) - 1) exp(2a + b^2).
    """
    a = _real("a", a)
    b = _positive("b", b)
    return math.exp(a + b * _odeh_evans(rng.next()))


def _chisquare(rng: UniformCapability, n: int) -> float:
    x = 0.0
    for _ in range(n):
        z = _odeh_evans(rng.next())
        x += z * z
    return x


def chisquare(rng: UniformCapability, n: int) -> float:
    """Sum of n squared standard normals.  Mean n.  Variance 2n."""
    n = _count("n", n)
    return _chisquare(rng, n)


def student(rng: UniformCapability, n: int) -> float:
    """
    Z / sqrt(chisquare(n)/n).  Mean 0 (n > 1).  Variance n/(n - 2) (n > 2).
    The normal is drawn before the n chi-square draws.
    """
    n = _count("n", n)
    z = _odeh_evans(rng.next())
    return z / math.sqrt(_chisquare(rng, n) / n)
