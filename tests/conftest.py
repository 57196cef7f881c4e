"""Ensure the variates package is importable for local pytest runs, plus shared fake uniform sources."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from variates import dsfmt_random_by_seed


class CountingSource:
    """Wraps a capability and counts next() calls."""

    def __init__(self, inner):
        self.inner = inner
        self.draws = 0

    def next(self):
        self.draws += 1
        return self.inner.next()

    def release(self):
        self.inner.release()


class FixedSource:
    """Replays a fixed list of uniforms, cycling."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def next(self):
        u = self.values[self.draws % len(self.values)]
        self.draws += 1
        return u

    def release(self):
        pass


@pytest.fixture
def rng():
    cap = dsfmt_random_by_seed(20240601)
    yield cap
    cap.release()


@pytest.fixture
def counting():
    src = CountingSource(dsfmt_random_by_seed(7))
    yield src
    src.release()
