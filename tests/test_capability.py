"""UniformCapability tests: construction surface and single-release discipline."""

import pytest

from variates import (
    CapabilityReleased, DSFMTEngine, DSFMTRandom, UniformCapability,
    dsfmt_random, dsfmt_random_by_array, dsfmt_random_by_seed,
)


def test_reference_backend_satisfies_protocol():
    cap = dsfmt_random_by_seed(1)
    assert isinstance(cap, UniformCapability)
    cap.release()


def test_next_adapts_close_open():
    cap = dsfmt_random_by_seed(321)
    eng = DSFMTEngine(321)
    for _ in range(1000):
        assert cap.next() == eng.genrand_close_open()
    cap.release()


def test_next_range():
    cap = dsfmt_random_by_seed(2)
    assert all(0.0 <= cap.next() < 1.0 for _ in range(10_000))
    cap.release()


def test_use_after_release_is_an_error():
    cap = dsfmt_random_by_seed(3)
    cap.next()
    cap.release()
    assert cap.released
    with pytest.raises(CapabilityReleased):
        cap.next()
    with pytest.raises(CapabilityReleased):
        cap.release()


def test_context_manager_releases_once():
    with dsfmt_random_by_seed(4) as cap:
        cap.next()
    assert cap.released

    with dsfmt_random_by_seed(4) as cap:
        cap.release()                            # explicit release inside the block is fine
    assert cap.released


def test_default_seeding_uses_injected_clock():
    a = dsfmt_random(clock=lambda: 1234.9)
    b = dsfmt_random_by_seed(1234)
    assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]
    a.release()
    b.release()


def test_default_seeding_truncates_clock_to_32_bits():
    a = dsfmt_random(clock=lambda: float(2 ** 32 + 5))
    b = dsfmt_random_by_seed(5)
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]


def test_default_seeding_with_real_clock_draws():
    cap = dsfmt_random()
    assert 0.0 <= cap.next() < 1.0
    cap.release()


def test_array_keyed_construction_is_deterministic():
    a = dsfmt_random_by_array([1, 2, 3, 4])
    b = dsfmt_random_by_array([1, 2, 3, 4])
    c = dsfmt_random_by_seed(1)
    sa = [a.next() for _ in range(200)]
    assert sa == [b.next() for _ in range(200)]
    assert sa != [c.next() for _ in range(200)]


def test_independent_capabilities_do_not_share_state():
    a = dsfmt_random_by_seed(10)
    b = dsfmt_random_by_seed(10)
    first = a.next()
    for _ in range(500):
        a.next()
    assert b.next() == first


def test_wraps_an_engine_directly():
    cap = DSFMTRandom(DSFMTEngine(key=[9]))
    assert 0.0 <= cap.next() < 1.0
    cap.release()
