import pytest

from dockcore.randomness import (
    auto_seed,
    make_rng,
    random_fl,
    random_in_box,
    random_inside_sphere,
    random_int,
    random_normal,
    random_sz,
)


def test_same_seed_same_sequence():
    g1, g2 = make_rng(42), make_rng(42)
    assert [random_fl(0.0, 1.0, g1) for _ in range(5)] == [random_fl(0.0, 1.0, g2) for _ in range(5)]


def test_random_fl_within_bounds():
    g = make_rng(1)
    values = [random_fl(-2.0, 3.0, g) for _ in range(200)]
    assert all(-2.0 <= v <= 3.0 for v in values)


def test_random_fl_requires_ordered_bounds():
    with pytest.raises(ValueError):
        random_fl(1.0, 1.0, make_rng(0))


def test_random_normal_rejects_negative_sigma():
    with pytest.raises(ValueError):
        random_normal(0.0, -1.0, make_rng(0))


def test_random_normal_zero_sigma_gives_mean():
    assert random_normal(3.5, 0.0, make_rng(0)) == 3.5


def test_random_int_bounds_and_errors():
    g = make_rng(2)
    values = {random_int(3, 5, g) for _ in range(200)}
    assert values <= {3, 4, 5}
    assert random_int(7, 7, g) == 7
    with pytest.raises(ValueError):
        random_int(5, 3, g)


def test_random_sz_rejects_negative():
    with pytest.raises(ValueError):
        random_sz(-1, 3, make_rng(0))
    assert 0 <= random_sz(0, 3, make_rng(0)) <= 3


def test_random_inside_sphere():
    g = make_rng(3)
    for _ in range(100):
        v = random_inside_sphere(g)
        assert len(v) == 3
        assert sum(x * x for x in v) < 1


def test_random_in_box():
    g = make_rng(4)
    c1, c2 = (-1.0, 0.0, 10.0), (1.0, 5.0, 12.0)
    for _ in range(100):
        p = random_in_box(c1, c2, g)
        assert all(lo <= x <= hi for lo, x, hi in zip(c1, p, c2))


def test_auto_seed_fits_signed_32_bits():
    seed = auto_seed()
    assert -(2**31) <= seed < 2**31