import numpy as np
import pytest

from archery_mc.sampling import NumpyGaussianSource, spawn_seeds
from archery_mc.shot import (
    apparent_radius,
    axis_error,
    expected_hit_fraction,
    fire_one_shot,
    is_hit,
    miss_distance,
    one_shot_error,
    shot_errors,
)


def test_axis_error_divides_by_precision():
    assert axis_error(3.0, 1.5) == pytest.approx(2.0)
    assert axis_error(-1.0, 2.0) == pytest.approx(-0.5)


def test_miss_distance_unscaled_at_base_range():
    assert miss_distance(3.0, 4.0, 1.0, 10.0) == pytest.approx(5.0)


def test_miss_distance_scales_linearly_with_range():
    assert miss_distance(3.0, 4.0, 1.0, 20.0) == pytest.approx(10.0)
    assert miss_distance(3.0, 4.0, 2.0, 20.0) == pytest.approx(5.0)
    assert miss_distance(3.0, 4.0, 1.0, 5.0) == pytest.approx(2.5)


def test_apparent_radius_gives_same_decision():
    xs = np.array([0.1, 0.5, 1.2, -2.0, 3.3])
    ys = np.array([-0.4, 0.9, 0.3, 1.1, -0.2])
    for range_yd in (5.0, 10.0, 40.0, 160.0):
        scaled = is_hit(miss_distance(xs, ys, 1.5, range_yd), 2.0)
        at_base = is_hit(miss_distance(xs, ys, 1.5, 10.0),
                         apparent_radius(2.0, range_yd))
        assert list(scaled) == list(at_base)


def test_fire_one_shot_uses_two_samples(sequence_source):
    source = sequence_source([0.3, 0.4])
    outcome = fire_one_shot(source, 0.5, 20.0, 2.5)
    assert source.calls == 2
    assert outcome.miss_distance == pytest.approx(2.0)
    assert outcome.hit

    outcome = fire_one_shot(source, 0.5, 40.0, 2.5)
    assert outcome.miss_distance == pytest.approx(4.0)
    assert not outcome.hit


def test_one_shot_error_is_never_negative(sequence_source):
    source = sequence_source([-3.0, -4.0])
    assert one_shot_error(source, 1.0, 10.0) == pytest.approx(5.0)


def test_shot_errors_takes_x_then_y_per_shot(sequence_source):
    source = sequence_source([3.0, 4.0, 0.0, 0.0, 6.0, 8.0])
    errors = shot_errors(source, 1.0, 10.0, 3)
    np.testing.assert_allclose(errors, [5.0, 0.0, 10.0])
    assert source.calls == 6


def test_numpy_source_is_reproducible():
    a = NumpyGaussianSource(42).draw(5)
    b = NumpyGaussianSource(42).draw(5)
    np.testing.assert_array_equal(a, b)
    assert isinstance(NumpyGaussianSource(42).next_gaussian(), float)


def test_numpy_source_moments():
    samples = NumpyGaussianSource(7).draw(200_000)
    assert abs(samples.mean()) < 0.01
    assert samples.std() == pytest.approx(1.0, abs=0.01)


def test_spawned_seeds_give_distinct_streams():
    s1, s2 = spawn_seeds(3, 2)
    a = NumpyGaussianSource(s1).draw(10)
    b = NumpyGaussianSource(s2).draw(10)
    assert not np.allclose(a, b)


def test_expected_hit_fraction_depends_on_normalised_ratio():
    p = expected_hit_fraction(1.5, 20.0, 2.0)
    assert expected_hit_fraction(3.0, 40.0, 2.0) == pytest.approx(p)
    assert expected_hit_fraction(1.5, 40.0, 4.0) == pytest.approx(p)
    # doubling range is the same as halving precision or radius
    q = expected_hit_fraction(1.5, 40.0, 2.0)
    assert expected_hit_fraction(0.75, 20.0, 2.0) == pytest.approx(q)
    assert expected_hit_fraction(1.5, 20.0, 1.0) == pytest.approx(q)
    assert 0.0 <= q < p <= 1.0
