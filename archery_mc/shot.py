"""
Shot model: bivariate normal aiming error scaled by range.

Each shot draws two standard-normal samples (x then y), divides them by
the shooter's precision to get the per-axis error in feet at the base
range, and scales the combined radial error linearly with range:

.. math::

    d = \\frac{\\sqrt{x^2 + y^2}}{p} \\cdot \\frac{r}{r_0}

A shot hits when ``d <= radius``.  Equivalently the error at the base
range can be compared with the *apparent radius* ``radius * r0 / r``.
Either way the hit probability depends only on
``radius * precision * r0 / r``.
"""

from __future__ import annotations

import math

import numpy as np

from .constants import BASE_RANGE
from .models import ShotOutcome
from .sampling import GaussianSource


def axis_error(sample, precision: float):
    """Error on one axis in feet at the base range."""
    return sample / precision


def miss_distance(x, y, precision: float, range_yd: float,
                  base_range: float = BASE_RANGE):
    """Distance from the aim point in feet; works on scalars or arrays."""
    return (np.hypot(axis_error(x, precision), axis_error(y, precision))
            * range_yd / base_range)


def apparent_radius(radius: float, range_yd: float,
                    base_range: float = BASE_RANGE) -> float:
    """Target radius rescaled to how it looks from the base range."""
    return radius * base_range / range_yd


def is_hit(miss, radius: float):
    return miss <= radius


def one_shot_error(source: GaussianSource, precision: float, range_yd: float,
                   base_range: float = BASE_RANGE) -> float:
    x = source.next_gaussian()
    y = source.next_gaussian()
    return float(miss_distance(x, y, precision, range_yd, base_range))


def fire_one_shot(source: GaussianSource, precision: float, range_yd: float,
                  radius: float, base_range: float = BASE_RANGE) -> ShotOutcome:
    """Fire one random shot and report where it landed."""
    error = one_shot_error(source, precision, range_yd, base_range)
    return ShotOutcome(error, radius)


def shot_errors(source: GaussianSource, precision: float, range_yd: float,
                n: int, base_range: float = BASE_RANGE) -> np.ndarray:
    """Miss distances of *n* shots, each from a fresh (x, y) pair."""
    xy = source.draw(2 * n).reshape(n, 2)
    return miss_distance(xy[:, 0], xy[:, 1], precision, range_yd, base_range)


def expected_hit_fraction(precision: float, range_yd: float, radius: float,
                          base_range: float = BASE_RANGE) -> float:
    """Closed-form hit probability (Rayleigh CDF at the scaled radius)."""
    a = radius * precision * base_range / range_yd
    return -math.expm1(-0.5 * a * a)
