"""
Standard-normal error sources.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np


class GaussianSource:
    """Stream of independent N(0, 1) deviates.

    Subclasses must implement :meth:`next_gaussian`.  :meth:`draw` returns
    the next *n* deviates in exactly the order repeated ``next_gaussian``
    calls would yield them, so a fixed-sequence source can stand in for
    the random one anywhere in the engine.
    """

    def next_gaussian(self) -> float:
        raise NotImplementedError

    def draw(self, n: int) -> np.ndarray:
        return np.fromiter(
            (self.next_gaussian() for _ in range(n)), dtype=float, count=n
        )


class NumpyGaussianSource(GaussianSource):
    """Seedable source backed by a ``numpy.random.Generator``."""

    def __init__(self, seed: Optional[Union[int, np.random.SeedSequence]] = None):
        self.rng = np.random.default_rng(seed)

    def next_gaussian(self) -> float:
        return float(self.rng.standard_normal())

    def draw(self, n: int) -> np.ndarray:
        return self.rng.standard_normal(n)


def spawn_seeds(
    seed: Optional[int], n: int,
) -> list[np.random.SeedSequence]:
    """Independent child seeds, one per parallel worker stream."""
    return np.random.SeedSequence(seed).spawn(n)
