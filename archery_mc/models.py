"""
Data model classes: ShooterProfile, Target, ShotOutcome, CourseResult,
RangeTable, ErrorTable, SimulationConfig.
"""

from __future__ import annotations

import enum
import math
import numbers
from dataclasses import dataclass, field
from typing import Iterator, Optional

import numpy as np

from .constants import (
    BASE_RANGE,
    MAX_RANGE,
    LINEAR_STEP,
    SHOTS_PER_COURSE,
    SHOTS_ERROR_TABLE,
    MAX_SERIES_LENGTH,
)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _require_positive(name: str, value: float):
    if not _is_real(value) or not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive number, got {value!r}")


def _require_count(name: str, value, minimum: int = 1):
    if (not _is_real(value) or not math.isfinite(value)
            or int(value) != value or value < minimum):
        raise ValueError(
            f"{name} must be an integer >= {minimum}, got {value!r}"
        )


class RangeMode(enum.Enum):
    """How the tabulated ranges are chosen."""

    DOUBLING = "doubling"
    LINEAR = "linear"


class OutputMode(enum.Enum):
    """Aggregated hit table or raw per-shot error dump."""

    TABLE = "table"
    ERRORS = "errors"


@dataclass(frozen=True)
class ShooterProfile:
    """Shooter skill; larger precision means a tighter grouping."""

    precision: float

    def __post_init__(self):
        _require_positive("precision", self.precision)


@dataclass(frozen=True)
class Target:
    """Circular target, radius in feet at the base range."""

    radius: float

    def __post_init__(self):
        _require_positive("radius", self.radius)


@dataclass(frozen=True)
class ShotOutcome:
    miss_distance: float
    radius: float

    def __post_init__(self):
        if not self.miss_distance >= 0:
            raise ValueError(
                f"miss_distance must be non-negative, got {self.miss_distance!r}"
            )

    @property
    def hit(self) -> bool:
        return self.miss_distance <= self.radius


@dataclass(frozen=True)
class CourseResult:
    """Empirical hit fraction of one course of shots at a fixed range."""

    range: float
    hit_fraction: float
    trials: int

    def __post_init__(self):
        if not 0.0 <= self.hit_fraction <= 1.0:
            raise ValueError(
                f"hit_fraction must lie in [0, 1], got {self.hit_fraction!r}"
            )
        if self.trials <= 0:
            raise ValueError(f"trials must be positive, got {self.trials!r}")

    @property
    def hit_percent(self) -> float:
        return self.hit_fraction * 100.0


@dataclass(frozen=True)
class RangeTable:
    """Course results ordered by strictly increasing range."""

    results: tuple[CourseResult, ...]

    def __post_init__(self):
        ranges = [r.range for r in self.results]
        if any(b <= a for a, b in zip(ranges, ranges[1:])):
            raise ValueError(f"ranges must be strictly increasing: {ranges}")

    def __iter__(self) -> Iterator[CourseResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def ranges(self) -> list[float]:
        return [r.range for r in self.results]

    @property
    def hit_fractions(self) -> list[float]:
        return [r.hit_fraction for r in self.results]


@dataclass(frozen=True)
class ErrorTable:
    """Raw miss distances, one row per shot and one column per range."""

    ranges: tuple[float, ...]
    errors: np.ndarray = field(repr=False, compare=False)

    def __post_init__(self):
        if self.errors.ndim != 2 or self.errors.shape[1] != len(self.ranges):
            raise ValueError(
                f"errors must have shape (trials, {len(self.ranges)}), "
                f"got {self.errors.shape}"
            )

    @property
    def trials(self) -> int:
        return self.errors.shape[0]


@dataclass(frozen=True)
class SimulationConfig:
    """Everything one simulation run needs; passed into the engine."""

    shooter: ShooterProfile
    target: Target
    range_mode: RangeMode = RangeMode.DOUBLING
    output_mode: OutputMode = OutputMode.TABLE
    base_range: float = BASE_RANGE
    max_range: float = MAX_RANGE
    linear_step: float = LINEAR_STEP
    trials: int = SHOTS_PER_COURSE
    error_trials: int = SHOTS_ERROR_TABLE
    seed: Optional[int] = None
    max_workers: int = 1

    def __post_init__(self):
        _require_positive("base_range", self.base_range)
        _require_positive("max_range", self.max_range)
        _require_positive("linear_step", self.linear_step)
        if self.max_range < self.base_range:
            raise ValueError(
                f"max_range must be at least base_range ({self.base_range}), "
                f"got {self.max_range!r}"
            )
        if self.range_mode is RangeMode.LINEAR:
            n_ranges = (self.max_range - self.base_range) / self.linear_step + 1
            if n_ranges > MAX_SERIES_LENGTH:
                raise ValueError(
                    f"linear table would have {n_ranges:.0f} ranges "
                    f"(limit {MAX_SERIES_LENGTH}); raise linear_step "
                    f"or lower max_range"
                )
        for name in ("trials", "error_trials", "max_workers"):
            _require_count(name, getattr(self, name))
        if self.seed is not None:
            _require_count("seed", self.seed, minimum=0)

        # validated; store canonical types
        for name in ("base_range", "max_range", "linear_step"):
            object.__setattr__(self, name, float(getattr(self, name)))
        for name in ("trials", "error_trials", "max_workers"):
            object.__setattr__(self, name, int(getattr(self, name)))
        if self.seed is not None:
            object.__setattr__(self, "seed", int(self.seed))

    @property
    def precision(self) -> float:
        return self.shooter.precision

    @property
    def radius(self) -> float:
        return self.target.radius
