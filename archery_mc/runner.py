"""
Course simulation, range series and raw error recording.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional

import numpy as np

from .constants import BASE_RANGE, MAX_RANGE, LINEAR_STEP, SHOTS_PER_COURSE, CHUNK_SIZE
from .models import (
    CourseResult, RangeTable, ErrorTable, RangeMode, SimulationConfig,
)
from .sampling import GaussianSource, NumpyGaussianSource, spawn_seeds
from .shot import shot_errors, miss_distance, is_hit, expected_hit_fraction

log = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Range series
# -------------------------------------------------------------------

def doubling_ranges(base_range: float = BASE_RANGE,
                    max_range: float = MAX_RANGE) -> list[float]:
    """``base, 2*base, 4*base, ...`` up to and including *max_range*."""
    ranges = []
    r = base_range
    while r <= max_range:
        ranges.append(r)
        r *= 2
    return ranges


def linear_ranges(base_range: float = BASE_RANGE,
                  max_range: float = MAX_RANGE,
                  step: float = LINEAR_STEP) -> list[float]:
    """``base, base+step, ...`` up to and including *max_range*."""
    ranges = []
    i = 0
    r = base_range
    while r <= max_range:
        ranges.append(r)
        i += 1
        r = base_range + i * step  # not cumulative
    return ranges


def half_doubling_ranges(base_range: float = BASE_RANGE,
                         max_range: float = MAX_RANGE) -> list[float]:
    """Doubling series starting at half the base range."""
    return doubling_ranges(base_range / 2, max_range)


def range_series(config: SimulationConfig) -> list[float]:
    if config.range_mode is RangeMode.LINEAR:
        return linear_ranges(config.base_range, config.max_range,
                             config.linear_step)
    return doubling_ranges(config.base_range, config.max_range)


# -------------------------------------------------------------------
# Courses
# -------------------------------------------------------------------

def fire_one_course(
    source: GaussianSource,
    precision: float,
    range_yd: float,
    radius: float,
    trials: int = SHOTS_PER_COURSE,
    base_range: float = BASE_RANGE,
    chunk_size: int = CHUNK_SIZE,
) -> CourseResult:
    """Fire *trials* independent shots and return the fraction that hit.

    Shots are evaluated in batches of at most *chunk_size* so memory use
    does not grow with the trial count.
    """
    hits = 0
    remaining = trials
    while remaining > 0:
        n = min(remaining, chunk_size)
        errors = shot_errors(source, precision, range_yd, n, base_range)
        hits += int(np.count_nonzero(is_hit(errors, radius)))
        remaining -= n

    result = CourseResult(range_yd, hits / trials, trials)
    log.debug("  Range %6g yd: %d/%d hits = %.4f  (analytic %.4f)",
              range_yd, hits, trials, result.hit_fraction,
              expected_hit_fraction(precision, range_yd, radius, base_range))
    return result


def run_course(
    range_yd: float,
    precision: float,
    radius: float,
    trials: int,
    base_range: float,
    seed: np.random.SeedSequence,
) -> CourseResult:
    """Process-pool entry point: one course on its own random stream."""
    source = NumpyGaussianSource(seed)
    return fire_one_course(source, precision, range_yd, radius, trials,
                           base_range)


def run_table(
    config: SimulationConfig,
    source: Optional[GaussianSource] = None,
) -> RangeTable:
    """Run one course per range in the configured series.

    With ``max_workers == 1`` every course draws, in range order, from a
    single source (*source*, or a fresh one seeded from ``config.seed``).
    With more workers each range runs in its own process on an
    independent child seed and *source* must be omitted.
    """
    ranges = range_series(config)
    log.info("Running %d courses of %d shots  (precision %g, radius %g ft)",
             len(ranges), config.trials, config.precision, config.radius)

    if config.max_workers > 1:
        if source is not None:
            raise ValueError("a custom source cannot be shared across workers")
        return _run_table_parallel(config, ranges)

    if source is None:
        source = NumpyGaussianSource(config.seed)
    results = [
        fire_one_course(source, config.precision, r, config.radius,
                        config.trials, config.base_range)
        for r in ranges
    ]
    return RangeTable(tuple(results))


def _run_table_parallel(config: SimulationConfig,
                        ranges: list[float]) -> RangeTable:
    n_workers = min(config.max_workers, len(ranges))
    log.info("Parallelism: %d workers", n_workers)
    seeds = spawn_seeds(config.seed, len(ranges))

    results: list[CourseResult] = []
    with ProcessPoolExecutor(max_workers=n_workers) as executor:
        futures = {
            executor.submit(
                run_course, r, config.precision, config.radius,
                config.trials, config.base_range, seed,
            ): r
            for r, seed in zip(ranges, seeds)
        }
        for fut in as_completed(futures):
            results.append(fut.result())
            log.debug("  Progress: %d/%d courses", len(results), len(ranges))

    results.sort(key=lambda c: c.range)
    return RangeTable(tuple(results))


# -------------------------------------------------------------------
# Raw error recording
# -------------------------------------------------------------------

def record_errors(
    config: SimulationConfig,
    source: Optional[GaussianSource] = None,
) -> ErrorTable:
    """Raw miss distances for ``config.error_trials`` shots per range.

    Uses the half-doubling series.  Draws are shot-major: for every shot,
    one (x, y) pair per range in order, matching the row layout of the
    returned table.
    """
    ranges = half_doubling_ranges(config.base_range, config.max_range)
    if source is None:
        source = NumpyGaussianSource(config.seed)

    n_shots = config.error_trials
    n_ranges = len(ranges)
    xy = source.draw(2 * n_shots * n_ranges).reshape(n_shots, n_ranges, 2)
    errors = miss_distance(xy[..., 0], xy[..., 1], config.precision,
                           np.asarray(ranges), config.base_range)
    log.info("Recorded %d shots at %d ranges", n_shots, n_ranges)
    return ErrorTable(tuple(ranges), errors)
