"""
Run configuration: setup-file loading, defaults, and assembly of the
immutable ``SimulationConfig``.
"""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Optional

import yaml

from .constants import (
    BASE_RANGE, MAX_RANGE, LINEAR_STEP, SHOTS_PER_COURSE, SHOTS_ERROR_TABLE,
)
from .models import (
    ShooterProfile, Target, SimulationConfig, RangeMode, OutputMode,
)

log = logging.getLogger(__name__)

# Keys accepted in a setup YAML, with their defaults.
SETUP_DEFAULTS: dict[str, Any] = {
    "trials": SHOTS_PER_COURSE,
    "error_trials": SHOTS_ERROR_TABLE,
    "seed": None,
    "base_range": BASE_RANGE,
    "max_range": MAX_RANGE,
    "linear_step": LINEAR_STEP,
    "max_workers": 1,
}


def parse_positive(text: str) -> float:
    """Parse a strictly positive, finite number.

    Raises ``ValueError`` for anything else, including ``nan`` and ``inf``.
    """
    value = float(text)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"expected a positive number, got '{text}'")
    return value


def resolve_workers(max_workers, cpu_count: Optional[int] = None) -> int:
    """Turn ``'auto'`` or a numeric string into a worker count.

    Non-string values are returned unchanged; ``SimulationConfig``
    checks the range.
    """
    if max_workers == "auto":
        return max(1, cpu_count or os.cpu_count() or 1)
    if isinstance(max_workers, str):
        try:
            return int(max_workers)
        except ValueError:
            raise ValueError(
                f"max_workers must be a positive integer or 'auto', "
                f"got {max_workers!r}"
            ) from None
    return max_workers


def load_setup(path: str) -> dict[str, Any]:
    """Read a setup YAML; unknown keys are warned about and dropped."""
    with open(path, "r") as fh:
        cfg = yaml.safe_load(fh) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"setup file '{path}' must contain a mapping")

    extra = set(cfg) - set(SETUP_DEFAULTS)
    if extra:
        log.warning("Unknown keys in %s (ignored): %s", path, sorted(extra))
    return {k: v for k, v in cfg.items() if k in SETUP_DEFAULTS}


def write_setup(path: str):
    """Write a commented setup YAML holding the defaults."""
    with open(path, "w") as fh:
        fh.write("# archery-mc run setup\n")
        fh.write("# --------------------\n")
        fh.write("#\n")
        fh.write("#   trials       shots per course in the hit table\n")
        fh.write("#   error_trials shots per range in the error dump (-E)\n")
        fh.write("#   seed         integer for reproducible runs, null for fresh entropy\n")
        fh.write("#   base_range   range (yd) at which the target radius applies as-is\n")
        fh.write("#   max_range    longest range tabulated (yd)\n")
        fh.write("#   linear_step  increment of the linear table (-L), yd\n")
        fh.write("#   max_workers  processes for the hit table; integer or 'auto'\n")
        fh.write("#\n")
        fh.write("# Usage:  archery-mc 1.5 2.0 -c setup.yaml\n\n")
        yaml.dump(SETUP_DEFAULTS, fh, default_flow_style=False, sort_keys=False)


def build_config(
    precision: float,
    radius: float,
    linear: bool = False,
    errors: bool = False,
    setup: Optional[dict[str, Any]] = None,
    **overrides,
) -> SimulationConfig:
    """Merge defaults, setup-file values and overrides into a config.

    *overrides* with value ``None`` are ignored so unset command-line
    options fall through to the setup file.
    """
    values = dict(SETUP_DEFAULTS)
    values.update(setup or {})
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(values) - set(SETUP_DEFAULTS)
    if unknown:
        raise ValueError(f"unknown configuration keys: {sorted(unknown)}")

    # Values go through unconverted; SimulationConfig rejects wrong types
    # and fractional counts with ValueError.
    return SimulationConfig(
        shooter=ShooterProfile(precision),
        target=Target(radius),
        range_mode=RangeMode.LINEAR if linear else RangeMode.DOUBLING,
        output_mode=OutputMode.ERRORS if errors else OutputMode.TABLE,
        base_range=values["base_range"],
        max_range=values["max_range"],
        linear_step=values["linear_step"],
        trials=values["trials"],
        error_trials=values["error_trials"],
        seed=values["seed"],
        max_workers=resolve_workers(values["max_workers"]),
    )
