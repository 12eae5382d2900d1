"""
High-level command implementations: hit table, error dump, setup file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .io import format_table, format_error_table, write_lines
from .models import SimulationConfig, OutputMode, RangeTable, ErrorTable
from .parameters import write_setup
from .runner import run_table, record_errors
from .sampling import GaussianSource

log = logging.getLogger(__name__)


def cmd_table(
    config: SimulationConfig,
    source: Optional[GaussianSource] = None,
    stream: Optional[TextIO] = None,
) -> RangeTable:
    """Simulate every range in the series and print the hit table."""
    table = run_table(config, source)
    write_lines(format_table(table, config.shooter, config.target), stream)
    return table


def cmd_errors(
    config: SimulationConfig,
    source: Optional[GaussianSource] = None,
    stream: Optional[TextIO] = None,
) -> ErrorTable:
    """Print the raw miss distance of every recorded shot."""
    errors = record_errors(config, source)
    write_lines(format_error_table(errors), stream)
    return errors


def cmd_run(
    config: SimulationConfig,
    source: Optional[GaussianSource] = None,
    stream: Optional[TextIO] = None,
):
    """Dispatch on the configured output mode."""
    log.debug("Config: %s", config)
    if config.output_mode is OutputMode.ERRORS:
        return cmd_errors(config, source, stream)
    return cmd_table(config, source, stream)


def cmd_write_setup(setup_out: str):
    try:
        write_setup(setup_out)
    except OSError as exc:
        log.error("Cannot write setup file '%s': %s", setup_out, exc)
        sys.exit(1)
    print(f"Setup written to {setup_out}")
