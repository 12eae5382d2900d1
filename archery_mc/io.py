"""
Text rendering of hit tables and raw error dumps.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

from .models import RangeTable, ErrorTable, ShooterProfile, Target


def format_table(
    table: RangeTable,
    shooter: ShooterProfile,
    target: Target,
) -> list[str]:
    """Header block plus one ``range  hit%`` row per course."""
    lines = [
        "Archery MC Hit Percentages",
        f"  Shooter Precision: {shooter.precision}",
        f"  Target Radius (ft): {target.radius}",
        "",
        "Range (yd) Hit (%)",
    ]
    for course in table:
        lines.append(f"   {course.range:4.0f}      {course.hit_percent:3.0f}")
    return lines


def format_error_table(errors: ErrorTable) -> list[str]:
    """Comma-separated header of ranges, then one row per shot."""
    lines = [",".join(repr(float(r)) for r in errors.ranges)]
    for row in errors.errors:
        lines.append(",".join(repr(float(e)) for e in row))
    return lines


def write_lines(lines: Iterable[str], stream: Optional[TextIO] = None):
    if stream is None:
        stream = sys.stdout
    for line in lines:
        print(line, file=stream)
