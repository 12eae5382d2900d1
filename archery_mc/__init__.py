"""
Archery-accuracy Monte Carlo simulation.

Models a shooter's aiming error as a bivariate normal distribution, fires
courses of independent shots at a circular target over a series of ranges,
and reports the empirical hit fraction at each range (or dumps the raw
per-shot miss distances).
"""

from __future__ import annotations

import logging

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
