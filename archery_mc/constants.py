"""
Simulation constants and defaults.
"""

# Range (yd) at which a target's radius applies without scaling.
BASE_RANGE = 10.0

# Longest range tabulated (yd).
MAX_RANGE = 200.0

# Increment for the linear range table (yd).
LINEAR_STEP = 10.0

SHOTS_PER_COURSE = 100_000
SHOTS_ERROR_TABLE = 100

# Shots evaluated per vectorised batch inside one course.
CHUNK_SIZE = 250_000

DEFAULT_PRECISION = 1.5
DEFAULT_RADIUS = 2.0

# Longest range series a run may tabulate.
MAX_SERIES_LENGTH = 10_000
