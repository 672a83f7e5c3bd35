"""Configuration constants for Grade Estimator."""

from pathlib import Path

# Grade labels, highest first. U is the fallback and never has a threshold.
GRADE_ORDER = ("A*", "A", "B", "C", "D", "E", "F", "G", "U")
UNGRADED = "U"
THRESHOLD_GRADES = GRADE_ORDER[:-1]

# Exam sessions
SEASONS = {
    "FM": "February/March",
    "MJ": "May/June",
    "ON": "October/November",
}
DEFAULT_SEASON = "MJ"

# Request bounds
MIN_ENTRIES = 1
MAX_ENTRIES = 20  # resource-protection bound on a single request

# Historical data
MAX_HISTORY_YEARS = 5

# Recency weighting. rank 0 is the most recent available year.
#   linear:      weight = MAX_HISTORY_YEARS - rank   (5, 4, 3, 2, 1)
#   exponential: weight = DECAY_FACTOR ** rank       (1, 0.5, 0.25, ...)
#   uniform:     weight = 1
RECENCY_CURVES = ("linear", "exponential", "uniform")
DEFAULT_RECENCY_CURVE = "linear"
DEFAULT_DECAY_FACTOR = 0.5

# Degrade an entry to U instead of failing when a subject has no history
DEGRADE_ON_INSUFFICIENT_DATA = True

# Reference data
WEIGHT_TOLERANCE = 1e-6
DEFAULT_DATA_PATH = Path(__file__).parent / "reference" / "data" / "boundaries.json"

# CLI
DEFAULT_CONCURRENCY = 4
RESULT_DECIMALS = 4

GRADE_COLORS = {
    "A*": "bold green",
    "A": "green",
    "B": "green",
    "C": "cyan",
    "D": "yellow",
    "E": "yellow",
    "F": "red",
    "G": "red",
    "U": "dim",
}
