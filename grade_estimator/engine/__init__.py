"""Grade estimation engine."""

from .aggregator import normalize
from .resolver import BoundaryResolver, combine_records, recency_weights
from .classifier import classify
from .orchestrator import GradeEstimator, parse_request
from .concurrent import estimate_concurrently
from .summary import summarize_results

__all__ = [
    "normalize",
    "BoundaryResolver",
    "combine_records",
    "recency_weights",
    "classify",
    "GradeEstimator",
    "parse_request",
    "estimate_concurrently",
    "summarize_results",
]
