"""Grade Estimator: predicted exam grades from historical grade boundaries."""

__version__ = "1.0.0"
