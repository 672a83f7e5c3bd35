"""Error types raised by the estimation engine and reference providers."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable error kinds surfaced to callers."""

    EMPTY_BATCH = "empty_batch"
    BATCH_TOO_LARGE = "batch_too_large"
    UNKNOWN_SUBJECT = "unknown_subject"
    UNKNOWN_SEASON = "unknown_season"
    MISSING_COMPONENT = "missing_component"
    UNKNOWN_COMPONENT = "unknown_component"
    MARK_OUT_OF_RANGE = "mark_out_of_range"
    MALFORMED_REQUEST = "malformed_request"
    INVALID_ENTRIES = "invalid_entries"
    INSUFFICIENT_DATA = "insufficient_data"
    DATA_INTEGRITY = "data_integrity"
    NOT_FOUND = "not_found"
    INVALID_CONFIG = "invalid_config"


class EstimatorError(Exception):
    """Base class for all engine errors."""

    default_kind = ErrorKind.MALFORMED_REQUEST

    def __init__(self, message: str, kind: ErrorKind | None = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.details = details

    def to_dict(self) -> dict:
        """Serialize for transport layers."""
        data = {"kind": self.kind.value, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


class ValidationError(EstimatorError):
    """Malformed request: batch shape, subject, component or mark problems."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.MALFORMED_REQUEST,
        issues: list[dict] | None = None,
        **details: Any,
    ):
        super().__init__(message, kind, **details)
        self.issues = issues or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.issues:
            data["issues"] = self.issues
        return data


class InsufficientDataError(EstimatorError):
    """No historical boundary data at all for a subject/season."""

    default_kind = ErrorKind.INSUFFICIENT_DATA


class DataIntegrityError(EstimatorError):
    """Reference data is corrupt beyond automatic repair."""

    default_kind = ErrorKind.DATA_INTEGRITY


class NotFoundError(EstimatorError):
    """A reference provider does not know the requested subject."""

    default_kind = ErrorKind.NOT_FOUND


class ConfigError(EstimatorError):
    """Engine configuration values are out of range."""

    default_kind = ErrorKind.INVALID_CONFIG
