"""Data types shared by the engine, reference providers and output layers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .config import (
    DEFAULT_DECAY_FACTOR,
    DEFAULT_RECENCY_CURVE,
    DEGRADE_ON_INSUFFICIENT_DATA,
    MAX_ENTRIES,
    MAX_HISTORY_YEARS,
    RECENCY_CURVES,
    SEASONS,
    THRESHOLD_GRADES,
    UNGRADED,
    WEIGHT_TOLERANCE,
)
from .errors import ConfigError, DataIntegrityError, ErrorKind, ValidationError


def parse_season(value: Any) -> str:
    """Normalize a season code (FM, MJ, ON). Raises ValidationError otherwise."""
    if isinstance(value, str) and value.strip().upper() in SEASONS:
        return value.strip().upper()
    raise ValidationError(
        f"Unknown season: {value!r}. Expected one of {', '.join(SEASONS)}",
        ErrorKind.UNKNOWN_SEASON,
        season=value,
    )


@dataclass(frozen=True)
class ComponentDefinition:
    code: str
    max_mark: float
    weight: float


@dataclass(frozen=True)
class Syllabus:
    """A subject and its weighted assessment components."""

    code: str
    name: str
    components: tuple[ComponentDefinition, ...]

    def __post_init__(self) -> None:
        if not self.components:
            raise DataIntegrityError(f"Syllabus {self.code} defines no components", subject_id=self.code)

        codes = [c.code for c in self.components]
        if len(set(codes)) != len(codes):
            raise DataIntegrityError(f"Syllabus {self.code} has duplicate component codes", subject_id=self.code)

        for component in self.components:
            if not (math.isfinite(component.max_mark) and math.isfinite(component.weight)):
                raise DataIntegrityError(
                    f"Component {self.code}/{component.code} has a non-finite max mark or weight",
                    subject_id=self.code,
                )
            if not component.max_mark > 0:
                raise DataIntegrityError(
                    f"Component {self.code}/{component.code} must have a positive max mark",
                    subject_id=self.code,
                )
            if component.weight < 0:
                raise DataIntegrityError(
                    f"Component {self.code}/{component.code} has a negative weight",
                    subject_id=self.code,
                )

        total = sum(c.weight for c in self.components)
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise DataIntegrityError(
                f"Component weights for {self.code} sum to {total}, expected 1.0",
                subject_id=self.code,
            )

    @property
    def component_codes(self) -> list[str]:
        return [c.code for c in self.components]

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "components": [
                {"code": c.code, "max_mark": c.max_mark, "weight": c.weight}
                for c in self.components
            ],
        }


def check_thresholds(thresholds: dict[str, float], context: str) -> None:
    """
    Reject a grade -> threshold mapping that cannot be used for grading.

    Labels must be known grades other than U, values must lie in [0, 1], and
    thresholds must not increase as grade rank decreases.
    """
    unknown = [grade for grade in thresholds if grade not in THRESHOLD_GRADES]
    if unknown:
        raise DataIntegrityError(f"{context}: unknown grade labels {unknown}")

    previous_grade = None
    previous_value = None
    for grade in THRESHOLD_GRADES:
        if grade not in thresholds:
            continue
        value = thresholds[grade]
        if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
            raise DataIntegrityError(f"{context}: threshold for {grade} is not a number")
        if value < 0 or value > 1:
            raise DataIntegrityError(f"{context}: threshold for {grade} is outside [0, 1]: {value}")
        if previous_value is not None and value > previous_value:
            raise DataIntegrityError(
                f"{context}: threshold for {grade} ({value}) exceeds {previous_grade} ({previous_value})"
            )
        previous_grade, previous_value = grade, value


@dataclass(frozen=True)
class BoundaryRecord:
    """Grade boundaries for one subject, season and year."""

    subject_id: str
    season: str
    year: int
    thresholds: dict[str, float]

    def __post_init__(self) -> None:
        check_thresholds(self.thresholds, f"Boundaries {self.subject_id}/{self.season}/{self.year}")


@dataclass(frozen=True)
class EffectiveBoundaryTable:
    """Boundaries combined across several years, used for classification."""

    subject_id: str
    season: str
    thresholds: dict[str, float]
    years: tuple[int, ...] = ()
    adjusted: bool = False

    @property
    def years_used(self) -> int:
        return len(self.years)

    def to_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "season": self.season,
            "thresholds": dict(self.thresholds),
            "years": list(self.years),
            "years_used": self.years_used,
            "adjusted": self.adjusted,
        }


@dataclass(frozen=True)
class CalculationEntry:
    """One subject's raw marks as submitted by a caller."""

    subject_id: str
    marks: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> CalculationEntry:
        if not isinstance(data, dict):
            raise ValidationError("Each entry must be an object with subject_id and marks")

        subject_id = data.get("subject_id")
        if not isinstance(subject_id, str) or not subject_id.strip():
            raise ValidationError("Entry is missing a subject_id")

        marks = data.get("marks", {})
        if not isinstance(marks, dict):
            raise ValidationError(f"Marks for {subject_id} must be an object of component -> mark")

        return cls(subject_id=subject_id.strip(), marks=dict(marks))


@dataclass(frozen=True)
class EstimateResult:
    subject_id: str
    normalized_mark: float
    estimated_grade: str
    years_used: int
    adjusted: bool = False

    @property
    def degraded(self) -> bool:
        """True when no historical data backed the grade."""
        return self.years_used == 0 and self.estimated_grade == UNGRADED

    def to_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "normalized_mark": self.normalized_mark,
            "estimated_grade": self.estimated_grade,
            "years_used": self.years_used,
            "adjusted": self.adjusted,
        }


@dataclass(frozen=True)
class EngineConfig:
    """
    Explicit engine settings, passed to the estimator at construction.

    Args:
        max_entries: Largest batch accepted by a single estimate call.
        max_history_years: How many of the most recent years are averaged.
        recency_curve: One of "linear", "exponential" or "uniform".
        decay_factor: Per-year multiplier for the exponential curve.
        degrade_on_insufficient_data: Grade a subject U instead of failing
            when it has no boundary history for the season.
    """

    max_entries: int = MAX_ENTRIES
    max_history_years: int = MAX_HISTORY_YEARS
    recency_curve: str = DEFAULT_RECENCY_CURVE
    decay_factor: float = DEFAULT_DECAY_FACTOR
    degrade_on_insufficient_data: bool = DEGRADE_ON_INSUFFICIENT_DATA

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ConfigError(f"max_entries must be at least 1, got {self.max_entries}")
        if not 1 <= self.max_history_years <= MAX_HISTORY_YEARS:
            raise ConfigError(
                f"max_history_years must be between 1 and {MAX_HISTORY_YEARS}, got {self.max_history_years}"
            )
        if self.recency_curve not in RECENCY_CURVES:
            raise ConfigError(
                f"Unknown recency curve: {self.recency_curve}. Available: {', '.join(RECENCY_CURVES)}"
            )
        if not 0 < self.decay_factor <= 1:
            raise ConfigError(f"decay_factor must be in (0, 1], got {self.decay_factor}")
