"""Combine historical boundary records into one effective boundary table."""

from ..config import THRESHOLD_GRADES
from ..errors import DataIntegrityError, InsufficientDataError
from ..models import BoundaryRecord, EffectiveBoundaryTable, EngineConfig
from ..reference import ReferenceDataProvider

# Averaged thresholds are rounded so that identical inputs never look like a
# monotonicity violation through float noise.
THRESHOLD_PRECISION = 10


def recency_weights(count: int, config: EngineConfig) -> list[float]:
    """
    Weights for `count` years ordered newest first.

    rank 0 is the most recent available year; gaps between years do not
    change the rank of older years.
    """
    if config.recency_curve == "linear":
        return [float(config.max_history_years - rank) for rank in range(count)]
    if config.recency_curve == "exponential":
        return [config.decay_factor ** rank for rank in range(count)]
    return [1.0] * count


def combine_records(
    subject_id: str,
    season: str,
    records: list[BoundaryRecord],
    config: EngineConfig,
) -> EffectiveBoundaryTable:
    """
    Weighted-average the most recent records into an effective table.

    Grades missing from a year are left out of that grade's average. If the
    averages are not monotonic, lower grades are clamped down to the grade
    above and the table is flagged as adjusted.

    Raises:
        InsufficientDataError: No records at all.
        DataIntegrityError: An averaged threshold falls outside [0, 1].
    """
    recent = sorted(records, key=lambda r: r.year, reverse=True)[: config.max_history_years]
    if not recent:
        raise InsufficientDataError(
            f"No grade boundary history for {subject_id} in season {season}",
            subject_id=subject_id,
            season=season,
        )

    weights = recency_weights(len(recent), config)

    averaged = {}
    for grade in THRESHOLD_GRADES:
        weighted_sum = 0.0
        weight_total = 0.0
        for record, weight in zip(recent, weights):
            if grade in record.thresholds:
                weighted_sum += record.thresholds[grade] * weight
                weight_total += weight
        if weight_total > 0:
            averaged[grade] = round(weighted_sum / weight_total, THRESHOLD_PRECISION)

    for grade, value in averaged.items():
        if value < 0 or value > 1:
            raise DataIntegrityError(
                f"Effective threshold for {subject_id}/{season} grade {grade} is outside [0, 1]: {value}",
                subject_id=subject_id,
                season=season,
            )

    thresholds, adjusted = enforce_monotonic(averaged)

    return EffectiveBoundaryTable(
        subject_id=subject_id,
        season=season,
        thresholds=thresholds,
        years=tuple(r.year for r in recent),
        adjusted=adjusted,
    )


def enforce_monotonic(thresholds: dict[str, float]) -> tuple[dict[str, float], bool]:
    """Clamp each grade to at most the grade above it. Returns (table, adjusted)."""
    repaired = {}
    adjusted = False
    ceiling = None

    for grade in THRESHOLD_GRADES:
        if grade not in thresholds:
            continue
        value = thresholds[grade]
        if ceiling is not None and value > ceiling:
            value = ceiling
            adjusted = True
        repaired[grade] = value
        ceiling = value

    return repaired, adjusted


class BoundaryResolver:
    """Resolves effective boundary tables from a reference provider."""

    def __init__(self, provider: ReferenceDataProvider, config: EngineConfig | None = None):
        self.provider = provider
        self.config = config or EngineConfig()

    def resolve(self, subject_id: str, season: str) -> EffectiveBoundaryTable:
        records = self.provider.get_boundaries(subject_id, season)
        return combine_records(subject_id, season, records, self.config)
