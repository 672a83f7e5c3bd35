"""Estimation entry point: validate a batch and grade each subject."""

from __future__ import annotations

from typing import Any, Iterable

from ..config import DEFAULT_SEASON, MIN_ENTRIES, UNGRADED
from ..errors import ErrorKind, InsufficientDataError, NotFoundError, ValidationError
from ..models import CalculationEntry, EngineConfig, EstimateResult, Syllabus, parse_season
from ..reference import ReferenceDataProvider
from .aggregator import check_marks, normalize
from .classifier import classify
from .resolver import BoundaryResolver


def parse_request(payload: Any) -> tuple[list[CalculationEntry], str]:
    """
    Parse an inbound request payload.

    Args:
        payload: {"entries": [{"subject_id": ..., "marks": {...}}], "season": "MJ"}

    Returns:
        (entries, season). Season defaults to MJ when absent or null.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    raw_entries = payload.get("entries")
    if not isinstance(raw_entries, list):
        raise ValidationError("entries array is required")

    entries = [CalculationEntry.from_dict(raw) for raw in raw_entries]
    season = payload.get("season")
    season = parse_season(DEFAULT_SEASON if season is None else season)
    return entries, season


class GradeEstimator:
    """
    Predicts a letter grade per subject from raw component marks.

    Holds no per-call state, so one instance can serve concurrent callers.

    Usage:
        estimator = GradeEstimator(JsonReferenceProvider.from_file())
        results = estimator.estimate(entries, "MJ")
    """

    def __init__(self, provider: ReferenceDataProvider, config: EngineConfig | None = None):
        self.provider = provider
        self.config = config or EngineConfig()
        self.resolver = BoundaryResolver(provider, self.config)

    def estimate(self, entries: Iterable[CalculationEntry | dict], season: str = DEFAULT_SEASON) -> list[EstimateResult]:
        """
        Estimate grades for a batch of entries.

        Returns one result per entry, in input order.

        Raises:
            ValidationError: Malformed batch, unknown subject or bad marks.
                Every offending entry is listed in `issues`.
            InsufficientDataError: Only when degradation is disabled.
            DataIntegrityError: Reference data is corrupt.
        """
        season = parse_season(season)
        prepared = self.prepare(entries)
        return [self.estimate_entry(entry, mark, season) for entry, mark in prepared]

    def prepare(self, entries: Iterable[CalculationEntry | dict]) -> list[tuple[CalculationEntry, float]]:
        """
        Validate a batch and compute each entry's normalized mark.

        Returns:
            List of (entry, normalized_mark) in input order.
        """
        if entries is None or isinstance(entries, (str, bytes, dict)):
            raise ValidationError("entries must be a list")
        batch = [e if isinstance(e, CalculationEntry) else CalculationEntry.from_dict(e) for e in entries]

        if len(batch) < MIN_ENTRIES:
            raise ValidationError("At least one subject entry is required", ErrorKind.EMPTY_BATCH)
        if len(batch) > self.config.max_entries:
            raise ValidationError(
                f"Maximum {self.config.max_entries} subjects per estimate, got {len(batch)}",
                ErrorKind.BATCH_TOO_LARGE,
                count=len(batch),
                limit=self.config.max_entries,
            )

        issues = []
        syllabuses: list[Syllabus | None] = []
        for index, entry in enumerate(batch):
            try:
                syllabus = self.provider.get_syllabus(entry.subject_id)
            except NotFoundError:
                syllabuses.append(None)
                issues.append({
                    "index": index,
                    "subject_id": entry.subject_id,
                    "kind": ErrorKind.UNKNOWN_SUBJECT.value,
                    "message": f"unknown subject {entry.subject_id}",
                })
                continue

            syllabuses.append(syllabus)
            for issue in check_marks(syllabus, entry.marks):
                issues.append({"index": index, "subject_id": entry.subject_id, **issue})

        if issues:
            raise _batch_error(issues)

        return [(entry, normalize(syllabus, entry.marks)) for entry, syllabus in zip(batch, syllabuses)]

    def estimate_entry(self, entry: CalculationEntry, normalized_mark: float, season: str) -> EstimateResult:
        """Grade one validated entry against its subject's boundary history."""
        try:
            table = self.resolver.resolve(entry.subject_id, season)
        except InsufficientDataError:
            if not self.config.degrade_on_insufficient_data:
                raise
            return EstimateResult(
                subject_id=entry.subject_id,
                normalized_mark=normalized_mark,
                estimated_grade=UNGRADED,
                years_used=0,
                adjusted=False,
            )

        return EstimateResult(
            subject_id=entry.subject_id,
            normalized_mark=normalized_mark,
            estimated_grade=classify(normalized_mark, table),
            years_used=table.years_used,
            adjusted=table.adjusted,
        )


def _batch_error(issues: list[dict]) -> ValidationError:
    kinds = {issue["kind"] for issue in issues}
    kind = ErrorKind(kinds.pop()) if len(kinds) == 1 else ErrorKind.INVALID_ENTRIES
    entries = sorted({issue["index"] for issue in issues})
    return ValidationError(
        f"{len(entries)} invalid entr{'y' if len(entries) == 1 else 'ies'}: "
        + "; ".join(f"#{i['index']} {i['subject_id']}: {i['message']}" for i in issues),
        kind,
        issues=issues,
    )
