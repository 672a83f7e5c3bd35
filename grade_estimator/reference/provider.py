"""Reference data providers: syllabuses and historical grade boundaries."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from ..config import DEFAULT_DATA_PATH
from ..errors import DataIntegrityError, NotFoundError, ValidationError
from ..models import BoundaryRecord, ComponentDefinition, Syllabus, parse_season


class ReferenceDataProvider(Protocol):
    """
    Read-only source of syllabuses and boundary history.

    Both lookups raise NotFoundError for an unknown subject. A known subject
    with no data for a season returns an empty list from get_boundaries.
    """

    def get_syllabus(self, subject_id: str) -> Syllabus:
        ...

    def get_boundaries(self, subject_id: str, season: str) -> list[BoundaryRecord]:
        ...

    def list_subjects(self) -> list[Syllabus]:
        ...


class JsonReferenceProvider:
    """
    Provider backed by a JSON dataset.

    Expected shape:
        {
            "subjects": [
                {"code": "0610", "name": "Biology",
                 "components": [{"code": "P2", "max_mark": 40, "weight": 0.3}, ...]}
            ],
            "boundaries": [
                {"subject_id": "0610", "season": "MJ", "year": 2024,
                 "thresholds": {"A*": 0.8, "A": 0.7, ...}}
            ]
        }

    The whole file is validated on load; corrupt data raises DataIntegrityError.
    """

    def __init__(self, data: dict):
        self._syllabuses: dict[str, Syllabus] = {}
        self._boundaries: dict[tuple[str, str], list[BoundaryRecord]] = {}
        self._load(data)

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_DATA_PATH) -> JsonReferenceProvider:
        """Load a dataset from a JSON file."""
        data_path = Path(path)
        try:
            data = json.loads(data_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataIntegrityError(f"Reference data {data_path} is not valid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DataIntegrityError(f"Reference data {data_path} could not be read: {e}") from e
        return cls(data)

    def _load(self, data: dict) -> None:
        if not isinstance(data, dict):
            raise DataIntegrityError("Reference data must be a JSON object")

        for raw in data.get("subjects", []):
            try:
                syllabus = Syllabus(
                    code=str(raw["code"]),
                    name=raw.get("name", str(raw["code"])),
                    components=tuple(
                        ComponentDefinition(
                            code=str(c["code"]),
                            max_mark=float(c["max_mark"]),
                            weight=float(c["weight"]),
                        )
                        for c in raw["components"]
                    ),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise DataIntegrityError(f"Malformed subject definition: {raw!r}") from e

            if syllabus.code in self._syllabuses:
                raise DataIntegrityError(f"Duplicate subject: {syllabus.code}")
            self._syllabuses[syllabus.code] = syllabus

        for raw in data.get("boundaries", []):
            try:
                record = BoundaryRecord(
                    subject_id=str(raw["subject_id"]),
                    season=parse_season(raw["season"]),
                    year=int(raw["year"]),
                    thresholds=dict(raw["thresholds"]),
                )
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                raise DataIntegrityError(f"Malformed boundary record: {raw!r}") from e

            if record.subject_id not in self._syllabuses:
                raise DataIntegrityError(f"Boundaries reference unknown subject: {record.subject_id}")

            records = self._boundaries.setdefault((record.subject_id, record.season), [])
            if any(r.year == record.year for r in records):
                raise DataIntegrityError(
                    f"Duplicate boundaries for {record.subject_id}/{record.season}/{record.year}"
                )
            records.append(record)

        for records in self._boundaries.values():
            records.sort(key=lambda r: r.year, reverse=True)

    def get_syllabus(self, subject_id: str) -> Syllabus:
        try:
            return self._syllabuses[subject_id]
        except KeyError:
            raise NotFoundError(f"Unknown subject: {subject_id}", subject_id=subject_id) from None

    def get_boundaries(self, subject_id: str, season: str) -> list[BoundaryRecord]:
        """Return boundary records for the subject and season, newest first."""
        if subject_id not in self._syllabuses:
            raise NotFoundError(f"Unknown subject: {subject_id}", subject_id=subject_id)
        return list(self._boundaries.get((subject_id, season), []))

    def list_subjects(self) -> list[Syllabus]:
        return sorted(self._syllabuses.values(), key=lambda s: s.code)
