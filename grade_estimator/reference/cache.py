"""In-memory cache wrapper for reference data providers."""

import threading
from typing import Any

from ..models import BoundaryRecord, Syllabus
from .provider import ReferenceDataProvider


class CachingProvider:
    """
    Memoizing wrapper around any ReferenceDataProvider.

    Reference data is read-only, so entries never expire; call clear() after
    the underlying dataset is replaced. NotFoundError is not cached.

    Usage:
        provider = CachingProvider(JsonReferenceProvider.from_file(path))

        syllabus = provider.get_syllabus("0610")  # loads
        syllabus = provider.get_syllabus("0610")  # served from cache
    """

    def __init__(self, provider: ReferenceDataProvider):
        """
        Initialize cache.

        Args:
            provider: Provider whose lookups are cached.
        """
        self.provider = provider
        self._syllabuses: dict[str, Syllabus] = {}
        self._boundaries: dict[tuple[str, str], tuple[BoundaryRecord, ...]] = {}
        self._subjects: tuple[Syllabus, ...] | None = None
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get_syllabus(self, subject_id: str) -> Syllabus:
        with self._lock:
            if subject_id in self._syllabuses:
                self._hits += 1
                return self._syllabuses[subject_id]
            self._misses += 1
            syllabus = self.provider.get_syllabus(subject_id)
            self._syllabuses[subject_id] = syllabus
            return syllabus

    def get_boundaries(self, subject_id: str, season: str) -> list[BoundaryRecord]:
        key = (subject_id, season)
        with self._lock:
            if key in self._boundaries:
                self._hits += 1
                return list(self._boundaries[key])
            self._misses += 1
            records = tuple(self.provider.get_boundaries(subject_id, season))
            self._boundaries[key] = records
            return list(records)

    def list_subjects(self) -> list[Syllabus]:
        with self._lock:
            if self._subjects is None:
                self._misses += 1
                self._subjects = tuple(self.provider.list_subjects())
            else:
                self._hits += 1
            return list(self._subjects)

    def clear(self) -> int:
        """
        Drop all cached lookups.

        Returns:
            Number of cached entries removed.
        """
        with self._lock:
            count = len(self._syllabuses) + len(self._boundaries) + (1 if self._subjects is not None else 0)
            self._syllabuses.clear()
            self._boundaries.clear()
            self._subjects = None
            return count

    def stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with hit/miss counts and cached entry totals.
        """
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "syllabus_entries": len(self._syllabuses),
                "boundary_entries": len(self._boundaries),
            }
