"""Tests for concurrent estimation."""

import threading
import time

import pytest

from grade_estimator.engine import estimate_concurrently
from grade_estimator.errors import ErrorKind, ValidationError
from grade_estimator.models import CalculationEntry

BATCH = [
    CalculationEntry("SCI", {"P1": 32, "P2": 54}),
    CalculationEntry("MATH", {"P1": 60, "P2": 60}),
    CalculationEntry("ART", {"C1": 40}),
    CalculationEntry("SCI", {"P1": 10, "P2": 10}),
]


class TestEstimateConcurrently:
    """Tests for estimate_concurrently function."""

    @pytest.mark.asyncio
    async def test_matches_sequential(self, estimator):
        """Concurrent results equal the sequential path."""
        results = await estimate_concurrently(estimator, BATCH, "MJ", concurrency=4)
        assert results == estimator.estimate(BATCH, "MJ")

    @pytest.mark.asyncio
    async def test_preserves_order(self, estimator, monkeypatch):
        """Results come back in input order even when later entries finish first."""
        original = estimator.estimate_entry
        delays = {"SCI": 0.05, "MATH": 0.0, "ART": 0.02}

        def slow_entry(entry, mark, season):
            time.sleep(delays[entry.subject_id])
            return original(entry, mark, season)

        monkeypatch.setattr(estimator, "estimate_entry", slow_entry)

        results = await estimate_concurrently(estimator, BATCH, "MJ", concurrency=4)
        assert [r.subject_id for r in results] == ["SCI", "MATH", "ART", "SCI"]

    @pytest.mark.asyncio
    async def test_respects_concurrency(self, estimator, monkeypatch):
        """No more than `concurrency` entries run at once."""
        original = estimator.estimate_entry
        lock = threading.Lock()
        running = 0
        max_running = 0

        def tracking_entry(entry, mark, season):
            nonlocal running, max_running
            with lock:
                running += 1
                max_running = max(max_running, running)
            time.sleep(0.05)
            with lock:
                running -= 1
            return original(entry, mark, season)

        monkeypatch.setattr(estimator, "estimate_entry", tracking_entry)

        await estimate_concurrently(estimator, BATCH * 2, "MJ", concurrency=2)
        assert max_running <= 2

    @pytest.mark.asyncio
    async def test_validation_before_work(self, estimator, monkeypatch):
        """A malformed batch fails before any entry is evaluated."""
        calls = []
        monkeypatch.setattr(estimator, "estimate_entry", lambda *args: calls.append(args))

        batch = [BATCH[0], CalculationEntry("SCI", {"P1": 99, "P2": 1})]
        with pytest.raises(ValidationError) as exc:
            await estimate_concurrently(estimator, batch, "MJ")

        assert exc.value.kind == ErrorKind.MARK_OUT_OF_RANGE
        assert calls == []

    @pytest.mark.asyncio
    async def test_calls_progress_callback(self, estimator):
        """Progress callback fires once per entry."""
        seen = []
        await estimate_concurrently(estimator, BATCH, "MJ", on_progress=seen.append)
        assert len(seen) == len(BATCH)
        assert sorted(r.subject_id for r in seen) == sorted(e.subject_id for e in BATCH)

    @pytest.mark.asyncio
    async def test_degraded_entries(self, estimator):
        """Missing history degrades entries on the concurrent path too."""
        results = await estimate_concurrently(estimator, BATCH, "FM")
        assert all(r.estimated_grade == "U" and r.years_used == 0 for r in results)
