"""Async runner for evaluating batch entries on worker threads."""

import asyncio
from typing import Callable, Iterable

from ..config import DEFAULT_CONCURRENCY, DEFAULT_SEASON
from ..models import CalculationEntry, EstimateResult, parse_season
from .orchestrator import GradeEstimator


async def estimate_concurrently(
    estimator: GradeEstimator,
    entries: Iterable[CalculationEntry | dict],
    season: str = DEFAULT_SEASON,
    concurrency: int = DEFAULT_CONCURRENCY,
    on_progress: Callable[[EstimateResult], None] | None = None,
) -> list[EstimateResult]:
    """
    Run per-entry estimation concurrently with a concurrency limit.

    The whole batch is validated before any worker starts, so a malformed
    request fails exactly as GradeEstimator.estimate would.

    Args:
        estimator: Estimator holding the provider and engine config.
        entries: Calculation entries or raw entry dicts.
        season: Exam season code.
        concurrency: Maximum number of entries evaluated at once.
        on_progress: Optional callback(result) called after each entry.

    Returns:
        List of results in the same order as input entries.
    """
    season = parse_season(season)
    prepared = estimator.prepare(entries)
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def estimate_with_limit(index: int, entry: CalculationEntry, mark: float) -> tuple[int, EstimateResult]:
        async with semaphore:
            result = await asyncio.to_thread(estimator.estimate_entry, entry, mark, season)
            if on_progress:
                on_progress(result)
            return (index, result)

    tasks = [
        estimate_with_limit(idx, entry, mark)
        for idx, (entry, mark) in enumerate(prepared)
    ]

    completed = await asyncio.gather(*tasks)

    # Sort by original index and return results
    completed_sorted = sorted(completed, key=lambda x: x[0])
    return [result for _, result in completed_sorted]
