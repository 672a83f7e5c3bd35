"""CSV export for estimate results."""

import csv
from pathlib import Path

from ..config import RESULT_DECIMALS
from ..models import EstimateResult

FIELDNAMES = [
    "position",
    "subject_id",
    "season",
    "normalized_mark",
    "estimated_grade",
    "years_used",
    "adjusted",
    "degraded",
]


def export_to_csv(results: list[EstimateResult], output_path: str, season: str = "") -> None:
    """
    Export estimate results to CSV.

    Args:
        results: List of estimate results, in request order
        output_path: Path to output CSV file
        season: Season code written on every row
    """
    if not results:
        return

    rows = [_result_to_row(position, result, season) for position, result in enumerate(results, start=1)]

    path = Path(output_path)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)


def _result_to_row(position: int, result: EstimateResult, season: str) -> dict:
    """Convert an estimate result to a CSV row."""
    return {
        "position": position,
        "subject_id": result.subject_id,
        "season": season,
        "normalized_mark": round(result.normalized_mark, RESULT_DECIMALS),
        "estimated_grade": result.estimated_grade,
        "years_used": result.years_used,
        "adjusted": "Yes" if result.adjusted else "No",
        "degraded": "Yes" if result.degraded else "No",
    }
