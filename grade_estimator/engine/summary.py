"""Grade distribution summary for a set of estimate results."""

from ..config import GRADE_ORDER
from ..models import EstimateResult


def summarize_results(results: list[EstimateResult]) -> dict:
    """
    Aggregate estimate results into a grade distribution.

    Args:
        results: Estimate results, typically one batch.

    Returns:
        Dict with subject_count, grade_counts (every grade, in grade order),
        degraded_count, adjusted_count, mean_normalized_mark, best_grade
    """
    grade_counts = {grade: 0 for grade in GRADE_ORDER}
    degraded_count = 0
    adjusted_count = 0

    for result in results:
        grade_counts[result.estimated_grade] += 1
        if result.degraded:
            degraded_count += 1
        if result.adjusted:
            adjusted_count += 1

    mean_mark = None
    if results:
        mean_mark = round(sum(r.normalized_mark for r in results) / len(results), 4)

    best_grade = next((grade for grade in GRADE_ORDER if grade_counts[grade]), None)

    return {
        "subject_count": len(results),
        "grade_counts": grade_counts,
        "degraded_count": degraded_count,
        "adjusted_count": adjusted_count,
        "mean_normalized_mark": mean_mark,
        "best_grade": best_grade,
    }
