"""Grade classification against an effective boundary table."""

from ..config import THRESHOLD_GRADES, UNGRADED
from ..models import EffectiveBoundaryTable


def classify(normalized_mark: float, table: EffectiveBoundaryTable | dict[str, float]) -> str:
    """
    Get the grade for a normalized mark.

    Scans from A* downward and returns the first grade whose threshold is at
    or below the mark. A mark exactly on a boundary earns that grade.
    Returns U when no threshold is met.
    """
    thresholds = table.thresholds if isinstance(table, EffectiveBoundaryTable) else table

    for grade in THRESHOLD_GRADES:
        threshold = thresholds.get(grade)
        if threshold is not None and normalized_mark >= threshold:
            return grade
    return UNGRADED
