"""Component mark aggregation."""

import math

from ..errors import ErrorKind, ValidationError
from ..models import Syllabus


def normalize(syllabus: Syllabus, component_marks: dict) -> float:
    """
    Combine raw component marks into one weighted mark in [0, 1].

    Every component the syllabus defines must have a mark, no unknown codes
    are allowed, and each mark must lie in [0, max_mark]. All problems found
    are reported together.

    Args:
        syllabus: Subject definition with component maxima and weights.
        component_marks: Mapping of component code to raw mark.

    Returns:
        Sum of (mark / max_mark) * weight, clamped to [0, 1].

    Raises:
        ValidationError: With an issue per offending component.
    """
    issues = check_marks(syllabus, component_marks)
    if issues:
        raise ValidationError(
            f"Invalid marks for {syllabus.code}: " + "; ".join(i["message"] for i in issues),
            ErrorKind(issues[0]["kind"]),
            issues=issues,
            subject_id=syllabus.code,
        )

    total = 0.0
    for component in syllabus.components:
        total += (component_marks[component.code] / component.max_mark) * component.weight

    return max(0.0, min(1.0, total))


def check_marks(syllabus: Syllabus, component_marks: dict) -> list[dict]:
    """Return a list of issues with the supplied marks, empty when valid."""
    issues = []
    defined = {c.code: c for c in syllabus.components}

    for code in syllabus.component_codes:
        if code not in component_marks:
            issues.append(_issue(ErrorKind.MISSING_COMPONENT, code, f"missing mark for component {code}"))

    for code, mark in component_marks.items():
        component = defined.get(code)
        if component is None:
            issues.append(_issue(ErrorKind.UNKNOWN_COMPONENT, code, f"unknown component {code}"))
            continue

        if not _is_number(mark):
            issues.append(_issue(ErrorKind.MARK_OUT_OF_RANGE, code, f"mark for {code} is not a number: {mark!r}"))
        elif mark < 0 or mark > component.max_mark:
            issues.append(
                _issue(
                    ErrorKind.MARK_OUT_OF_RANGE,
                    code,
                    f"mark {mark} for {code} is outside 0-{component.max_mark:g}",
                )
            )

    return issues


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _issue(kind: ErrorKind, component: str, message: str) -> dict:
    return {"kind": kind.value, "component": component, "message": message}
