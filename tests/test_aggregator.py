"""Tests for component mark aggregation."""

import pytest

from grade_estimator.engine import normalize
from grade_estimator.errors import ErrorKind, ValidationError
from grade_estimator.models import ComponentDefinition, Syllabus


class TestNormalize:
    """Tests for normalize function."""

    def test_weighted_example(self, two_paper_syllabus):
        """32/40 at 40% plus 54/60 at 60% is 0.86."""
        assert normalize(two_paper_syllabus, {"P1": 32, "P2": 54}) == pytest.approx(0.86)

    def test_full_marks_is_one(self, two_paper_syllabus):
        """Maximum marks normalize to 1.0."""
        assert normalize(two_paper_syllabus, {"P1": 40, "P2": 60}) == pytest.approx(1.0)

    def test_zero_marks_is_zero(self, two_paper_syllabus):
        """Zero marks normalize to 0.0."""
        assert normalize(two_paper_syllabus, {"P1": 0, "P2": 0}) == 0.0

    def test_fractional_marks_accepted(self, two_paper_syllabus):
        """Half marks are valid input."""
        assert normalize(two_paper_syllabus, {"P1": 20.5, "P2": 30}) == pytest.approx(0.505)

    def test_result_clamped_to_one(self):
        """Weights summing slightly over 1 cannot push the mark past 1."""
        syllabus = Syllabus(
            code="X",
            name="X",
            components=(
                ComponentDefinition("P1", max_mark=10, weight=0.5),
                ComponentDefinition("P2", max_mark=10, weight=0.5000001),
            ),
        )
        assert normalize(syllabus, {"P1": 10, "P2": 10}) == 1.0


class TestNormalizeValidation:
    """Tests for mark validation in normalize."""

    def test_missing_component(self, two_paper_syllabus):
        """A defined component without a mark is rejected, not zero-filled."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": 32})
        assert exc.value.kind == ErrorKind.MISSING_COMPONENT
        assert exc.value.issues[0]["component"] == "P2"

    def test_unknown_component(self, two_paper_syllabus):
        """A mark for an undefined component is rejected."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": 32, "P2": 54, "P9": 10})
        assert exc.value.kind == ErrorKind.UNKNOWN_COMPONENT

    def test_negative_mark(self, two_paper_syllabus):
        """Negative marks are out of range."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": -1, "P2": 54})
        assert exc.value.kind == ErrorKind.MARK_OUT_OF_RANGE

    def test_mark_above_maximum(self, two_paper_syllabus):
        """Marks above the component maximum are not clamped."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": 41, "P2": 54})
        assert exc.value.kind == ErrorKind.MARK_OUT_OF_RANGE

    def test_mark_at_maximum_allowed(self, two_paper_syllabus):
        """A mark equal to the maximum is valid."""
        assert normalize(two_paper_syllabus, {"P1": 40, "P2": 0}) == pytest.approx(0.4)

    @pytest.mark.parametrize("bad", ["32", None, True, float("nan"), float("inf")])
    def test_non_numeric_mark(self, two_paper_syllabus, bad):
        """Strings, booleans and non-finite values are rejected."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": bad, "P2": 54})
        assert exc.value.kind == ErrorKind.MARK_OUT_OF_RANGE

    def test_all_issues_reported(self, two_paper_syllabus):
        """Several problems in one entry are reported together."""
        with pytest.raises(ValidationError) as exc:
            normalize(two_paper_syllabus, {"P1": 99, "P3": 1})
        kinds = {issue["kind"] for issue in exc.value.issues}
        assert kinds == {"missing_component", "unknown_component", "mark_out_of_range"}
