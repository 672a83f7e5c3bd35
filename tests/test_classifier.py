"""Tests for grade classification."""

import random

import pytest

from grade_estimator.config import GRADE_ORDER, THRESHOLD_GRADES
from grade_estimator.engine import classify
from grade_estimator.models import EffectiveBoundaryTable


@pytest.fixture
def top_table():
    return EffectiveBoundaryTable(
        subject_id="SCI",
        season="MJ",
        thresholds={"A*": 0.90, "A": 0.80, "B": 0.70},
        years=(2024,),
    )


class TestClassify:
    """Tests for classify function."""

    def test_exact_boundary_meets_grade(self, top_table):
        """A mark exactly on the A threshold is an A, not a B."""
        assert classify(0.80, top_table) == "A"

    def test_just_below_boundary(self, top_table):
        """Just under A falls to B."""
        assert classify(0.7999, top_table) == "B"

    def test_top_grade(self, top_table):
        """Marks at or above A* get A*."""
        assert classify(0.95, top_table) == "A*"
        assert classify(1.0, top_table) == "A*"

    def test_below_all_thresholds_is_u(self, top_table):
        """No threshold met means U."""
        assert classify(0.5, top_table) == "U"
        assert classify(0.0, top_table) == "U"

    def test_accepts_plain_mapping(self):
        """A grade -> threshold dict can be classified directly."""
        assert classify(0.65, {"A": 0.8, "C": 0.6}) == "C"

    def test_sparse_table_skips_missing_grades(self):
        """Grades absent from the table are skipped."""
        table = EffectiveBoundaryTable("SCI", "MJ", {"A*": 0.9, "E": 0.3})
        assert classify(0.5, table) == "E"

    def test_empty_table_is_u(self):
        """With no thresholds every mark is U."""
        assert classify(0.99, EffectiveBoundaryTable("SCI", "MJ", {})) == "U"

    @pytest.mark.parametrize("seed", range(30))
    def test_total_over_marks_and_tables(self, seed):
        """Every mark in [0, 1] maps to exactly one known grade."""
        rng = random.Random(seed)
        grades = [g for g in THRESHOLD_GRADES if rng.random() < 0.6]
        values = sorted((rng.random() for _ in grades), reverse=True)
        table = EffectiveBoundaryTable("SCI", "MJ", dict(zip(grades, values)))

        previous_rank = -1
        for step in range(101):
            mark = step / 100
            grade = classify(mark, table)
            assert grade in GRADE_ORDER
            # Higher marks never earn a lower grade.
            rank = len(GRADE_ORDER) - GRADE_ORDER.index(grade)
            assert rank >= previous_rank
            previous_rank = rank
