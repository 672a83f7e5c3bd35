"""Pytest configuration and fixtures."""

import pytest

from grade_estimator.engine import GradeEstimator
from grade_estimator.models import ComponentDefinition, Syllabus
from grade_estimator.reference import JsonReferenceProvider

FULL_LADDER = {"A*": 0.9, "A": 0.8, "B": 0.7, "C": 0.6, "D": 0.5, "E": 0.4, "F": 0.3, "G": 0.2}


def make_dataset() -> dict:
    """Small dataset: SCI has MJ/ON history, MATH has MJ only, ART has none."""
    return {
        "subjects": [
            {
                "code": "SCI",
                "name": "Science",
                "components": [
                    {"code": "P1", "max_mark": 40, "weight": 0.4},
                    {"code": "P2", "max_mark": 60, "weight": 0.6},
                ],
            },
            {
                "code": "MATH",
                "name": "Mathematics",
                "components": [
                    {"code": "P1", "max_mark": 100, "weight": 0.5},
                    {"code": "P2", "max_mark": 100, "weight": 0.5},
                ],
            },
            {
                "code": "ART",
                "name": "Art and Design",
                "components": [{"code": "C1", "max_mark": 50, "weight": 1.0}],
            },
        ],
        "boundaries": [
            {"subject_id": "SCI", "season": "MJ", "year": 2024, "thresholds": dict(FULL_LADDER)},
            {"subject_id": "SCI", "season": "MJ", "year": 2023, "thresholds": dict(FULL_LADDER)},
            {"subject_id": "SCI", "season": "ON", "year": 2022,
             "thresholds": {"A*": 0.85, "A": 0.75, "B": 0.65, "C": 0.55}},
            {"subject_id": "MATH", "season": "MJ", "year": 2023,
             "thresholds": {"A": 0.6, "B": 0.5, "C": 0.4}},
            {"subject_id": "MATH", "season": "MJ", "year": 2024,
             "thresholds": {"A": 0.7, "B": 0.6, "C": 0.5}},
        ],
    }


@pytest.fixture
def dataset():
    """Return the raw test dataset."""
    return make_dataset()


@pytest.fixture
def provider(dataset):
    """Provider over the test dataset."""
    return JsonReferenceProvider(dataset)


@pytest.fixture
def estimator(provider):
    """Estimator with default engine config."""
    return GradeEstimator(provider)


@pytest.fixture
def two_paper_syllabus():
    """P1 worth 40% out of 40, P2 worth 60% out of 60."""
    return Syllabus(
        code="SCI",
        name="Science",
        components=(
            ComponentDefinition("P1", max_mark=40, weight=0.4),
            ComponentDefinition("P2", max_mark=60, weight=0.6),
        ),
    )
