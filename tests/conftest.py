"""Shared fixtures for the talent_ranker test suite."""

from __future__ import annotations

from typing import List

import pytest

from talent_ranker.models import (
    Candidate,
    Computed,
    LocationCoordinates,
    Project,
    WorkExperience,
)


@pytest.fixture
def candidates() -> List[Candidate]:
    """A small, varied candidate set."""
    return [
        Candidate(
            id="c1",
            name="Alice Smith",
            location="London",
            location_coordinates=LocationCoordinates(lat=51.5074, lng=-0.1278),
            work_experience=[
                WorkExperience(
                    company="Acme Corp",
                    title="Frontend Engineer",
                    is_current=True,
                    responsibilities=["Built dashboards with charts"],
                    skills=["React", "TypeScript"],
                ),
            ],
            projects=[
                Project(name="Portfolio", description="Personal website", skills=["ReactJS"]),
            ],
            total_we_months=30,
        ),
        Candidate(
            id="c2",
            name="bob jones",
            location="Paris",
            location_coordinates=LocationCoordinates(lat=48.8566, lng=2.3522),
            work_experience=[
                WorkExperience(
                    company="DataWorks",
                    title="Machine Learning Engineer",
                    is_current=False,
                    responsibilities=["Trained deep learning models"],
                    skills=["Python", "TensorFlow", "Machine Learning"],
                ),
            ],
            projects=[
                Project(name="Vision", description="Image classifier", skills=["Python"]),
                Project(name="Chatbot", description="Language model demo", skills=["PyTorch"]),
            ],
            total_we_months=72,
        ),
        Candidate(
            id="c3",
            name="Carol White",
            location="",
            work_experience=[],
            projects=[],
            total_we_months=0,
        ),
        Candidate(
            id="c4",
            name="Broken Record",
            location="London",
            error="parse failed",
        ),
    ]


@pytest.fixture
def computed_candidates(candidates: List[Candidate]) -> List[Candidate]:
    """Candidates carrying a hand-written computed block."""
    blocks = {
        "c1": Computed(score=60, experience_level="1-3 years", employment_status="Employed"),
        "c2": Computed(score=80, experience_level="5+ years", employment_status="Unemployed"),
        "c3": Computed(score=0, experience_level="No Experience", employment_status="Unemployed"),
        "c4": Computed(score=0, experience_level="No Experience", employment_status="Unemployed"),
    }
    for candidate in candidates:
        candidate.computed = blocks[candidate.id]
    return candidates
