"""Tests for job-requirement matching and the total candidate score."""

from __future__ import annotations

from typing import List

import pytest

from talent_ranker.models import Candidate, Project, WorkExperience
from talent_ranker.scorer import (
    categorize_experience,
    compute_candidate,
    determine_employment_status,
    job_requirement_match_score,
    process_job_requirement,
    process_text,
    score_breakdown,
    total_candidate_score,
)


def test_process_text_drops_stop_words_and_short_tokens() -> None:
    assert process_text("The Python, and SQL expert!") == ["python", "sql", "expert"]


def test_process_text_removes_punctuation_inside_words() -> None:
    assert process_text("Node.js") == ["nodejs"]


def test_process_job_requirement_keeps_longer_terms() -> None:
    assert process_job_requirement("The Python, and SQL expert!") == ["python", "expert"]
    assert process_job_requirement("") == []


def test_match_score_without_terms() -> None:
    candidate = Candidate(work_experience=[WorkExperience(skills=["Python"])])
    assert job_requirement_match_score(candidate, "") == 0.0
    assert job_requirement_match_score(candidate, "the and for ML") == 0.0


def test_match_score_exact_and_partial() -> None:
    candidate = Candidate(
        work_experience=[WorkExperience(title="Developer", skills=["Python"])],
    )
    # python: exact bonus 1.5; developer: tf 1/2 * idf 1 * 0.5
    score = job_requirement_match_score(candidate, "Python developer")
    assert score == pytest.approx((1.5 + 0.25) / 3.0)


def test_match_score_ignores_responsibility_words() -> None:
    candidate = Candidate(
        work_experience=[
            WorkExperience(title="Dev", responsibilities=["kubernetes clusters"]),
        ],
    )
    assert job_requirement_match_score(candidate, "kubernetes") == 0.0


def test_responsibilities_do_not_dilute_partial_match() -> None:
    candidate = Candidate(
        work_experience=[
            WorkExperience(
                title="Developer",
                skills=["Python"],
                responsibilities=["Maintained services and pipelines daily"],
            ),
        ],
    )
    # tf of "developer" is 1/2 over skills + title only
    score = job_requirement_match_score(candidate, "Python developer")
    assert score == pytest.approx((1.5 + 0.25) / 3.0)


def test_match_score_uses_substring_of_skill() -> None:
    candidate = Candidate(projects=[Project(skills=["TensorFlow 2"])])
    assert job_requirement_match_score(candidate, "tensorflow") == 1.0


def test_match_score_is_capped() -> None:
    candidate = Candidate(projects=[Project(skills=["Python"])])
    assert job_requirement_match_score(candidate, "python python python") == 1.0


def test_exact_match_example_score() -> None:
    candidate = Candidate(
        work_experience=[WorkExperience(skills=["Python"])],
        projects=[Project(name="One"), Project(name="Two")],
        total_we_months=24,
    )
    breakdown = score_breakdown(candidate, "Python")
    assert breakdown.skill_score == 40
    assert breakdown.experience_score == 12
    assert breakdown.project_score == 15
    assert breakdown.total == 67


def test_total_score_bounds() -> None:
    assert total_candidate_score(Candidate(), "") == 0
    assert total_candidate_score(Candidate(total_we_months=-5), "anything at all") == 0

    maxed = Candidate(
        work_experience=[WorkExperience(skills=["Python", "Kubernetes"])],
        projects=[Project() for _ in range(10)],
        total_we_months=600,
    )
    assert total_candidate_score(maxed, "Python Kubernetes") == 100


def test_total_score_rounds_half_up() -> None:
    assert total_candidate_score(Candidate(total_we_months=1), "") == 1
    assert total_candidate_score(Candidate(total_we_months=5), "") == 3


@pytest.mark.parametrize(
    "months,level",
    [
        (0, "No Experience"),
        (1, "Less than 1 year"),
        (11, "Less than 1 year"),
        (12, "1-3 years"),
        (35, "1-3 years"),
        (36, "3-5 years"),
        (59, "3-5 years"),
        (60, "5+ years"),
        (240, "5+ years"),
    ],
)
def test_categorize_experience(months: int, level: str) -> None:
    assert categorize_experience(months) == level


def test_employment_status() -> None:
    assert determine_employment_status([]) == "Unemployed"
    assert determine_employment_status([WorkExperience(is_current=False)]) == "Unemployed"
    assert determine_employment_status(
        [WorkExperience(is_current=False), WorkExperience(is_current=True)]
    ) == "Employed"


def test_compute_candidate_does_not_mutate(candidates: List[Candidate]) -> None:
    original = candidates[0]
    scored = compute_candidate(original, "React developer")
    assert original.computed is None
    assert scored.computed.experience_level == "1-3 years"
    assert scored.computed.employment_status == "Employed"
    assert 0 <= scored.computed.score <= 100
