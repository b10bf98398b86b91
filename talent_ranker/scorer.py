# scorer.py
import math
import re
from dataclasses import replace
from typing import List, Optional

from .config import (
    EXACT_MATCH_BONUS,
    PARTIAL_MATCH_WEIGHT,
    MIN_TOKEN_LENGTH,
    MIN_TERM_LENGTH,
    STOP_WORDS,
    SKILL_POINTS,
    EXPERIENCE_POINTS_PER_MONTH,
    MAX_EXPERIENCE_POINTS,
    PROJECT_POINTS_EACH,
    MAX_PROJECT_POINTS,
    EXPERIENCE_LEVELS,
)
from .models import Candidate, Computed, ScoreBreakdown, WorkExperience
from .tfidf import build_candidate_document, build_match_document, calculate_tfidf

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


# ---------- Requirement Terms ----------
def process_text(text: str) -> List[str]:
    cleaned = _PUNCTUATION_RE.sub("", (text or "").lower())
    words = [w for w in cleaned.split() if len(w) >= MIN_TOKEN_LENGTH]
    return [w for w in words if w not in STOP_WORDS]


def process_job_requirement(job_requirement: str) -> List[str]:
    if not job_requirement:
        return []
    return [w for w in process_text(job_requirement) if len(w) >= MIN_TERM_LENGTH]


# ---------- Skill Score ----------
def job_requirement_match_score(candidate: Candidate, job_requirement: str) -> float:
    """
    Fraction in [0, 1] of the requirement covered by the candidate.

    A term found inside any of the candidate's skills earns the exact-match
    bonus. Other terms earn half their TF-IDF, with TF counted over the match
    document (no responsibility words) and IDF over the candidate's full
    document. That corpus holds one document, so IDF is effectively constant
    and the partial score is a TF signal.
    """
    terms = process_job_requirement(job_requirement)
    if not terms:
        return 0.0

    skills = [s.lower() for s in candidate.all_skills()]
    document = build_match_document(candidate)
    corpus = [build_candidate_document(candidate)]

    score = 0.0
    for term in terms:
        if any(term in skill for skill in skills):
            score += EXACT_MATCH_BONUS
        else:
            score += calculate_tfidf(term, document, corpus) * PARTIAL_MATCH_WEIGHT

    return min(score / (len(terms) * EXACT_MATCH_BONUS), 1.0)


# ---------- Experience / Projects ----------
def experience_points(total_we_months: int) -> float:
    months = max(total_we_months or 0, 0)
    return min(months * EXPERIENCE_POINTS_PER_MONTH, MAX_EXPERIENCE_POINTS)


def project_points(project_count: int) -> float:
    return min(project_count * PROJECT_POINTS_EACH, MAX_PROJECT_POINTS)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------- Final Score ----------
def score_breakdown(candidate: Candidate, job_requirement: str) -> ScoreBreakdown:
    skill = job_requirement_match_score(candidate, job_requirement) * SKILL_POINTS
    experience = experience_points(candidate.total_we_months)
    projects = project_points(len(candidate.projects))

    return ScoreBreakdown(
        skill_score=round(skill, 2),
        experience_score=experience,
        project_score=projects,
        total=_round_half_up(skill + experience + projects),
    )


def total_candidate_score(candidate: Candidate, job_requirement: str) -> int:
    return score_breakdown(candidate, job_requirement).total


# ---------- Buckets ----------
def categorize_experience(months: int) -> str:
    if months == 0:
        return EXPERIENCE_LEVELS[0]
    if months < 12:
        return EXPERIENCE_LEVELS[1]
    if months < 36:
        return EXPERIENCE_LEVELS[2]
    if months < 60:
        return EXPERIENCE_LEVELS[3]
    return EXPERIENCE_LEVELS[4]


def determine_employment_status(work_experience: List[WorkExperience]) -> str:
    if any(exp.is_current is True for exp in work_experience or []):
        return "Employed"
    return "Unemployed"


def compute_candidate(
    candidate: Candidate,
    job_requirement: str,
    breakdown: Optional[ScoreBreakdown] = None,
) -> Candidate:
    """
    Copy of the candidate with a freshly computed block.

    A breakdown already computed for the same requirement is reused.
    """
    if breakdown is None:
        breakdown = score_breakdown(candidate, job_requirement)
    computed = Computed(
        score=breakdown.total,
        experience_level=categorize_experience(candidate.total_we_months),
        employment_status=determine_employment_status(candidate.work_experience),
    )
    return replace(candidate, computed=computed)
