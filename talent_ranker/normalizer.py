# normalizer.py
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .config import SIMILARITY_THRESHOLD
from .models import Candidate, GroupedSkillsMap, SkillNormalizationMap
from .similarity import skill_similarity

logger = logging.getLogger(__name__)


# ---------- Clustering ----------
def group_similar_skills(
    skills: Iterable[str],
    threshold: Optional[float] = None,
) -> Dict[str, List[str]]:
    """
    Greedy single-pass clustering of skill strings.

    Each skill is compared against the key (first member) of every existing
    group in creation order and joins the first group scoring at or above
    the threshold; otherwise it opens a new group keyed by itself. The
    result depends on input order.
    """
    if threshold is None:
        threshold = SIMILARITY_THRESHOLD

    groups: Dict[str, List[str]] = {}
    for skill in skills:
        for key, members in groups.items():
            if skill_similarity(skill, key) >= threshold:
                members.append(skill)
                break
        else:
            groups.setdefault(skill, []).append(skill)

    return groups


def _is_abbreviation(skill: str) -> bool:
    return len(skill) < 4 and skill == skill.upper()


def select_representative(group: List[str]) -> str:
    # readable names before short all-caps forms, then the shortest
    ranked = sorted(group, key=lambda s: (_is_abbreviation(s), len(s)))
    return ranked[0]


def representative_mapping(groups: Dict[str, List[str]]) -> SkillNormalizationMap:
    mapping: SkillNormalizationMap = {}
    for members in groups.values():
        best = select_representative(members)
        for skill in members:
            mapping[skill] = best
    return mapping


# ---------- Vocabulary ----------
def extract_all_skills(candidates: Iterable[Candidate]) -> List[str]:
    """Unique raw skills across candidates, in first-seen order."""
    seen: Dict[str, None] = {}
    for candidate in candidates:
        for skill in candidate.all_skills():
            seen.setdefault(skill, None)
    return list(seen)


def create_skill_normalization_mapping(
    candidates: List[Candidate],
    threshold: Optional[float] = None,
) -> SkillNormalizationMap:
    skills = extract_all_skills(candidates)
    groups = group_similar_skills(skills, threshold)
    logger.debug("Clustered %d skills into %d groups", len(skills), len(groups))
    return representative_mapping(groups)


def normalize_skill(skill: str, mapping: SkillNormalizationMap) -> str:
    return mapping.get(skill) or skill


def group_by_representative(mapping: SkillNormalizationMap) -> GroupedSkillsMap:
    grouped: GroupedSkillsMap = {}
    for raw, representative in mapping.items():
        grouped.setdefault(representative, []).append(raw)
    return grouped


# ---------- Candidate Normalization ----------
def normalize_candidate_skills(
    candidate: Candidate,
    mapping: SkillNormalizationMap,
) -> Candidate:
    """Return a copy of the candidate with every skill replaced by its representative."""
    work_experience = [
        replace(exp, skills=[normalize_skill(s, mapping) for s in exp.skills])
        for exp in candidate.work_experience
    ]
    projects = [
        replace(proj, skills=[normalize_skill(s, mapping) for s in proj.skills])
        for proj in candidate.projects
    ]
    return replace(candidate, work_experience=work_experience, projects=projects)


def normalize_candidates(
    candidates: List[Candidate],
    mapping: SkillNormalizationMap,
) -> List[Candidate]:
    if not mapping:
        return list(candidates)
    return [normalize_candidate_skills(c, mapping) for c in candidates]


def count_skill_candidates(candidates: Iterable[Candidate]) -> Dict[str, int]:
    """Number of distinct candidates listing each raw skill."""
    counts: Dict[str, int] = {}
    for candidate in candidates:
        for skill in dict.fromkeys(candidate.all_skills()):
            counts[skill] = counts.get(skill, 0) + 1
    return counts
