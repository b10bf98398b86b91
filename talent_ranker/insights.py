# insights.py
"""Aggregate views over a scored candidate set, plus flat export records."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence

from .config import EXPERIENCE_LEVELS, TOP_SKILLS_LIMIT, UNKNOWN_LOCATION
from .models import Candidate

logger = logging.getLogger(__name__)

SCORE_RANGES = [
    ("0-20", 0, 20),
    ("21-40", 21, 40),
    ("41-60", 41, 60),
    ("61-80", 61, 80),
    ("81-100", 81, 100),
]


# ---------- Distributions ----------
def experience_distribution(candidates: Sequence[Candidate]) -> List[Dict]:
    counts = {level: 0 for level in EXPERIENCE_LEVELS}
    for candidate in candidates:
        level = candidate.computed.experience_level if candidate.computed else EXPERIENCE_LEVELS[0]
        if level in counts:
            counts[level] += 1
    return [{"name": level, "count": count} for level, count in counts.items()]


def skill_occurrences(candidates: Sequence[Candidate]) -> Dict[str, int]:
    # every listing counts, so a skill repeated across jobs counts repeatedly
    counts: Dict[str, int] = {}
    for candidate in candidates:
        for skill in candidate.all_skills():
            counts[skill] = counts.get(skill, 0) + 1
    return counts


def skills_distribution(
    candidates: Sequence[Candidate],
    limit: int = TOP_SKILLS_LIMIT,
) -> List[Dict]:
    counts = skill_occurrences(candidates)
    ranked = sorted(counts.items(), key=lambda item: -item[1])[:limit]
    return [{"name": name, "count": count} for name, count in ranked]


def score_distribution(candidates: Sequence[Candidate]) -> List[Dict]:
    counts = {name: 0 for name, _, _ in SCORE_RANGES}
    for candidate in candidates:
        score = candidate.computed.score if candidate.computed else 0
        for name, low, high in SCORE_RANGES:
            if low <= score <= high:
                counts[name] += 1
                break
    return [{"name": name, "count": count} for name, count in counts.items()]


def location_distribution(candidates: Sequence[Candidate]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for candidate in candidates:
        location = candidate.location or UNKNOWN_LOCATION
        counts[location] = counts.get(location, 0) + 1
    return dict(sorted(counts.items(), key=lambda item: -item[1]))


# ---------- Summary ----------
def average_experience_months(candidates: Sequence[Candidate]) -> float:
    if not candidates:
        return 0.0
    total = sum(c.total_we_months or 0 for c in candidates)
    return round(total / len(candidates), 1)


def top_skills(candidates: Sequence[Candidate], limit: int = 5) -> List[Dict]:
    """Most common skills with a percentage relative to the most common one."""
    ranked = skills_distribution(candidates, limit)
    max_count = ranked[0]["count"] if ranked else 0
    return [
        {
            "skill": item["name"],
            "count": item["count"],
            "percentage": round(item["count"] / max_count * 100) if max_count else 0,
        }
        for item in ranked
    ]


# ---------- Export ----------
def export_candidate_data(candidates: Sequence[Candidate]) -> List[Dict]:
    records = []
    for c in candidates:
        computed = c.computed
        records.append({
            "name": c.name or "Unknown",
            "email": c.email or "",
            "phone": c.phone or "",
            "location": c.location or UNKNOWN_LOCATION,
            "github": c.github_url or "",
            "linkedin": c.linkedin_url or "",
            "experience_months": c.total_we_months or 0,
            "experience_level": computed.experience_level if computed else "Unknown",
            "skills": ", ".join(dict.fromkeys(c.all_skills())),
            "score": computed.score if computed else 0,
            "current_status": computed.employment_status if computed else "Unknown",
            "projects": ", ".join(p.name or "Unnamed Project" for p in c.projects),
        })
    return records


def write_export(records: List[Dict], path: Path) -> None:
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    logger.info("Exported %d candidates to %s", len(records), path)
