# filters.py
from typing import Dict, List, Optional, Sequence

from .config import EXPERIENCE_LEVELS, EMPLOYMENT_STATUSES, UNKNOWN_LOCATION
from .models import Candidate, FilterSpec, LocationCoordinates


def filter_candidates(
    candidates: Sequence[Candidate],
    filters: FilterSpec,
) -> List[Candidate]:
    """
    Candidates passing every active filter, in their original order.
    Does not mutate the input. Empty filter fields are ignored; within a
    field any listed value is accepted.
    """
    experience = set(filters.experience)
    skills = set(filters.skills)
    locations = set(filters.location)
    statuses = set(filters.employment_status)

    result = []
    for candidate in candidates:
        if candidate.error:
            continue
        if filters.search and not matches_search(candidate, filters.search):
            continue
        computed = candidate.computed
        if experience and (computed.experience_level if computed else "") not in experience:
            continue
        if skills and not matches_skills(candidate, skills):
            continue
        if locations and (candidate.location or UNKNOWN_LOCATION) not in locations:
            continue
        if statuses and (computed.employment_status if computed else "") not in statuses:
            continue
        result.append(candidate)
    return result


def matches_search(candidate: Candidate, search_term: str) -> bool:
    if not search_term:
        return True
    search = search_term.lower()

    fields = [candidate.name, candidate.location]
    fields.extend(candidate.all_skills())
    for exp in candidate.work_experience:
        fields.extend([exp.title, exp.company])
    for project in candidate.projects:
        fields.extend([project.name, project.description])

    return any(value and search in value.lower() for value in fields)


def matches_skills(candidate: Candidate, skills: set) -> bool:
    return any(skill in skills for skill in candidate.all_skills())


# ---------- Filter Options ----------
def get_unique_locations(
    candidates: Sequence[Candidate],
) -> List[Dict[str, Optional[LocationCoordinates]]]:
    locations: Dict[str, Optional[LocationCoordinates]] = {}
    for candidate in candidates:
        if candidate.location:
            locations[candidate.location] = candidate.location_coordinates
        else:
            locations[UNKNOWN_LOCATION] = None
    return [
        {"location": name, "coordinates": coords}
        for name, coords in sorted(locations.items(), key=lambda item: item[0].lower())
    ]


def get_unique_skills(candidates: Sequence[Candidate]) -> List[str]:
    return sorted({skill for c in candidates for skill in c.all_skills()})


def get_experience_levels() -> List[str]:
    return list(EXPERIENCE_LEVELS)


def get_employment_statuses() -> List[str]:
    return list(EMPLOYMENT_STATUSES)
