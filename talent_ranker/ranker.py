# ranker.py
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from tabulate import tabulate
from tqdm import tqdm

from .config import DEFAULT_PAGE_SIZE, EARTH_RADIUS_KM
from .filters import filter_candidates
from .models import (
    Candidate,
    FilterSpec,
    LocationCoordinates,
    RankingResult,
    ScoreBreakdown,
    SortOption,
)
from .normalizer import (
    count_skill_candidates,
    create_skill_normalization_mapping,
    group_by_representative,
    normalize_candidates,
)
from .scorer import compute_candidate, score_breakdown

logger = logging.getLogger(__name__)


# ---------- Distance ----------
def calculate_distance(a: LocationCoordinates, b: LocationCoordinates) -> float:
    """Great-circle distance in km, or NaN when either point is unusable."""
    if not (a.is_valid() and b.is_valid()):
        logger.warning("Invalid coordinates in distance calculation: %s, %s", a, b)
        return math.nan

    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


# ---------- Sorting ----------
def _sort_by_distance(
    candidates: List[Candidate],
    reference: LocationCoordinates,
    descending: bool,
) -> List[Candidate]:
    # candidates without a usable distance always trail, in original order
    located = []
    unlocated = []
    for candidate in candidates:
        distance = math.nan
        if candidate.has_valid_coordinates():
            distance = calculate_distance(reference, candidate.location_coordinates)
        if math.isnan(distance):
            unlocated.append(candidate)
        else:
            located.append((distance, candidate))

    located.sort(key=lambda item: item[0], reverse=descending)
    return [c for _, c in located] + unlocated


def sort_candidates(
    candidates: Sequence[Candidate],
    sort_option: SortOption,
    reference: Optional[LocationCoordinates] = None,
) -> List[Candidate]:
    """Stable sort returning a new list; the input is left untouched."""
    descending = sort_option.direction == "desc"
    items = list(candidates)

    if sort_option.field == "name":
        return sorted(items, key=lambda c: (c.name or "").lower(), reverse=descending)

    if sort_option.field == "score":
        return sorted(
            items,
            key=lambda c: c.computed.score if c.computed else 0,
            reverse=descending,
        )

    if sort_option.field == "experience":
        return sorted(items, key=lambda c: c.total_we_months or 0, reverse=descending)

    if reference is None:
        return sorted(items, key=lambda c: (c.location or "").lower(), reverse=descending)
    return _sort_by_distance(items, reference, descending)


# ---------- Pagination ----------
def paginate(items: Sequence, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> list:
    if page < 1:
        raise ValueError(f"Page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


# ---------- Pipeline ----------
def score_with_breakdowns(
    candidates: Sequence[Candidate],
    job_requirement: str,
    show_progress: bool = False,
) -> Tuple[List[Candidate], Dict[str, ScoreBreakdown]]:
    scored: List[Candidate] = []
    breakdowns: Dict[str, ScoreBreakdown] = {}
    for c in tqdm(candidates, desc="Scoring", disable=not show_progress):
        breakdown = score_breakdown(c, job_requirement)
        breakdowns[c.id] = breakdown
        scored.append(compute_candidate(c, job_requirement, breakdown))
    return scored, breakdowns


def score_candidates(
    candidates: Sequence[Candidate],
    job_requirement: str,
    show_progress: bool = False,
) -> List[Candidate]:
    scored, _ = score_with_breakdowns(candidates, job_requirement, show_progress)
    return scored


def rank_candidates(
    candidates: Sequence[Candidate],
    filters: Optional[FilterSpec] = None,
    sort_option: Optional[SortOption] = None,
    reference: Optional[LocationCoordinates] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    threshold: Optional[float] = None,
    show_progress: bool = False,
) -> RankingResult:
    """
    Full pass: cluster skills, normalize, score, filter, sort and paginate.

    Everything is rebuilt from the given candidates on each call; records
    flagged with an error take no part. The result carries the score
    breakdown of each candidate on the page.
    """
    filters = filters or FilterSpec()
    sort_option = sort_option or SortOption()

    valid = [c for c in candidates if not c.error]
    if len(valid) != len(candidates):
        logger.info("Skipping %d candidates flagged with errors", len(candidates) - len(valid))

    mapping = create_skill_normalization_mapping(valid, threshold)
    normalized = normalize_candidates(valid, mapping)
    scored, breakdowns = score_with_breakdowns(normalized, filters.job_requirement, show_progress)

    matched = filter_candidates(scored, filters)
    ordered = sort_candidates(matched, sort_option, reference)
    logger.info("Ranked %d of %d candidates", len(matched), len(valid))

    rows = paginate(ordered, page, page_size)
    return RankingResult(
        candidates=rows,
        total_matches=len(matched),
        page=page,
        page_size=page_size,
        normalization_map=mapping,
        grouped_skills=group_by_representative(mapping),
        skill_counts=count_skill_candidates(valid),
        breakdowns={c.id: breakdowns[c.id] for c in rows},
    )


# ---------- Output ----------
def format_ranking_table(result: RankingResult) -> str:
    offset = (result.page - 1) * result.page_size
    table = []
    for idx, c in enumerate(result.candidates):
        breakdown = result.breakdowns.get(c.id)
        table.append([
            offset + idx + 1,
            c.name,
            c.location,
            c.computed.score if c.computed else "",
            breakdown.skill_score if breakdown else "",
            breakdown.experience_score if breakdown else "",
            breakdown.project_score if breakdown else "",
            c.computed.experience_level if c.computed else "",
            c.computed.employment_status if c.computed else "",
        ])

    return tabulate(
        table,
        headers=["Rank", "Name", "Location", "Score", "Skill", "Exp", "Proj", "Level", "Status"],
        tablefmt="github",
    )
