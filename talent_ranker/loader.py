# loader.py
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Candidate, LocationCoordinates, Project, WorkExperience

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """Raised when a candidate dataset cannot be read at all."""


# ---------- Field Coercion ----------
def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def _as_months(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        months = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(months):
        return 0
    return max(int(months), 0)


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_coordinates(raw: Any) -> Optional[LocationCoordinates]:
    """Turn a raw ``{latitude, longitude}`` block into coordinates, or None."""
    if not isinstance(raw, dict):
        return None
    lat = _as_float(raw.get("latitude", raw.get("lat")))
    lng = _as_float(raw.get("longitude", raw.get("lng")))
    if lat is None or lng is None:
        return None
    return LocationCoordinates(lat=lat, lng=lng)


def parse_work_experience(raw: Any) -> WorkExperience:
    return WorkExperience(
        company=_as_str(raw.get("company")),
        title=_as_str(raw.get("title")),
        start_date=_as_str(raw.get("start_date")),
        end_date=_as_str(raw.get("end_date")),
        is_current=raw.get("is_current") is True,
        location=_as_str(raw.get("location")),
        responsibilities=_as_str_list(raw.get("responsibilities")),
        skills=_as_str_list(raw.get("skills")),
    )


def parse_project(raw: Any) -> Project:
    return Project(
        name=_as_str(raw.get("name")),
        description=_as_str(raw.get("description")),
        skills=_as_str_list(raw.get("skills")),
        url=_as_str(raw.get("url")),
    )


# ---------- Normalization ----------
def normalize_record(candidate_id: str, data: Dict) -> Candidate:
    work_experience = data.get("work_experience")
    projects = data.get("projects")
    error = data.get("error")

    return Candidate(
        id=str(candidate_id),
        name=_as_str(data.get("name")),
        email=_as_str(data.get("email")),
        phone=_as_str(data.get("phone")),
        github_url=_as_str(data.get("github_url")),
        linkedin_url=_as_str(data.get("linkedin_url")),
        location=_as_str(data.get("location")),
        location_coordinates=parse_coordinates(data.get("location_coordinates")),
        work_experience=[
            parse_work_experience(exp)
            for exp in (work_experience if isinstance(work_experience, list) else [])
            if isinstance(exp, dict)
        ],
        projects=[
            parse_project(proj)
            for proj in (projects if isinstance(projects, list) else [])
            if isinstance(proj, dict)
        ],
        total_we_months=_as_months(data.get("total_we_months")),
        source_file=_as_str(data.get("source_file")),
        file_hash=_as_str(data.get("file_hash")),
        error=_as_str(error) if error else None,
    )


def parse_candidates(raw: Any, drop_errors: bool = True) -> List[Candidate]:
    """
    Convert a ``candidate-id -> record`` mapping into candidates.

    Records with a truthy ``error`` are dropped unless ``drop_errors`` is
    False, in which case they are kept flagged so the filters exclude them.
    """
    if not isinstance(raw, dict):
        raise DataLoadError(
            f"Expected a mapping of candidate id to record, got {type(raw).__name__}"
        )

    candidates: List[Candidate] = []
    dropped = 0
    for candidate_id, data in raw.items():
        if not isinstance(data, dict):
            logger.warning("Skipping malformed record %s", candidate_id)
            dropped += 1
            continue
        if data.get("error") and drop_errors:
            dropped += 1
            continue
        candidates.append(normalize_record(candidate_id, data))

    if dropped:
        logger.warning("Dropped %d candidate records", dropped)
    return candidates


def read_raw_candidates(path: Path) -> Dict:
    if not path.exists():
        raise FileNotFoundError(f"Candidate data file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise DataLoadError(f"Could not read candidate data from {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise DataLoadError(f"Candidate data in {path} must be a JSON object")
    return raw


def load_candidates(path: Path, drop_errors: bool = True) -> List[Candidate]:
    return parse_candidates(read_raw_candidates(path), drop_errors=drop_errors)
