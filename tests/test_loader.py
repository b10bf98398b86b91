"""Tests for turning raw candidate records into models."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from talent_ranker.loader import (
    DataLoadError,
    load_candidates,
    normalize_record,
    parse_candidates,
    parse_coordinates,
)

RAW = {
    "abc": {
        "name": "Dana Lee",
        "location": "Berlin",
        "location_coordinates": {"latitude": 52.52, "longitude": 13.405},
        "work_experience": [
            {
                "company": "Widgets GmbH",
                "title": "Backend Developer",
                "is_current": True,
                "responsibilities": ["Maintained APIs", None],
                "skills": ["Go", "", "PostgreSQL"],
            },
            "not a record",
        ],
        "projects": None,
        "total_we_months": "18",
    },
    "bad": {"name": "Failed Parse", "error": "could not parse resume"},
}


def test_coordinates_are_renamed() -> None:
    candidate = normalize_record("abc", RAW["abc"])
    assert candidate.location_coordinates.lat == 52.52
    assert candidate.location_coordinates.lng == 13.405


@pytest.mark.parametrize(
    "raw",
    [None, {}, {"latitude": "north", "longitude": 1}, {"latitude": math.nan, "longitude": 1.0}],
)
def test_invalid_coordinates_become_none(raw: object) -> None:
    assert parse_coordinates(raw) is None


def test_malformed_fields_degrade_to_defaults() -> None:
    candidate = normalize_record("abc", RAW["abc"])
    assert candidate.id == "abc"
    assert len(candidate.work_experience) == 1
    assert candidate.work_experience[0].skills == ["Go", "PostgreSQL"]
    assert candidate.work_experience[0].responsibilities == ["Maintained APIs"]
    assert candidate.projects == []
    assert candidate.total_we_months == 18
    assert candidate.email == ""
    assert candidate.computed is None


def test_error_records_are_dropped_by_default() -> None:
    assert [c.id for c in parse_candidates(RAW)] == ["abc"]


def test_error_records_can_be_kept_flagged() -> None:
    kept = parse_candidates(RAW, drop_errors=False)
    assert [c.id for c in kept] == ["abc", "bad"]
    assert kept[1].error == "could not parse resume"


def test_parse_candidates_requires_mapping() -> None:
    with pytest.raises(DataLoadError):
        parse_candidates([RAW["abc"]])


def test_load_candidates_from_file(tmp_path: Path) -> None:
    path = tmp_path / "resumes.json"
    path.write_text(json.dumps(RAW), encoding="utf-8")
    assert [c.name for c in load_candidates(path)] == ["Dana Lee"]


def test_load_candidates_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_candidates(tmp_path / "missing.json")


def test_load_candidates_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "resumes.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        load_candidates(path)
