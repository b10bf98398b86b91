"""Tests for the JSON file cache with expiry."""

from __future__ import annotations

from pathlib import Path

import pytest

from talent_ranker import cache as cache_module
from talent_ranker.cache import CandidateCache


def test_set_and_get(tmp_path: Path) -> None:
    cache = CandidateCache(tmp_path / "cache.json", ttl_seconds=60)
    cache.set("resumes", {"a": {"name": "Ann"}})
    assert cache.is_valid("resumes")
    assert cache.get("resumes") == {"a": {"name": "Ann"}}


def test_missing_key(tmp_path: Path) -> None:
    cache = CandidateCache(tmp_path / "cache.json")
    assert cache.get("nothing") is None
    assert not cache.is_valid("nothing")


def test_entries_expire(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "time", lambda: now[0])

    cache = CandidateCache(tmp_path / "cache.json", ttl_seconds=60)
    cache.set("resumes", [1, 2, 3])
    now[0] += 59
    assert cache.get("resumes") == [1, 2, 3]
    assert not cache.is_valid("resumes", ttl=30)

    now[0] += 2
    assert not cache.is_valid("resumes")
    assert cache.get("resumes") is None


def test_clear(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    cache = CandidateCache(path)
    cache.set("k", "v")
    cache.clear()
    assert not path.exists()
    assert cache.get("k") is None
    cache.clear()


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("{oops", encoding="utf-8")
    assert CandidateCache(path).get("k") is None


def test_non_object_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("[]", encoding="utf-8")
    cache = CandidateCache(path)
    assert cache.get("k") is None
    assert not cache.is_valid("k")

    cache.set("k", "v")
    assert cache.get("k") == "v"


def test_entry_without_data_is_a_miss(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text('{"k": {"timestamp": 9e18}}', encoding="utf-8")
    cache = CandidateCache(path)
    assert not cache.is_valid("k")
    assert cache.get("k") is None


def test_entry_with_bad_timestamp_is_a_miss(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text('{"k": {"timestamp": "soon", "data": 1}}', encoding="utf-8")
    assert CandidateCache(path).get("k") is None
