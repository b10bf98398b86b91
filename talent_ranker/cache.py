# cache.py
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .config import CACHE_FILE, CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


def _load_cache(path: Path) -> Dict:
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                cache = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt cache file %s", path)
            return {}
        if isinstance(cache, dict):
            return cache
        logger.warning("Ignoring cache file %s: top level is not an object", path)
    return {}


def _save_cache(path: Path, cache: Dict) -> None:
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cache, f, indent=2)


class CandidateCache:
    """
    JSON file key-value store with time-based expiry.

    Only a memoization layer for the CLI: scoring never reads it, so results
    are the same with or without it. Unreadable files and malformed entries
    count as misses.
    """

    def __init__(self, path: Path = CACHE_FILE, ttl_seconds: int = CACHE_TTL_SECONDS) -> None:
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        if not self.is_valid(key):
            return None
        return _load_cache(self.path).get(key, {}).get("data")

    def set(self, key: str, value: Any) -> None:
        cache = _load_cache(self.path)
        cache[key] = {"timestamp": time.time(), "data": value}
        _save_cache(self.path, cache)

    def is_valid(self, key: str, ttl: Optional[int] = None) -> bool:
        entry = _load_cache(self.path).get(key)
        if not isinstance(entry, dict) or "data" not in entry:
            return False
        timestamp = entry.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return False
        ttl = self.ttl_seconds if ttl is None else ttl
        return time.time() - timestamp < ttl

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
