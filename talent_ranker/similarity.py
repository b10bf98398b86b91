# similarity.py
import re
from collections import Counter
from typing import List

import numpy as np
from rapidfuzz.distance import Levenshtein

from .config import (
    SUBSTRING_SIMILARITY,
    EDIT_WEIGHT,
    JACCARD_WEIGHT,
    COSINE_WEIGHT,
)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------- Text Preparation ----------
def preprocess_text(text: str) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace."""
    text = _PUNCTUATION_RE.sub(" ", (text or "").lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def _tokens(text: str) -> List[str]:
    return text.split()


# ---------- Metrics ----------
def levenshtein_distance(a: str, b: str) -> int:
    # unit cost insert / delete / substitute
    return Levenshtein.distance(a, b)


def jaccard_similarity(a: str, b: str) -> float:
    set_a = set(_tokens(a))
    set_b = set(_tokens(b))
    if not set_a and not set_b:
        return 1.0
    return len(set_a & set_b) / len(set_a | set_b)


def cosine_similarity(a: str, b: str) -> float:
    """Cosine of the term-frequency vectors of two strings."""
    counts_a = Counter(_tokens(a))
    counts_b = Counter(_tokens(b))
    vocabulary = sorted(set(counts_a) | set(counts_b))
    if not vocabulary:
        return 0.0

    vec_a = np.array([counts_a[w] for w in vocabulary], dtype=float)
    vec_b = np.array([counts_b[w] for w in vocabulary], dtype=float)

    denom = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if denom == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / denom)


# ---------- Skill Similarity ----------
def skill_similarity(skill_a: str, skill_b: str) -> float:
    """
    Similarity in [0, 1] between two skill strings.

    Identical strings (after preprocessing) score 1.0 and containment scores
    0.9, so "React" and "React.js" land together. Anything else is a weighted
    blend of edit distance, token Jaccard and token cosine similarity.
    """
    a = preprocess_text(skill_a)
    b = preprocess_text(skill_b)

    if a == b:
        return 1.0

    if a in b or b in a:
        return SUBSTRING_SIMILARITY

    edit = 1 - levenshtein_distance(a, b) / max(len(a), len(b))
    jaccard = jaccard_similarity(a, b)
    cosine = cosine_similarity(a, b)

    return EDIT_WEIGHT * edit + JACCARD_WEIGHT * jaccard + COSINE_WEIGHT * cosine
