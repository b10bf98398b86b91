"""Talent Ranker package."""

__all__ = [
    "main",
    "config",
    "models",
    "loader",
    "cache",
    "similarity",
    "normalizer",
    "tfidf",
    "scorer",
    "filters",
    "ranker",
    "insights",
]
