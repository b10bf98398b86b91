# tfidf.py
import logging
import math
from typing import Dict, List, Sequence

from .config import MIN_DOCUMENT_WORD_LENGTH
from .models import Candidate

logger = logging.getLogger(__name__)

Document = List[str]


# ---------- TF / IDF ----------
def calculate_tf(term: str, document: Sequence[str]) -> float:
    if not document:
        return 0.0
    term = term.lower()
    count = sum(1 for word in document if word.lower() == term)
    return count / len(document)


def calculate_idf(term: str, corpus: Sequence[Sequence[str]]) -> float:
    # smoothed so absent and ubiquitous terms stay finite and positive
    term = term.lower()
    doc_freq = sum(
        1 for document in corpus
        if any(word.lower() == term for word in document)
    )
    return math.log((len(corpus) + 1) / (doc_freq + 1)) + 1


def calculate_tfidf(
    term: str,
    document: Sequence[str],
    corpus: Sequence[Sequence[str]],
) -> float:
    return calculate_tf(term, document) * calculate_idf(term, corpus)


# ---------- Documents ----------
def _words(text: str) -> List[str]:
    return (text or "").lower().split()


def _long_words(text: str) -> List[str]:
    return [w for w in _words(text) if len(w) >= MIN_DOCUMENT_WORD_LENGTH]


def build_candidate_document(candidate: Candidate) -> Document:
    """
    Flatten a candidate into lowercase tokens.

    Work experience contributes its skills (one entry per skill), title
    words, company words and longer responsibility words; projects then add
    their skills, name words and longer description words.
    """
    document: Document = []

    for exp in candidate.work_experience:
        document.extend(skill.lower() for skill in exp.skills if skill)
        document.extend(_words(exp.title))
        document.extend(_words(exp.company))
        for responsibility in exp.responsibilities:
            document.extend(_long_words(responsibility))

    for project in candidate.projects:
        document.extend(skill.lower() for skill in project.skills if skill)
        document.extend(_words(project.name))
        document.extend(_long_words(project.description))

    return document


def build_match_document(candidate: Candidate) -> Document:
    """Tokens a requirement term is counted against; responsibilities are left out."""
    document: Document = []

    for exp in candidate.work_experience:
        document.extend(skill.lower() for skill in exp.skills if skill)
        document.extend(_words(exp.title))
        document.extend(_words(exp.company))

    for project in candidate.projects:
        document.extend(skill.lower() for skill in project.skills if skill)
        document.extend(_words(project.name))
        document.extend(_long_words(project.description))

    return document


def create_candidate_documents(candidates: Sequence[Candidate]) -> List[Document]:
    return [build_candidate_document(c) for c in candidates]


def extract_skill_vocabulary(candidates: Sequence[Candidate]) -> List[str]:
    vocabulary: Dict[str, None] = {}
    for candidate in candidates:
        for skill in candidate.all_skills():
            vocabulary.setdefault(skill.lower(), None)
    return list(vocabulary)


# ---------- Corpus Scoring ----------
def calculate_skill_relevance_scores(
    candidates: Sequence[Candidate],
    relevant_skills: Sequence[str],
) -> Dict[str, float]:
    """Mean TF-IDF of the given skills for each candidate over the whole corpus."""
    documents = create_candidate_documents(candidates)
    logger.debug("Built TF-IDF corpus of %d documents", len(documents))

    scores: Dict[str, float] = {}
    for candidate, document in zip(candidates, documents):
        if not relevant_skills:
            scores[candidate.id] = 0.0
            continue
        total = sum(
            calculate_tfidf(skill, document, documents)
            for skill in relevant_skills
        )
        scores[candidate.id] = total / len(relevant_skills)
    return scores
