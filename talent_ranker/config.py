# config.py
import os
from pathlib import Path

# ---------- Project Paths ----------
BASE_DIR = Path(__file__).resolve().parent
LOG_DIR = BASE_DIR / "logs"
LOG_FILE = LOG_DIR / "app.log"

CACHE_FILE = Path(
    os.getenv("TALENT_RANKER_CACHE_FILE", str(BASE_DIR / "candidate_cache.json"))
)

# ---------- Cache ----------
CACHE_TTL_SECONDS = int(os.getenv("TALENT_RANKER_CACHE_TTL", str(24 * 60 * 60)))

# ---------- Skill Similarity ----------
SIMILARITY_THRESHOLD = float(os.getenv("SKILL_SIMILARITY_THRESHOLD", "0.8"))

SUBSTRING_SIMILARITY = 0.9
EDIT_WEIGHT = 0.4
JACCARD_WEIGHT = 0.3
COSINE_WEIGHT = 0.3

# ---------- Job Requirement Matching ----------
EXACT_MATCH_BONUS = 1.5
PARTIAL_MATCH_WEIGHT = 0.5

MIN_TOKEN_LENGTH = 3  # tokens shorter than this are dropped
MIN_TERM_LENGTH = 4  # requirement terms must be at least this long
MIN_DOCUMENT_WORD_LENGTH = 4  # responsibility / description words

STOP_WORDS = frozenset({
    "the", "and", "for", "with", "was", "that", "this", "are", "have", "from",
    "not", "has", "were", "they", "their", "been", "who", "what", "when", "where",
    "why", "how", "all", "any", "both", "each", "more", "most", "some", "such",
})

# ---------- Scoring Weights ----------
SKILL_POINTS = 40
EXPERIENCE_POINTS_PER_MONTH = 0.5
MAX_EXPERIENCE_POINTS = 30
PROJECT_POINTS_EACH = 7.5
MAX_PROJECT_POINTS = 30

# ---------- Geo ----------
EARTH_RADIUS_KM = 6371.0

# ---------- Labels ----------
EXPERIENCE_LEVELS = [
    "No Experience",
    "Less than 1 year",
    "1-3 years",
    "3-5 years",
    "5+ years",
]
EMPLOYMENT_STATUSES = ["Employed", "Unemployed"]
UNKNOWN_LOCATION = "Unknown"

# ---------- Output ----------
DEFAULT_PAGE_SIZE = 20
TOP_SKILLS_LIMIT = 10

DEFAULT_JOB_REQUIREMENT = os.getenv(
    "DEFAULT_JOB_REQUIREMENT",
    "Seeking an AI Engineer with expertise in machine learning, Python, "
    "TensorFlow, and deep learning. Experience with natural language "
    "processing, computer vision, and deployment of ML models to production "
    "environments is highly desired.",
)
