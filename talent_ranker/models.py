# models.py
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from uuid import uuid4


@dataclass
class LocationCoordinates:
    lat: float
    lng: float

    def is_valid(self) -> bool:
        for value in (self.lat, self.lng):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
            if not math.isfinite(value):
                return False
        return True


@dataclass
class WorkExperience:
    company: str = ""
    title: str = ""
    start_date: str = ""
    end_date: str = ""
    is_current: bool = False
    location: str = ""
    responsibilities: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)


@dataclass
class Project:
    name: str = ""
    description: str = ""
    skills: List[str] = field(default_factory=list)
    url: str = ""


@dataclass
class Computed:
    score: int = 0
    experience_level: str = "No Experience"
    employment_status: str = "Unemployed"


@dataclass
class Candidate:
    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    email: str = ""
    phone: str = ""
    github_url: str = ""
    linkedin_url: str = ""
    location: str = ""
    location_coordinates: Optional[LocationCoordinates] = None
    work_experience: List[WorkExperience] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    total_we_months: int = 0
    source_file: str = ""
    file_hash: str = ""
    error: Optional[str] = None
    computed: Optional[Computed] = None

    def all_skills(self) -> List[str]:
        """Work experience skills followed by project skills, blanks skipped."""
        skills = [s for exp in self.work_experience for s in exp.skills if s]
        skills.extend(s for proj in self.projects for s in proj.skills if s)
        return skills

    def has_valid_coordinates(self) -> bool:
        return self.location_coordinates is not None and self.location_coordinates.is_valid()


# raw skill -> canonical representative
SkillNormalizationMap = Dict[str, str]
# canonical representative -> raw variants
GroupedSkillsMap = Dict[str, List[str]]


@dataclass
class FilterSpec:
    search: str = ""
    experience: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    location: List[str] = field(default_factory=list)
    employment_status: List[str] = field(default_factory=list)
    job_requirement: str = ""


SORT_FIELDS = ("name", "score", "distance", "experience")
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class SortOption:
    field: str = "score"
    direction: str = "desc"

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValueError(f"Unknown sort field: {self.field}")
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {self.direction}")


@dataclass
class ScoreBreakdown:
    skill_score: float
    experience_score: float
    project_score: float
    total: int


@dataclass
class RankingResult:
    candidates: List[Candidate]
    total_matches: int
    page: int
    page_size: int
    normalization_map: SkillNormalizationMap
    grouped_skills: GroupedSkillsMap
    skill_counts: Dict[str, int]
    breakdowns: Dict[str, ScoreBreakdown] = field(default_factory=dict)
