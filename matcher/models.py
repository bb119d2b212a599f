"""
Data models for the candidate-job matching engine.

Records coming from the database layer are plain dicts; the matcher turns
them into these dataclasses, scores them, and hands results back as dicts
through ``to_dict`` (camelCase keys, as the JSON API returns them).
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from config.settings import (
    DEFAULT_ADVANCED_LIMIT,
    DEFAULT_MAX_RECOMMENDATIONS,
    DEFAULT_MIN_MATCH_SCORE,
    JOB_LOCATIONS,
    JOB_TYPES,
)
from database.job_db import parse_timestamp

logger = logging.getLogger(__name__)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp into a naive local datetime, or None."""
    try:
        return parse_timestamp(value)
    except ValueError:
        logger.warning(f"Ignoring malformed timestamp: {value!r}")
        return None


def parse_passout_years(values: Optional[Iterable[Any]]) -> List[int]:
    """Integer graduation years; malformed entries are dropped and match nobody."""
    years = []
    for value in values or []:
        try:
            years.append(int(value))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed passout year: {value!r}")
    return years


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class SortBy(Enum):
    """Sort orders supported by advanced matching."""
    RELEVANCE = "relevance"
    DATE = "date"
    SALARY = "salary"


@dataclass
class CandidateProfile:
    """Education record of a job seeker; name and email are display-only."""
    candidate_id: str
    qualification: Optional[str]
    stream: Optional[str]
    year_of_passout: Optional[int]
    cgpa_or_percentage: Optional[float] = None
    name: str = ""
    email: str = ""
    college_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateProfile":
        year = data.get("year_of_passout")
        cgpa = data.get("cgpa_or_percentage")
        return cls(
            candidate_id=str(data.get("candidate_id") or data.get("user_id") or ""),
            qualification=data.get("qualification"),
            stream=data.get("stream"),
            year_of_passout=int(year) if year is not None else None,
            cgpa_or_percentage=float(cgpa) if cgpa is not None else None,
            name=data.get("name") or "",
            email=data.get("email") or "",
            college_name=data.get("college_name") or "",
        )

    def qualification_snapshot(self) -> Dict[str, Any]:
        return {
            "qualification": self.qualification,
            "stream": self.stream,
            "yearOfPassout": self.year_of_passout,
            "cgpa": self.cgpa_or_percentage,
        }


@dataclass
class JobEligibility:
    """Eligibility rules attached to a job posting."""
    qualifications: List[str] = field(default_factory=list)
    streams: List[str] = field(default_factory=list)
    passout_years: List[int] = field(default_factory=list)
    min_cgpa: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "JobEligibility":
        data = data or {}
        min_cgpa = data.get("min_cgpa")
        return cls(
            qualifications=list(data.get("qualifications") or []),
            streams=list(data.get("streams") or []),
            passout_years=parse_passout_years(data.get("passout_years")),
            min_cgpa=float(min_cgpa) if min_cgpa is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "qualifications": self.qualifications,
            "streams": self.streams,
            "passoutYears": self.passout_years,
            "minCGPA": self.min_cgpa,
        }


@dataclass
class Job:
    """A job or internship posting."""
    job_id: str
    title: str
    company: str = ""
    description: str = ""
    job_type: str = "job"
    location: str = "onsite"
    eligibility: JobEligibility = field(default_factory=JobEligibility)
    salary: Optional[str] = None
    stipend: Optional[str] = None
    application_deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        return cls(
            job_id=str(data.get("job_id") or ""),
            title=data.get("title") or "",
            company=data.get("company") or "",
            description=data.get("description") or "",
            job_type=data.get("job_type") or "job",
            location=data.get("location") or "onsite",
            eligibility=JobEligibility.from_dict(data.get("eligibility")),
            salary=data.get("salary"),
            stipend=data.get("stipend"),
            application_deadline=parse_datetime(data.get("application_deadline")),
            created_at=parse_datetime(data.get("created_at")),
            is_active=bool(data.get("is_active", True)),
        )


@dataclass
class MatchScore:
    """Scorer output for one candidate-job pair."""
    score: int
    reasons: List[str]


@dataclass
class JobMatch:
    """A job ranked for a candidate."""
    job_id: str
    title: str
    company: str
    job_type: str
    location: str
    match_score: int
    match_reasons: List[str]
    eligibility: JobEligibility
    user_qualifications: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "title": self.title,
            "company": self.company,
            "type": self.job_type,
            "location": self.location,
            "matchScore": self.match_score,
            "matchReasons": list(self.match_reasons),
            "eligibility": self.eligibility.to_dict(),
            "userQualifications": self.user_qualifications,
        }


@dataclass
class UserMatch:
    """A candidate ranked for a job."""
    user_id: str
    name: str
    email: str
    match_score: int
    match_reasons: List[str]
    profile: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "matchScore": self.match_score,
            "matchReasons": list(self.match_reasons),
            "profile": self.profile,
        }


@dataclass
class DetailedMatchReason:
    """Typed explanation entry; ``score`` is illustrative, not summed."""
    type: str  # qualification, stream, experience, location or cgpa
    message: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "score": self.score}


@dataclass
class AdvancedJobMatch:
    """A job ranked by advanced matching with contextual bonuses."""
    job_id: str
    title: str
    company: str
    job_type: str
    location: str
    salary: Optional[str]
    stipend: Optional[str]
    base_match_score: int
    advanced_match_score: int
    match_reasons: List[DetailedMatchReason]
    application_deadline: Optional[datetime]
    posted_date: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "title": self.title,
            "company": self.company,
            "type": self.job_type,
            "location": self.location,
            "salary": self.salary,
            "stipend": self.stipend,
            "baseMatchScore": self.base_match_score,
            "advancedMatchScore": self.advanced_match_score,
            "matchReasons": [reason.to_dict() for reason in self.match_reasons],
            "applicationDeadline": _isoformat(self.application_deadline),
            "postedDate": _isoformat(self.posted_date),
        }


@dataclass
class MatchingStatistics:
    """Population-level snapshot of candidates and jobs."""
    total_users: int
    total_jobs: int
    average_match_score: float
    top_qualifications: List[str]
    top_streams: List[str]
    matching_efficiency: str
    last_updated: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalUsers": self.total_users,
            "totalJobs": self.total_jobs,
            "averageMatchScore": self.average_match_score,
            "topQualifications": list(self.top_qualifications),
            "topStreams": list(self.top_streams),
            "matchingEfficiency": self.matching_efficiency,
            "lastUpdated": self.last_updated.isoformat(),
        }


@dataclass
class RecommendationPreferences:
    """User preferences for job recommendations.

    Empty job type or location lists fall back to the full set.
    """
    preferred_job_types: List[str] = field(default_factory=lambda: list(JOB_TYPES))
    preferred_locations: List[str] = field(default_factory=lambda: list(JOB_LOCATIONS))
    min_match_score: float = DEFAULT_MIN_MATCH_SCORE
    max_results: int = DEFAULT_MAX_RECOMMENDATIONS

    def __post_init__(self):
        if not self.preferred_job_types:
            self.preferred_job_types = list(JOB_TYPES)
        if not self.preferred_locations:
            self.preferred_locations = list(JOB_LOCATIONS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preferredJobTypes": list(self.preferred_job_types),
            "preferredLocations": list(self.preferred_locations),
            "minMatchScore": self.min_match_score,
            "maxResults": self.max_results,
        }


@dataclass
class AdvancedMatchFilters:
    """Filters narrowing the job population for advanced matching.

    min_salary, max_salary and experience_level are accepted but do not
    narrow the population or change scores.
    """
    job_types: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    qualifications: List[str] = field(default_factory=list)
    streams: List[str] = field(default_factory=list)
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    experience_level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobTypes": list(self.job_types),
            "locations": list(self.locations),
            "qualifications": list(self.qualifications),
            "streams": list(self.streams),
            "minSalary": self.min_salary,
            "maxSalary": self.max_salary,
            "experienceLevel": self.experience_level,
        }


@dataclass
class AdvancedMatchOptions:
    """Pagination and sort order for advanced matching."""
    limit: int = DEFAULT_ADVANCED_LIMIT
    offset: int = 0
    sort_by: SortBy = SortBy.RELEVANCE

    def __post_init__(self):
        if not isinstance(self.sort_by, SortBy):
            self.sort_by = SortBy(self.sort_by)

    def to_dict(self) -> Dict[str, Any]:
        return {"limit": self.limit, "offset": self.offset, "sortBy": self.sort_by.value}
