"""Advanced job matching with filters, contextual bonuses and sort orders."""

import logging
import re
from datetime import datetime
from typing import List, Optional

from config.settings import RECENT_POSTING_DAYS
from database import list_active_jobs

from .fit_calculator import calculate_match_score, rank_matches
from .models import (
    AdvancedJobMatch,
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    CandidateProfile,
    DetailedMatchReason,
    Job,
    SortBy,
)
from .ranker import load_candidate_profile

logger = logging.getLogger(__name__)

# Contextual bonuses on top of the base match score
QUALIFICATION_FILTER_BONUS = 10
LOCATION_FILTER_BONUS = 5
RECENT_POSTING_BONUS = 3

MAX_ADVANCED_SCORE = 100

# Graduates within this many years count as recent
RECENT_GRADUATE_YEARS = 2

_SALARY_NUMBER = re.compile(r"\d+")


def parse_salary(salary: Optional[str]) -> int:
    """Best-effort numeric value of a free-text salary.

    Takes the first integer in the text once thousands separators are
    removed, so "50,000 - 60,000" gives 50000 and "₹15-25 LPA" gives 15.
    Missing or non-numeric salaries give 0.
    """
    if not salary:
        return 0
    match = _SALARY_NUMBER.search(str(salary).replace(",", ""))
    return int(match.group()) if match else 0


def is_recent_posting(job: Job, now: datetime) -> bool:
    if job.created_at is None:
        return False
    return (now - job.created_at).days <= RECENT_POSTING_DAYS


def calculate_advanced_score(
    base_score: int,
    job: Job,
    filters: AdvancedMatchFilters,
    now: datetime,
) -> int:
    """Add contextual bonuses to a base match score, clamped to 0-100."""
    score = base_score

    if filters.qualifications and set(job.eligibility.qualifications) & set(filters.qualifications):
        score += QUALIFICATION_FILTER_BONUS

    if filters.locations and job.location in filters.locations:
        score += LOCATION_FILTER_BONUS

    if is_recent_posting(job, now):
        score += RECENT_POSTING_BONUS

    return max(0, min(MAX_ADVANCED_SCORE, score))


def generate_detailed_match_reasons(
    profile: CandidateProfile,
    job: Job,
    now: datetime,
) -> List[DetailedMatchReason]:
    """Typed explanations for the UI breakdown.

    These annotate the match; their scores are illustrative and do not add
    up to the numeric match score.
    """
    reasons: List[DetailedMatchReason] = []
    eligibility = job.eligibility

    if profile.qualification and profile.qualification in eligibility.qualifications:
        reasons.append(DetailedMatchReason(
            type="qualification",
            message=f"Your {profile.qualification} qualification matches the job requirements",
            score=25,
        ))

    if profile.stream and profile.stream in eligibility.streams:
        reasons.append(DetailedMatchReason(
            type="stream",
            message=f"Your {profile.stream} stream is exactly what they're looking for",
            score=20,
        ))

    if profile.year_of_passout is not None:
        years_since = now.year - profile.year_of_passout
        if years_since < 0:
            reasons.append(DetailedMatchReason(
                type="experience",
                message=f"Graduating in {profile.year_of_passout}",
                score=15,
            ))
        elif years_since <= RECENT_GRADUATE_YEARS:
            plural = "" if years_since == 1 else "s"
            reasons.append(DetailedMatchReason(
                type="experience",
                message=f"Recent graduate ({years_since} year{plural} experience)",
                score=15,
            ))

    if job.location == "remote":
        reasons.append(DetailedMatchReason(
            type="location",
            message="Remote work available - flexible location",
            score=10,
        ))

    cgpa = profile.cgpa_or_percentage
    if eligibility.min_cgpa is not None and cgpa is not None and cgpa >= eligibility.min_cgpa:
        reasons.append(DetailedMatchReason(
            type="cgpa",
            message=f"Your CGPA of {cgpa:g} clears the minimum of {eligibility.min_cgpa:g}",
            score=10,
        ))

    return reasons


def sort_advanced_matches(matches: List[AdvancedJobMatch], sort_by: SortBy) -> List[AdvancedJobMatch]:
    if sort_by == SortBy.DATE:
        return rank_matches(matches, key=lambda m: m.posted_date or datetime.min)
    if sort_by == SortBy.SALARY:
        return rank_matches(matches, key=lambda m: parse_salary(m.salary))
    return rank_matches(matches, key=lambda m: m.advanced_match_score)


def advanced_match(
    candidate_id: str,
    filters: Optional[AdvancedMatchFilters] = None,
    options: Optional[AdvancedMatchOptions] = None,
    now: Optional[datetime] = None,
) -> List[AdvancedJobMatch]:
    """Score a filtered, paginated page of open jobs for a candidate.

    Pagination is applied to the filtered population before scoring, so the
    ordering is relative to the requested page only.

    Raises:
        ProfileNotFound: the candidate has no profile.
    """
    filters = filters or AdvancedMatchFilters()
    options = options or AdvancedMatchOptions()
    now = now or datetime.now()

    profile = load_candidate_profile(candidate_id)

    if filters.min_salary is not None or filters.max_salary is not None or filters.experience_level:
        logger.info(
            "Salary range and experience level filters are accepted but not applied "
            f"(min_salary={filters.min_salary}, max_salary={filters.max_salary}, "
            f"experience_level={filters.experience_level})"
        )

    jobs = list_active_jobs(
        job_types=filters.job_types or None,
        locations=filters.locations or None,
        qualifications=filters.qualifications or None,
        streams=filters.streams or None,
        deadline_after=now,
        limit=max(options.limit, 0),
        offset=max(options.offset, 0),
    )

    matches: List[AdvancedJobMatch] = []
    for job_data in jobs:
        job = Job.from_dict(job_data)
        base_score = calculate_match_score(profile, job.eligibility).score
        matches.append(AdvancedJobMatch(
            job_id=job.job_id,
            title=job.title,
            company=job.company or "Unknown Company",
            job_type=job.job_type,
            location=job.location,
            salary=job.salary,
            stipend=job.stipend,
            base_match_score=base_score,
            advanced_match_score=calculate_advanced_score(base_score, job, filters, now),
            match_reasons=generate_detailed_match_reasons(profile, job, now),
            application_deadline=job.application_deadline,
            posted_date=job.created_at,
        ))

    ranked = sort_advanced_matches(matches, options.sort_by)

    logger.info(
        f"Advanced matching for candidate {candidate_id}: {len(ranked)} jobs "
        f"(offset {options.offset}, sorted by {options.sort_by.value})"
    )
    return ranked
