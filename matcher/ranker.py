"""Rank jobs for a candidate and candidates for a job."""

import logging
from typing import Any, Dict, List

from config.settings import DEFAULT_CANDIDATE_MATCH_LIMIT, DEFAULT_JOB_MATCH_LIMIT, MAX_MATCH_POPULATION
from database import get_job, get_profile, list_active_jobs, list_candidate_profiles

from .exceptions import JobNotFound, ProfileNotFound
from .fit_calculator import calculate_match_score, rank_matches
from .models import CandidateProfile, Job, JobEligibility, JobMatch, UserMatch

logger = logging.getLogger(__name__)


def load_candidate_profile(candidate_id: str) -> CandidateProfile:
    """Fetch a candidate's profile or raise ProfileNotFound."""
    profile_data = get_profile(candidate_id)
    if not profile_data:
        logger.warning(f"No profile on record for candidate {candidate_id}")
        raise ProfileNotFound(candidate_id)
    return CandidateProfile.from_dict(profile_data)


def build_job_match(profile: CandidateProfile, job: Job) -> JobMatch:
    """Score one job for a candidate and wrap it with display fields."""
    result = calculate_match_score(profile, job.eligibility)
    return JobMatch(
        job_id=job.job_id,
        title=job.title,
        company=job.company,
        job_type=job.job_type,
        location=job.location,
        match_score=result.score,
        match_reasons=result.reasons,
        eligibility=job.eligibility,
        user_qualifications=profile.qualification_snapshot(),
    )


def rank_jobs_for_candidate(
    candidate_id: str,
    limit: int = DEFAULT_CANDIDATE_MATCH_LIMIT,
) -> List[JobMatch]:
    """Rank every active job for a candidate.

    Zero-score jobs stay in the result; callers decide whether to show them.

    Raises:
        ProfileNotFound: the candidate has no profile.
    """
    profile = load_candidate_profile(candidate_id)

    jobs = list_active_jobs(limit=MAX_MATCH_POPULATION)
    if len(jobs) >= MAX_MATCH_POPULATION:
        logger.warning(
            f"Active job population reached the cap of {MAX_MATCH_POPULATION}; "
            "older postings were not scored"
        )

    matches = [build_job_match(profile, Job.from_dict(job)) for job in jobs]
    ranked = rank_matches(matches)[:max(limit, 0)]

    logger.info(
        f"Ranked {len(matches)} active jobs for candidate {candidate_id}, "
        f"returning {len(ranked)}"
    )
    return ranked


def _candidate_pool_filters(eligibility: JobEligibility) -> Dict[str, Any]:
    """Storage-level predicate for the candidate pool of a job."""
    return {
        'qualifications': eligibility.qualifications,
        'streams': eligibility.streams,
        'passout_years': eligibility.passout_years,
    }


def rank_candidates_for_job(
    job_id: str,
    limit: int = DEFAULT_JOB_MATCH_LIMIT,
) -> List[UserMatch]:
    """Rank candidate profiles for a job.

    The pool is pre-filtered on qualification, stream and graduation year
    and holds at most twice ``limit`` profiles. Candidates below the job's
    minimum CGPA are dropped before scoring; only positive scores are kept.

    Raises:
        JobNotFound: the job id does not resolve.
    """
    job_data = get_job(job_id)
    if not job_data:
        logger.warning(f"Job {job_id} not found")
        raise JobNotFound(job_id)

    job = Job.from_dict(job_data)
    eligibility = job.eligibility
    limit = max(limit, 0)

    pool = list_candidate_profiles(limit=limit * 2, **_candidate_pool_filters(eligibility))

    matches: List[UserMatch] = []
    skipped_cgpa = 0
    for profile_data in pool:
        profile = CandidateProfile.from_dict(profile_data)

        if (
            eligibility.min_cgpa is not None
            and profile.cgpa_or_percentage is not None
            and profile.cgpa_or_percentage < eligibility.min_cgpa
        ):
            skipped_cgpa += 1
            continue

        result = calculate_match_score(profile, eligibility)
        if result.score <= 0:
            continue

        matches.append(UserMatch(
            user_id=profile.candidate_id,
            name=profile.name,
            email=profile.email,
            match_score=result.score,
            match_reasons=result.reasons,
            profile=profile.qualification_snapshot(),
        ))

    ranked = rank_matches(matches)[:limit]

    logger.info(
        f"Ranked {len(pool)} candidates for job {job_id} "
        f"({skipped_cgpa} below minimum CGPA), returning {len(ranked)}"
    )
    return ranked
