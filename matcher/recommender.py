"""Preference-filtered job recommendations for a candidate."""

import logging
from datetime import datetime
from typing import List, Optional

from config.settings import MAX_MATCH_POPULATION
from database import get_profile, list_active_jobs

from .fit_calculator import rank_matches
from .models import CandidateProfile, Job, JobMatch, RecommendationPreferences
from .ranker import build_job_match

logger = logging.getLogger(__name__)


def recommend_jobs(
    candidate_id: str,
    preferences: Optional[RecommendationPreferences] = None,
    now: Optional[datetime] = None,
) -> List[JobMatch]:
    """Recommend open jobs that fit a candidate's preferences.

    Only active jobs of a preferred type and location whose application
    deadline is still ahead are considered. Results scoring below
    ``preferences.min_match_score`` are dropped. A candidate without a
    profile gets an empty list.
    """
    preferences = preferences or RecommendationPreferences()
    now = now or datetime.now()

    profile_data = get_profile(candidate_id)
    if not profile_data:
        logger.info(f"Candidate {candidate_id} has no profile yet, no recommendations")
        return []
    profile = CandidateProfile.from_dict(profile_data)

    jobs = list_active_jobs(
        job_types=preferences.preferred_job_types,
        locations=preferences.preferred_locations,
        deadline_after=now,
        limit=MAX_MATCH_POPULATION,
    )

    recommendations = []
    for job_data in jobs:
        match = build_job_match(profile, Job.from_dict(job_data))
        if match.match_score >= preferences.min_match_score:
            recommendations.append(match)

    ranked = rank_matches(recommendations)[:max(preferences.max_results, 0)]

    logger.info(
        f"Recommended {len(ranked)} of {len(jobs)} open jobs for candidate {candidate_id} "
        f"(min score {preferences.min_match_score})"
    )
    return ranked
