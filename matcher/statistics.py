"""Population-level matching statistics."""

import logging
from datetime import datetime
from typing import Optional

from database import count_active_jobs, count_candidate_profiles, get_field_distribution

from .models import MatchingStatistics

logger = logging.getLogger(__name__)

TOP_VALUES_LIMIT = 5

# Placeholders until match results are logged; not derived from data
PLACEHOLDER_AVERAGE_MATCH_SCORE = 75
PLACEHOLDER_MATCHING_EFFICIENCY = "high"


def get_matching_statistics(now: Optional[datetime] = None) -> MatchingStatistics:
    """Summarize the candidate and job populations."""
    total_users = count_candidate_profiles()
    total_jobs = count_active_jobs()

    top_qualifications = [row['value'] for row in get_field_distribution('qualification', TOP_VALUES_LIMIT)]
    top_streams = [row['value'] for row in get_field_distribution('stream', TOP_VALUES_LIMIT)]

    logger.info(f"Matching statistics: {total_users} candidates, {total_jobs} active jobs")

    return MatchingStatistics(
        total_users=total_users,
        total_jobs=total_jobs,
        average_match_score=PLACEHOLDER_AVERAGE_MATCH_SCORE,
        top_qualifications=top_qualifications,
        top_streams=top_streams,
        matching_efficiency=PLACEHOLDER_MATCHING_EFFICIENCY,
        last_updated=now or datetime.now(),
    )
