"""Matcher module for scoring and ranking candidates against jobs."""

from .exceptions import MatchingError, ProfileNotFound, JobNotFound
from .models import (
    CandidateProfile,
    JobEligibility,
    Job,
    MatchScore,
    JobMatch,
    UserMatch,
    DetailedMatchReason,
    AdvancedJobMatch,
    MatchingStatistics,
    RecommendationPreferences,
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    SortBy,
)
from .fit_calculator import calculate_match_score, rank_matches
from .ranker import rank_jobs_for_candidate, rank_candidates_for_job
from .recommender import recommend_jobs
from .advanced import advanced_match, parse_salary
from .statistics import get_matching_statistics

__all__ = [
    "MatchingError",
    "ProfileNotFound",
    "JobNotFound",
    "CandidateProfile",
    "JobEligibility",
    "Job",
    "MatchScore",
    "JobMatch",
    "UserMatch",
    "DetailedMatchReason",
    "AdvancedJobMatch",
    "MatchingStatistics",
    "RecommendationPreferences",
    "AdvancedMatchFilters",
    "AdvancedMatchOptions",
    "SortBy",
    "calculate_match_score",
    "rank_matches",
    "rank_jobs_for_candidate",
    "rank_candidates_for_job",
    "recommend_jobs",
    "advanced_match",
    "parse_salary",
    "get_matching_statistics",
]
