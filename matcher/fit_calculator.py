"""Fit calculator for scoring candidate profiles against job eligibility."""

import logging
from typing import Any, Callable, List, TypeVar

from .models import CandidateProfile, JobEligibility, MatchScore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Criterion weights, evaluated in this order
QUALIFICATION_POINTS = 40
STREAM_POINTS = 30
PASSOUT_YEAR_POINTS = 20
PASSOUT_YEAR_NEAR_POINTS = 10
CGPA_POINTS = 10
PERFECT_MATCH_BONUS = 5

# A graduation year this far from the earliest accepted year earns partial credit
PASSOUT_YEAR_TOLERANCE = 1

MAX_MATCH_SCORE = (
    QUALIFICATION_POINTS + STREAM_POINTS + PASSOUT_YEAR_POINTS + CGPA_POINTS + PERFECT_MATCH_BONUS
)


def _format_number(value: float) -> str:
    return f"{value:g}"


def calculate_qualification_match(profile: CandidateProfile, eligibility: JobEligibility) -> bool:
    """True when the candidate's qualification is one the job accepts."""
    return bool(eligibility.qualifications) and profile.qualification in eligibility.qualifications


def calculate_stream_match(profile: CandidateProfile, eligibility: JobEligibility) -> bool:
    """True when the candidate's stream is one the job accepts."""
    return bool(eligibility.streams) and profile.stream in eligibility.streams


def calculate_passout_year_points(profile: CandidateProfile, eligibility: JobEligibility):
    """Return (points, reason) for the graduation year criterion."""
    year = profile.year_of_passout
    accepted = eligibility.passout_years

    if year is not None and year in accepted:
        return PASSOUT_YEAR_POINTS, "Graduation year matches job requirements"

    if year is not None and accepted and abs(year - min(accepted)) <= PASSOUT_YEAR_TOLERANCE:
        return PASSOUT_YEAR_NEAR_POINTS, "Graduation year is within acceptable range"

    return 0, "Graduation year does not match job requirements"


def calculate_cgpa_points(profile: CandidateProfile, eligibility: JobEligibility):
    """Return (points, reason) for the CGPA criterion.

    A job without a minimum counts as satisfied, and so does a candidate
    with no CGPA on record.
    """
    min_cgpa = eligibility.min_cgpa
    cgpa = profile.cgpa_or_percentage

    if min_cgpa is None:
        return CGPA_POINTS, "No CGPA requirement specified"

    if cgpa is None:
        return CGPA_POINTS, (
            f"No CGPA on record to compare with minimum requirement ({_format_number(min_cgpa)})"
        )

    if cgpa >= min_cgpa:
        return CGPA_POINTS, (
            f"CGPA ({_format_number(cgpa)}) meets minimum requirement ({_format_number(min_cgpa)})"
        )

    return 0, f"CGPA ({_format_number(cgpa)}) below minimum requirement ({_format_number(min_cgpa)})"


def calculate_match_score(profile: CandidateProfile, eligibility: JobEligibility) -> MatchScore:
    """Score a candidate against a job's eligibility rules.

    Criteria are evaluated as qualification, stream, graduation year, CGPA,
    each adding one reason, followed by the perfect-match bonus when the
    first three all earned full credit. The score is not clamped, so the
    range is 0 to MAX_MATCH_SCORE.
    """
    score = 0
    reasons: List[str] = []

    qualification_match = calculate_qualification_match(profile, eligibility)
    if qualification_match:
        score += QUALIFICATION_POINTS
        reasons.append("Qualification matches job requirements")
    else:
        reasons.append("Qualification does not match job requirements")

    stream_match = calculate_stream_match(profile, eligibility)
    if stream_match:
        score += STREAM_POINTS
        reasons.append("Academic stream matches job requirements")
    else:
        reasons.append("Academic stream does not match job requirements")

    year_points, year_reason = calculate_passout_year_points(profile, eligibility)
    score += year_points
    reasons.append(year_reason)
    year_match = year_points == PASSOUT_YEAR_POINTS

    cgpa_points, cgpa_reason = calculate_cgpa_points(profile, eligibility)
    score += cgpa_points
    reasons.append(cgpa_reason)

    if qualification_match and stream_match and year_match:
        score += PERFECT_MATCH_BONUS
        reasons.append("Perfect match bonus")

    logger.debug(
        f"Match score for candidate {profile.candidate_id}: "
        f"qual={qualification_match}, stream={stream_match}, "
        f"year={year_points}, cgpa={cgpa_points}, total={score}"
    )

    return MatchScore(score=score, reasons=reasons)


def rank_matches(
    matches: List[T],
    key: Callable[[T], Any] = lambda m: m.match_score,
    reverse: bool = True,
) -> List[T]:
    """Rank matches by score, highest first.

    The sort is stable, so matches with equal scores keep the order the
    population was fetched in.
    """
    return sorted(matches, key=key, reverse=reverse)
