"""Flask web application exposing the matching engine as a JSON API."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from config.settings import (
    DEFAULT_ADVANCED_LIMIT,
    DEFAULT_CANDIDATE_MATCH_LIMIT,
    DEFAULT_JOB_MATCH_LIMIT,
    DEFAULT_MAX_RECOMMENDATIONS,
    DEFAULT_MIN_MATCH_SCORE,
    JOB_LOCATIONS,
    JOB_TYPES,
)
from database import get_job, get_profile
from matcher import (
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    JobNotFound,
    ProfileNotFound,
    RecommendationPreferences,
    SortBy,
    advanced_match,
    get_matching_statistics,
    rank_candidates_for_job,
    rank_jobs_for_candidate,
    recommend_jobs,
)

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

MAX_PAGE_SIZE = 100


class InvalidRequest(ValueError):
    """Request parameters failed validation."""


def _parse_int(value: Any, name: str, default: int, minimum: int = 0, maximum: Optional[int] = None) -> int:
    if value is None or value == '':
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"'{name}' must be an integer")
    if number < minimum or (maximum is not None and number > maximum):
        raise InvalidRequest(f"'{name}' is out of range")
    return number


def _parse_number(value: Any, name: str, default: Optional[float], minimum: float = 0, maximum: Optional[float] = None) -> Optional[float]:
    if value is None or value == '':
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"'{name}' must be a number")
    if number < minimum or (maximum is not None and number > maximum):
        raise InvalidRequest(f"'{name}' is out of range")
    return number


def _parse_string_list(payload: Dict[str, Any], name: str, allowed: Optional[List[str]] = None) -> List[str]:
    value = payload.get(name)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidRequest(f"'{name}' must be a list of strings")
    if allowed is not None:
        invalid = [item for item in value if item not in allowed]
        if invalid:
            raise InvalidRequest(f"'{name}' has invalid values: {', '.join(invalid)}")
    return value


def _require_candidate_id(source: Dict[str, Any]) -> str:
    candidate_id = str(source.get('candidate_id') or '').strip()
    if not candidate_id:
        raise InvalidRequest("'candidate_id' is required")
    return candidate_id


def _error(message: str, status: int):
    return jsonify({
        'success': False,
        'error': message
    }), status


@app.route('/api/matching/jobs', methods=['GET'])
def api_matching_jobs():
    """Rank active jobs for a candidate."""
    try:
        candidate_id = _require_candidate_id(request.args)
        limit = _parse_int(request.args.get('limit'), 'limit', DEFAULT_CANDIDATE_MATCH_LIMIT, 1, MAX_PAGE_SIZE)

        matches = rank_jobs_for_candidate(candidate_id, limit)
        logger.info(f"Matching jobs retrieved for {candidate_id}: {len(matches)}")

        return jsonify({
            'success': True,
            'candidate_id': candidate_id,
            'count': len(matches),
            'matches': [m.to_dict() for m in matches]
        })
    except InvalidRequest as e:
        return _error(str(e), 400)
    except ProfileNotFound as e:
        return _error(str(e), 404)
    except Exception as e:
        logger.error(f"Error in api_matching_jobs: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/matching/jobs/<job_id>/candidates', methods=['GET'])
def api_matching_candidates(job_id: str):
    """Rank candidates for a job."""
    try:
        limit = _parse_int(request.args.get('limit'), 'limit', DEFAULT_JOB_MATCH_LIMIT, 1, MAX_PAGE_SIZE)

        matches = rank_candidates_for_job(job_id, limit)
        logger.info(f"Matching candidates retrieved for job {job_id}: {len(matches)}")

        return jsonify({
            'success': True,
            'job_id': job_id,
            'count': len(matches),
            'matches': [m.to_dict() for m in matches]
        })
    except InvalidRequest as e:
        return _error(str(e), 400)
    except JobNotFound as e:
        return _error(str(e), 404)
    except Exception as e:
        logger.error(f"Error in api_matching_candidates: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/matching/recommendations', methods=['POST'])
def api_recommendations():
    """Personalized job recommendations."""
    try:
        data = request.get_json(silent=True) or {}
        candidate_id = _require_candidate_id(data)
        preferences = RecommendationPreferences(
            preferred_job_types=_parse_string_list(data, 'preferredJobTypes', JOB_TYPES),
            preferred_locations=_parse_string_list(data, 'preferredLocations', JOB_LOCATIONS),
            min_match_score=_parse_number(data.get('minMatchScore'), 'minMatchScore', DEFAULT_MIN_MATCH_SCORE, 0, 100),
            max_results=_parse_int(data.get('maxResults'), 'maxResults', DEFAULT_MAX_RECOMMENDATIONS, 1, MAX_PAGE_SIZE),
        )

        recommendations = recommend_jobs(candidate_id, preferences)
        logger.info(f"Recommendations retrieved for {candidate_id}: {len(recommendations)}")

        return jsonify({
            'success': True,
            'candidate_id': candidate_id,
            'count': len(recommendations),
            'recommendations': [r.to_dict() for r in recommendations],
            'preferences': preferences.to_dict()
        })
    except InvalidRequest as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.error(f"Error in api_recommendations: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/matching/advanced', methods=['POST'])
def api_advanced_matching():
    """Advanced matching with filters, pagination and sort order."""
    try:
        data = request.get_json(silent=True) or {}
        candidate_id = _require_candidate_id(data)

        experience_level = data.get('experienceLevel')
        if experience_level is not None and not isinstance(experience_level, str):
            raise InvalidRequest("'experienceLevel' must be a string")

        filters = AdvancedMatchFilters(
            job_types=_parse_string_list(data, 'jobTypes', JOB_TYPES),
            locations=_parse_string_list(data, 'locations', JOB_LOCATIONS),
            qualifications=_parse_string_list(data, 'qualifications'),
            streams=_parse_string_list(data, 'streams'),
            min_salary=_parse_number(data.get('minSalary'), 'minSalary', None),
            max_salary=_parse_number(data.get('maxSalary'), 'maxSalary', None),
            experience_level=experience_level,
        )

        sort_by = data.get('sortBy') or SortBy.RELEVANCE.value
        if sort_by not in [s.value for s in SortBy]:
            raise InvalidRequest(f"'sortBy' must be one of: {', '.join(s.value for s in SortBy)}")

        options = AdvancedMatchOptions(
            limit=_parse_int(data.get('limit'), 'limit', DEFAULT_ADVANCED_LIMIT, 1, MAX_PAGE_SIZE),
            offset=_parse_int(data.get('offset'), 'offset', 0, 0),
            sort_by=SortBy(sort_by),
        )

        matches = advanced_match(candidate_id, filters, options)
        logger.info(f"Advanced matching retrieved for {candidate_id}: {len(matches)}")

        return jsonify({
            'success': True,
            'candidate_id': candidate_id,
            'count': len(matches),
            'matches': [m.to_dict() for m in matches],
            'filters': filters.to_dict(),
            'options': options.to_dict()
        })
    except InvalidRequest as e:
        return _error(str(e), 400)
    except ProfileNotFound as e:
        return _error(str(e), 404)
    except Exception as e:
        logger.error(f"Error in api_advanced_matching: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/matching/stats', methods=['GET'])
def api_matching_stats():
    """Get matching statistics."""
    try:
        stats = get_matching_statistics()
        return jsonify({
            'success': True,
            'stats': stats.to_dict()
        })
    except Exception as e:
        logger.error(f"Error in api_matching_stats: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/jobs/<job_id>', methods=['GET'])
def api_get_job(job_id: str):
    """Get a single job by ID."""
    try:
        job = get_job(job_id)
        if job:
            return jsonify({
                'success': True,
                'job': job
            })
        return _error('Job not found', 404)
    except Exception as e:
        logger.error(f"Error in api_get_job: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/profiles/<candidate_id>', methods=['GET'])
def api_get_profile(candidate_id: str):
    """Get a candidate profile by user ID."""
    try:
        profile = get_profile(candidate_id)
        if profile:
            return jsonify({
                'success': True,
                'profile': profile
            })
        return _error('Profile not found', 404)
    except Exception as e:
        logger.error(f"Error in api_get_profile: {e}", exc_info=True)
        return _error(str(e), 500)


@app.route('/api/health', methods=['GET'])
def api_health():
    """Liveness check."""
    return jsonify({
        'success': True,
        'timestamp': datetime.now().isoformat()
    })


def run_web_server(host='127.0.0.1', port=5000, debug=False):
    """Run the Flask web server."""
    logger.info(f"Starting web server on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)
