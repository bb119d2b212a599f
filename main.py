"""Main application for the campus job matcher."""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Import modules
from database import init_database, add_user, add_profile, add_job, deactivate_expired_jobs
from matcher import (
    JobNotFound,
    ProfileNotFound,
    get_matching_statistics,
    rank_candidates_for_job,
    rank_jobs_for_candidate,
    recommend_jobs,
)
from config.settings import (
    DEFAULT_CANDIDATE_MATCH_LIMIT,
    DEFAULT_JOB_MATCH_LIMIT,
    LOG_LEVEL,
    VERBOSE,
)


def setup_logging(verbose: bool = False):
    """Configure logging level."""
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    if verbose:
        logger.info("Verbose logging enabled")


def import_from_json(json_path: str) -> tuple[int, int]:
    """Import candidates (user + profile) and jobs from a JSON seed file.

    Expected layout::

        {"candidates": [{"name": ..., "email": ..., "profile": {...}}],
         "jobs": [{"title": ..., "eligibility": {...}, ...}]}
    """
    path = Path(json_path)
    if not path.exists():
        logger.error(f"JSON file not found: {json_path}")
        return 0, 0

    with path.open('r', encoding='utf-8') as fp:
        data = json.load(fp)

    candidates_added = 0
    for i, candidate in enumerate(data.get('candidates', []), 1):
        user_id = add_user(candidate.get('name', ''), candidate.get('email', ''), candidate.get('user_id'))
        if not user_id:
            logger.warning(f"Candidate {i}: could not create user {candidate.get('email')}, skipping")
            continue
        profile = candidate.get('profile')
        if profile and add_profile(user_id, profile):
            candidates_added += 1

    jobs_added = 0
    for job in data.get('jobs', []):
        if add_job(job):
            jobs_added += 1

    logger.info(f"JSON import complete: {candidates_added} candidates, {jobs_added} jobs")
    return candidates_added, jobs_added


def print_candidate_matches(candidate_id: str, limit: int = DEFAULT_CANDIDATE_MATCH_LIMIT):
    """Log the ranked jobs for a candidate."""
    matches = rank_jobs_for_candidate(candidate_id, limit)
    logger.info("=" * 50)
    logger.info(f"Top {len(matches)} jobs for candidate {candidate_id}")
    logger.info("=" * 50)
    for i, match in enumerate(matches, 1):
        logger.info(f"  {i}. {match.title} at {match.company or 'Unknown'} "
                    f"[{match.job_type}, {match.location}] (Score: {match.match_score})")


def print_job_matches(job_id: str, limit: int = DEFAULT_JOB_MATCH_LIMIT):
    """Log the ranked candidates for a job."""
    matches = rank_candidates_for_job(job_id, limit)
    logger.info("=" * 50)
    logger.info(f"Top {len(matches)} candidates for job {job_id}")
    logger.info("=" * 50)
    for i, match in enumerate(matches, 1):
        logger.info(f"  {i}. {match.name} <{match.email}> (Score: {match.match_score})")


def print_recommendations(candidate_id: str):
    """Log default-preference recommendations for a candidate."""
    recommendations = recommend_jobs(candidate_id)
    if not recommendations:
        logger.info(f"No recommendations for candidate {candidate_id}")
        return
    logger.info(f"Recommendations for candidate {candidate_id}:")
    for i, match in enumerate(recommendations, 1):
        logger.info(f"  {i}. {match.title} at {match.company or 'Unknown'} (Score: {match.match_score})")


def export_to_csv(candidate_id: str, output_path: str = "data/exports/job_matches.csv",
                  limit: int = DEFAULT_CANDIDATE_MATCH_LIMIT) -> bool:
    """Export a candidate's ranked jobs to CSV."""
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Exporting matches for candidate {candidate_id} to {output_path}...")

    matches = rank_jobs_for_candidate(candidate_id, limit)
    if not matches:
        logger.warning("No matches to export")
        return False

    fieldnames = ['jobId', 'title', 'company', 'type', 'location', 'matchScore', 'matchReasons']

    with open(output_file, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames, extrasaction='ignore')
        writer.writeheader()
        for match in matches:
            row: Dict[str, Any] = match.to_dict()
            row['matchReasons'] = '; '.join(row['matchReasons'])
            writer.writerow(row)

    logger.info(f"Exported {len(matches)} matches to {output_path}")
    return True


def print_summary():
    """Print matching statistics."""
    try:
        stats = get_matching_statistics()
    except Exception as e:
        logger.error(f"Error printing summary: {e}")
        return

    logger.info("=" * 50)
    logger.info("Matching Summary")
    logger.info("=" * 50)
    logger.info(f"Candidate profiles: {stats.total_users}")
    logger.info(f"Active jobs: {stats.total_jobs}")
    logger.info(f"Top qualifications: {', '.join(stats.top_qualifications) or '-'}")
    logger.info(f"Top streams: {', '.join(stats.top_streams) or '-'}")
    logger.info("=" * 50)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Campus job matcher: rank jobs and candidates by eligibility fit'
    )
    parser.add_argument(
        '--import-json',
        type=str,
        default=None,
        help='Import candidates and jobs from a JSON seed file'
    )
    parser.add_argument(
        '--candidate',
        type=str,
        default=None,
        help='Rank active jobs for this candidate (user ID)'
    )
    parser.add_argument(
        '--job',
        type=str,
        default=None,
        help='Rank candidates for this job ID'
    )
    parser.add_argument(
        '--recommend',
        type=str,
        default=None,
        help='Show recommendations for this candidate (user ID)'
    )
    parser.add_argument(
        '--limit',
        type=int,
        default=None,
        help='Maximum number of results to show'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print matching statistics'
    )
    parser.add_argument(
        '--export',
        type=str,
        default=None,
        metavar='PATH',
        help='Export the --candidate matches to a CSV file'
    )
    parser.add_argument(
        '--expire',
        action='store_true',
        help='Deactivate jobs whose application deadline has passed'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--web',
        action='store_true',
        help='Start the JSON API server'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=5000,
        help='Port for web server (default: 5000)'
    )

    args = parser.parse_args()

    setup_logging(args.verbose or VERBOSE)

    logger.info("Campus job matcher starting...")

    try:
        init_database()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

    if args.import_json:
        import_from_json(args.import_json)

    if args.expire:
        expired = deactivate_expired_jobs()
        logger.info(f"Deactivated {expired} expired jobs")

    try:
        if args.candidate:
            if args.export:
                export_to_csv(args.candidate, args.export, args.limit or DEFAULT_CANDIDATE_MATCH_LIMIT)
            else:
                print_candidate_matches(args.candidate, args.limit or DEFAULT_CANDIDATE_MATCH_LIMIT)
        elif args.export:
            logger.warning("--export requires --candidate")

        if args.job:
            print_job_matches(args.job, args.limit or DEFAULT_JOB_MATCH_LIMIT)

        if args.recommend:
            print_recommendations(args.recommend)
    except (ProfileNotFound, JobNotFound) as e:
        logger.error(str(e))
        sys.exit(1)

    if args.stats:
        print_summary()

    if args.web:
        from webapp.app import run_web_server
        logger.info("Starting web server...")
        run_web_server(host='127.0.0.1', port=args.port, debug=args.verbose)
    else:
        logger.info("Tool execution complete")


if __name__ == "__main__":
    main()
