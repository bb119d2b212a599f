"""Example configuration file. Copy this to settings.py and adjust values."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent


def _get_int_env(key: str, default: int) -> int:
    """Safely get integer from environment variable."""
    try:
        value = os.getenv(key)
        if value is None:
            return default
        return int(value)
    except (ValueError, TypeError):
        logging.warning(f"Invalid value for {key}, using default: {default}")
        return default


def _get_float_env(key: str, default: float) -> float:
    """Safely get float from environment variable."""
    try:
        value = os.getenv(key)
        if value is None:
            return default
        return float(value)
    except (ValueError, TypeError):
        logging.warning(f"Invalid value for {key}, using default: {default}")
        return default


# Database settings
DATABASE_PATH = os.getenv("DATABASE_PATH", str(BASE_DIR / "data" / "campus_match.db"))

# Result size defaults for each matching operation
DEFAULT_CANDIDATE_MATCH_LIMIT = _get_int_env("DEFAULT_CANDIDATE_MATCH_LIMIT", 20)
DEFAULT_JOB_MATCH_LIMIT = _get_int_env("DEFAULT_JOB_MATCH_LIMIT", 50)
DEFAULT_ADVANCED_LIMIT = _get_int_env("DEFAULT_ADVANCED_LIMIT", 20)

# Recommendation defaults
DEFAULT_MIN_MATCH_SCORE = _get_float_env("DEFAULT_MIN_MATCH_SCORE", 40)
DEFAULT_MAX_RECOMMENDATIONS = _get_int_env("DEFAULT_MAX_RECOMMENDATIONS", 15)

# Upper bound on how many jobs a single ranking call will load and score
MAX_MATCH_POPULATION = _get_int_env("MAX_MATCH_POPULATION", 5000)

# Postings newer than this many days earn the recency bonus in advanced matching
RECENT_POSTING_DAYS = _get_int_env("RECENT_POSTING_DAYS", 7)

# Enumerations accepted by job postings; qualifications and streams are free text
JOB_TYPES = ["job", "internship"]
JOB_LOCATIONS = ["remote", "onsite", "hybrid"]

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
VERBOSE = os.getenv("VERBOSE", "false").lower() == "true"
