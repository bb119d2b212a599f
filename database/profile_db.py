"""Database operations for users and candidate profiles."""

import logging
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any

from database.job_db import get_db_connection, to_iso, _placeholders

logger = logging.getLogger(__name__)

PROFILE_SELECT = """
    SELECT
        p.user_id AS candidate_id,
        u.name AS name,
        u.email AS email,
        p.first_name, p.last_name,
        p.qualification, p.stream, p.year_of_passout,
        p.cgpa_or_percentage, p.college_name,
        p.created_at, p.updated_at
    FROM candidate_profiles p
    JOIN users u ON u.user_id = p.user_id
"""

# Profile columns that may be grouped on for population statistics
DISTRIBUTION_FIELDS = {'qualification', 'stream', 'year_of_passout'}


def add_user(name: str, email: str, user_id: Optional[str] = None) -> Optional[str]:
    """Create a user account record, returning its user_id."""
    user_id = user_id or uuid.uuid4().hex
    try:
        with get_db_connection() as conn:
            conn.execute(
                "INSERT INTO users (user_id, name, email, created_at) VALUES (?, ?, ?, ?)",
                (user_id, name, email, to_iso(datetime.now())),
            )
            return user_id
    except Exception as e:
        logger.error(f"Failed to add user {email}: {e}")
        return None


def add_profile(user_id: str, profile_data: Dict[str, Any]) -> bool:
    """Create or replace the candidate profile owned by a user."""
    now = to_iso(datetime.now())
    try:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT OR REPLACE INTO candidate_profiles (
                    user_id, first_name, last_name, qualification, stream,
                    year_of_passout, cgpa_or_percentage, college_name,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                profile_data.get('first_name'),
                profile_data.get('last_name'),
                profile_data.get('qualification'),
                profile_data.get('stream'),
                profile_data.get('year_of_passout'),
                profile_data.get('cgpa_or_percentage'),
                profile_data.get('college_name'),
                to_iso(profile_data.get('created_at')) or now,
                now,
            ))
            return cursor.rowcount > 0
    except Exception as e:
        logger.error(f"Failed to add profile for user {user_id}: {e}")
        return False


def get_profile(candidate_id: str) -> Optional[Dict[str, Any]]:
    """Get a candidate profile, joined with its owning user, by user ID."""
    with get_db_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(PROFILE_SELECT + " WHERE p.user_id = ?", (candidate_id,))
        row = cursor.fetchone()
        if row:
            return dict(row)
        return None


def list_candidate_profiles(
    qualifications: Optional[List[str]] = None,
    streams: Optional[List[str]] = None,
    passout_years: Optional[List[int]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Get candidate profiles matching coarse eligibility predicates.

    Each non-empty list restricts the corresponding profile field to its
    values; empty or missing lists apply no restriction. ``limit`` is the
    pool size hint.
    """
    query = PROFILE_SELECT + " WHERE 1=1"
    params: List[Any] = []

    if qualifications:
        query += f" AND p.qualification IN ({_placeholders(qualifications)})"
        params.extend(qualifications)

    if streams:
        query += f" AND p.stream IN ({_placeholders(streams)})"
        params.extend(streams)

    if passout_years:
        query += f" AND p.year_of_passout IN ({_placeholders(passout_years)})"
        params.extend(passout_years)

    query += " ORDER BY p.rowid"

    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)

    with get_db_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]


def count_candidate_profiles() -> int:
    """Count all candidate profiles."""
    with get_db_connection() as conn:
        row = conn.execute("SELECT COUNT(*) FROM candidate_profiles").fetchone()
        return row[0]


def get_field_distribution(field: str, limit: int = 5) -> List[Dict[str, Any]]:
    """Most frequent values of a profile field, by count descending then value."""
    if field not in DISTRIBUTION_FIELDS:
        raise ValueError(f"Cannot group candidate profiles by '{field}'")

    with get_db_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(f"""
            SELECT {field} AS value, COUNT(*) AS count
            FROM candidate_profiles
            WHERE {field} IS NOT NULL
            GROUP BY {field}
            ORDER BY count DESC, value ASC
            LIMIT ?
        """, (limit,))
        return [dict(row) for row in cursor.fetchall()]
