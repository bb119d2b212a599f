"""Database operations for job postings."""

import json
import sqlite3
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterable
from contextlib import contextmanager
from fasteners import InterProcessLock

from config.settings import DATABASE_PATH
from database.models import USERS_SCHEMA, CANDIDATE_PROFILES_SCHEMA, JOBS_SCHEMA, CREATE_INDEXES

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


JSON_LIST_FIELDS = ('qualifications', 'streams', 'passout_years')


@contextmanager
def get_db_connection():
    """Context manager for database connections with WAL and locking."""
    conn = None
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    lock = InterProcessLock(str(db_path.with_suffix('.lock')))
    lock.acquire()
    try:
        conn = sqlite3.connect(str(db_path), timeout=30.0, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA journal_mode=WAL;')
        conn.execute('PRAGMA busy_timeout = 30000;')
        conn.execute('BEGIN IMMEDIATE;')

        yield conn
        conn.commit()
    except Exception as e:
        if conn:
            conn.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        if conn:
            conn.close()
        lock.release()


def init_database():
    """Initialize the database with tables and indexes."""
    try:
        with get_db_connection() as conn:
            conn.executescript(USERS_SCHEMA)
            conn.executescript(CANDIDATE_PROFILES_SCHEMA)
            conn.executescript(JOBS_SCHEMA)
            conn.executescript(CREATE_INDEXES)
            logger.info(f"Database initialized at {DATABASE_PATH}")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a datetime or ISO 8601 string into a naive local datetime.

    Both ``T`` and space separators are accepted. Values carrying a UTC
    offset are converted to local time. Raises ValueError for text that is
    not a timestamp.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def to_iso(value: Any) -> Optional[str]:
    """Normalize a timestamp for TIMESTAMP storage.

    Stored values share one text layout so SQL comparisons order them
    chronologically.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.isoformat(timespec='seconds')


def _placeholders(values: Iterable[Any]) -> str:
    return ', '.join('?' for _ in values)


def _row_to_job(row: sqlite3.Row) -> Dict[str, Any]:
    """Convert a jobs row into a job dict with a nested eligibility block."""
    job = dict(row)
    eligibility = {}
    for field in JSON_LIST_FIELDS:
        raw = job.pop(field, None)
        try:
            eligibility[field] = json.loads(raw) if raw else []
        except json.JSONDecodeError:
            logger.warning(f"Malformed {field} for job {job.get('job_id')}: {raw!r}")
            eligibility[field] = []
    eligibility['min_cgpa'] = job.pop('min_cgpa', None)
    job['eligibility'] = eligibility
    job['is_active'] = bool(job.get('is_active'))
    return job


def _flatten_eligibility(job_data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a nested eligibility block into storable column values."""
    flat = {k: v for k, v in job_data.items() if k != 'eligibility'}
    eligibility = job_data.get('eligibility') or {}
    for field in JSON_LIST_FIELDS:
        if field in eligibility:
            flat[field] = eligibility[field]
    if 'min_cgpa' in eligibility:
        flat['min_cgpa'] = eligibility['min_cgpa']
    for field in JSON_LIST_FIELDS:
        if field in flat and not isinstance(flat[field], str):
            flat[field] = json.dumps(list(flat[field] or []))
    return flat


def add_job(job_data: Dict[str, Any]) -> Optional[str]:
    """Add a new job posting to the database, returning its job_id."""
    flat = _flatten_eligibility(job_data)
    job_id = flat.get('job_id') or uuid.uuid4().hex
    now = datetime.now()
    try:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT OR IGNORE INTO jobs (
                    job_id, title, company, description, job_type, location,
                    qualifications, streams, passout_years, min_cgpa,
                    salary, stipend, application_deadline, application_link,
                    is_active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                job_id,
                flat.get('title'),
                flat.get('company'),
                flat.get('description'),
                flat.get('job_type', 'job'),
                flat.get('location', 'onsite'),
                flat.get('qualifications', '[]'),
                flat.get('streams', '[]'),
                flat.get('passout_years', '[]'),
                flat.get('min_cgpa'),
                flat.get('salary'),
                flat.get('stipend'),
                to_iso(flat.get('application_deadline')),
                flat.get('application_link'),
                0 if flat.get('is_active') is False else 1,
                to_iso(flat.get('created_at') or now),
                to_iso(now),
            ))
            if cursor.rowcount == 0:
                logger.warning(f"Job {job_id} already exists, not inserted")
                return None
            return job_id
    except Exception as e:
        logger.error(f"Failed to add job {job_id}: {e}")
        return None


def update_job(job_id: str, job_data: Dict[str, Any]) -> bool:
    """Update an existing job posting."""
    try:
        flat = _flatten_eligibility(job_data)
        with get_db_connection() as conn:
            cursor = conn.cursor()
            # Build update query dynamically based on provided fields
            fields = []
            values = []
            for key, value in flat.items():
                if key in ('job_id', 'updated_at') or value is None:
                    continue
                if key == 'is_active':
                    value = 1 if value else 0
                elif key in ('application_deadline', 'created_at'):
                    value = to_iso(value)
                fields.append(f"{key} = ?")
                values.append(value)

            if not fields:
                return False

            values.append(to_iso(datetime.now()))  # updated_at
            values.append(job_id)

            query = f"""
                UPDATE jobs
                SET {', '.join(fields)}, updated_at = ?
                WHERE job_id = ?
            """
            cursor.execute(query, values)
            return cursor.rowcount > 0
    except Exception as e:
        logger.error(f"Failed to update job {job_id}: {e}")
        return False


def get_job(job_id: str) -> Optional[Dict[str, Any]]:
    """Get a job posting by ID."""
    with get_db_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM jobs WHERE job_id = ?", (job_id,))
        row = cursor.fetchone()
        if row:
            return _row_to_job(row)
        return None


def list_active_jobs(
    job_types: Optional[List[str]] = None,
    locations: Optional[List[str]] = None,
    qualifications: Optional[List[str]] = None,
    streams: Optional[List[str]] = None,
    deadline_after: Optional[datetime] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """Get active job postings, newest first.

    Each non-empty filter narrows the result:
    - job_types / locations: the job's type / location is one of the values
    - qualifications / streams: the job's accepted set shares at least one value
    - deadline_after: the application deadline is strictly later
    """
    query = "SELECT * FROM jobs WHERE is_active = 1"
    params: List[Any] = []

    if job_types:
        query += f" AND job_type IN ({_placeholders(job_types)})"
        params.extend(job_types)

    if locations:
        query += f" AND location IN ({_placeholders(locations)})"
        params.extend(locations)

    if qualifications:
        query += (
            " AND EXISTS (SELECT 1 FROM json_each(jobs.qualifications)"
            f" WHERE json_each.value IN ({_placeholders(qualifications)}))"
        )
        params.extend(qualifications)

    if streams:
        query += (
            " AND EXISTS (SELECT 1 FROM json_each(jobs.streams)"
            f" WHERE json_each.value IN ({_placeholders(streams)}))"
        )
        params.extend(streams)

    if deadline_after is not None:
        query += " AND application_deadline > ?"
        params.append(to_iso(deadline_after))

    query += " ORDER BY created_at DESC, rowid DESC"

    if limit is not None or offset:
        query += " LIMIT ? OFFSET ?"
        params.extend([limit if limit is not None else -1, offset])

    with get_db_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(query, params)
        return [_row_to_job(row) for row in cursor.fetchall()]


def count_active_jobs() -> int:
    """Count job postings currently marked active."""
    with get_db_connection() as conn:
        row = conn.execute("SELECT COUNT(*) FROM jobs WHERE is_active = 1").fetchone()
        return row[0]


def deactivate_expired_jobs(now: Optional[datetime] = None) -> int:
    """Mark active jobs whose application deadline has passed as inactive."""
    now = now or datetime.now()
    try:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE jobs
                SET is_active = 0, updated_at = ?
                WHERE application_deadline < ? AND is_active = 1
            """, (to_iso(now), to_iso(now)))
            return cursor.rowcount
    except Exception as e:
        logger.error(f"Failed to deactivate expired jobs: {e}")
        return 0
