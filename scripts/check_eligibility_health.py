from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import DATABASE_PATH


def collect_health(conn: sqlite3.Connection) -> dict:
    """Count records the matcher cannot score meaningfully."""
    cur = conn.cursor()

    health = {
        "profiles": cur.execute("SELECT COUNT(*) FROM candidate_profiles").fetchone()[0],
        "profiles_without_cgpa": cur.execute(
            "SELECT COUNT(*) FROM candidate_profiles WHERE cgpa_or_percentage IS NULL"
        ).fetchone()[0],
        "active_jobs": cur.execute("SELECT COUNT(*) FROM jobs WHERE is_active = 1").fetchone()[0],
        "active_jobs_past_deadline": cur.execute(
            """
            SELECT COUNT(*) FROM jobs
            WHERE is_active = 1
              AND application_deadline IS NOT NULL
              AND application_deadline < strftime('%Y-%m-%dT%H:%M:%S', 'now', 'localtime')
            """
        ).fetchone()[0],
    }

    # Jobs with an empty accepted set can never award that criterion
    health["jobs_with_empty_eligibility"] = cur.execute(
        """
        SELECT COUNT(*) FROM jobs
        WHERE json_array_length(COALESCE(qualifications, '[]')) = 0
           OR json_array_length(COALESCE(streams, '[]')) = 0
           OR json_array_length(COALESCE(passout_years, '[]')) = 0
        """
    ).fetchone()[0]

    return health


def main() -> None:
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row

    health = collect_health(conn)

    print(f"Candidate profiles: {health['profiles']}")
    print(f"Profiles without CGPA: {health['profiles_without_cgpa']}")
    print(f"Active jobs: {health['active_jobs']}")
    print(f"Active jobs past deadline: {health['active_jobs_past_deadline']}")
    print(f"Jobs with an empty eligibility set: {health['jobs_with_empty_eligibility']}")

    if health["jobs_with_empty_eligibility"]:
        sample = conn.execute(
            """
            SELECT job_id, title, company
            FROM jobs
            WHERE json_array_length(COALESCE(qualifications, '[]')) = 0
               OR json_array_length(COALESCE(streams, '[]')) = 0
               OR json_array_length(COALESCE(passout_years, '[]')) = 0
            LIMIT 5
            """
        ).fetchall()
        print("\nSample jobs with empty eligibility sets:")
        for row in sample:
            print(f" - {row['job_id']} | {row['title']} | {row['company']}")

    conn.close()


if __name__ == "__main__":
    main()
