"""Database schema definitions for users, candidate profiles and jobs."""

# Eligibility lists (qualifications, streams, passout_years) are stored as
# JSON arrays and queried through SQLite's json_each table-valued function.

USERS_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

CANDIDATE_PROFILES_SCHEMA = """
CREATE TABLE IF NOT EXISTS candidate_profiles (
    user_id TEXT PRIMARY KEY REFERENCES users(user_id),
    first_name TEXT,
    last_name TEXT,
    qualification TEXT NOT NULL,
    stream TEXT NOT NULL,
    year_of_passout INTEGER NOT NULL,
    cgpa_or_percentage REAL,
    college_name TEXT,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
);
"""

JOBS_SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    job_id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    company TEXT,
    description TEXT,
    job_type TEXT NOT NULL,
    location TEXT NOT NULL,
    qualifications TEXT NOT NULL DEFAULT '[]',
    streams TEXT NOT NULL DEFAULT '[]',
    passout_years TEXT NOT NULL DEFAULT '[]',
    min_cgpa REAL,
    salary TEXT,
    stipend TEXT,
    application_deadline TIMESTAMP,
    application_link TEXT,
    is_active INTEGER DEFAULT 1,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
);
"""

# Index for faster queries
CREATE_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_jobs_active_created ON jobs(is_active, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_jobs_deadline ON jobs(application_deadline);
CREATE INDEX IF NOT EXISTS idx_jobs_type_location ON jobs(job_type, location);
CREATE INDEX IF NOT EXISTS idx_profiles_qualification ON candidate_profiles(qualification);
CREATE INDEX IF NOT EXISTS idx_profiles_stream ON candidate_profiles(stream);
CREATE INDEX IF NOT EXISTS idx_profiles_passout ON candidate_profiles(year_of_passout);
"""
