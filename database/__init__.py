"""Database module for users, candidate profiles and job postings."""

from .job_db import (
    init_database,
    add_job,
    update_job,
    get_job,
    list_active_jobs,
    count_active_jobs,
    deactivate_expired_jobs,
)
from .profile_db import (
    add_user,
    add_profile,
    get_profile,
    list_candidate_profiles,
    count_candidate_profiles,
    get_field_distribution,
)

__all__ = [
    "init_database",
    "add_job",
    "update_job",
    "get_job",
    "list_active_jobs",
    "count_active_jobs",
    "deactivate_expired_jobs",
    "add_user",
    "add_profile",
    "get_profile",
    "list_candidate_profiles",
    "count_candidate_profiles",
    "get_field_distribution",
]
