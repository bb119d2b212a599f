"""Errors raised by the matching engine."""


class MatchingError(Exception):
    """Base class for matching errors."""


class ProfileNotFound(MatchingError):
    """The candidate has no profile on record."""

    def __init__(self, candidate_id: str):
        self.candidate_id = candidate_id
        super().__init__(f"Candidate profile not found: {candidate_id}")


class JobNotFound(MatchingError):
    """The job id does not resolve to a posting."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
