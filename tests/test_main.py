import csv
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import main
from matcher.models import JobEligibility, JobMatch


def make_job_match(job_id, score):
    return JobMatch(
        job_id=job_id,
        title=f"Role {job_id}",
        company="Acme",
        job_type="job",
        location="remote",
        match_score=score,
        match_reasons=["Qualification match: B.Tech"],
        eligibility=JobEligibility(qualifications=["B.Tech"]),
        user_qualifications={"qualification": "B.Tech"},
    )


SEED = {
    "candidates": [
        {
            "user_id": "user-1",
            "name": "Asha Rao",
            "email": "asha@example.com",
            "profile": {"qualification": "B.Tech", "stream": "CSE", "year_of_passout": 2025},
        },
        {"name": "No Profile", "email": "np@example.com"},
        {"name": "Duplicate", "email": "asha@example.com", "profile": {"qualification": "MBA"}},
    ],
    "jobs": [
        {"job_id": "job-1", "title": "Analyst", "eligibility": {"qualifications": ["B.Tech"]}},
        {"job_id": "job-1", "title": "Analyst again"},
    ],
}


class ImportFromJsonTests(unittest.TestCase):

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.seed_path = Path(self._tmpdir.name) / "seed.json"
        self.seed_path.write_text(json.dumps(SEED), encoding="utf-8")

    @mock.patch("main.add_job", side_effect=["job-1", None])
    @mock.patch("main.add_profile", return_value=True)
    @mock.patch("main.add_user", side_effect=["user-1", "generated", None])
    def test_counts_candidates_with_profiles_and_inserted_jobs(self, mock_add_user, mock_add_profile, mock_add_job):
        candidates, jobs = main.import_from_json(str(self.seed_path))

        self.assertEqual((candidates, jobs), (1, 1))
        mock_add_user.assert_any_call("Asha Rao", "asha@example.com", "user-1")
        mock_add_profile.assert_called_once_with("user-1", SEED["candidates"][0]["profile"])
        self.assertEqual(mock_add_job.call_count, 2)

    @mock.patch("main.add_user")
    def test_missing_file_imports_nothing(self, mock_add_user):
        self.assertEqual(main.import_from_json(str(self.seed_path.with_name("missing.json"))), (0, 0))
        mock_add_user.assert_not_called()


class ExportToCsvTests(unittest.TestCase):

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.output_path = Path(self._tmpdir.name) / "exports" / "matches.csv"

    @mock.patch("main.rank_jobs_for_candidate")
    def test_writes_one_row_per_match(self, mock_rank):
        mock_rank.return_value = [make_job_match("j1", 105), make_job_match("j2", 40)]

        self.assertTrue(main.export_to_csv("user-1", str(self.output_path), limit=10))

        with open(self.output_path, newline="", encoding="utf-8") as fp:
            rows = list(csv.DictReader(fp))
        self.assertEqual([row["jobId"] for row in rows], ["j1", "j2"])
        self.assertEqual(rows[0]["matchScore"], "105")
        self.assertEqual(rows[0]["matchReasons"], "Qualification match: B.Tech")
        mock_rank.assert_called_once_with("user-1", 10)

    @mock.patch("main.rank_jobs_for_candidate", return_value=[])
    def test_no_matches_writes_nothing(self, mock_rank):
        self.assertFalse(main.export_to_csv("user-1", str(self.output_path)))
        self.assertFalse(self.output_path.exists())


if __name__ == "__main__":
    unittest.main()
