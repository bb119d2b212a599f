import unittest
from unittest import mock

from matcher.exceptions import JobNotFound, ProfileNotFound
from matcher.models import JobEligibility, JobMatch, SortBy, UserMatch
from webapp.app import app


def make_job_match(job_id, score):
    return JobMatch(
        job_id=job_id,
        title=f"Role {job_id}",
        company="Acme",
        job_type="job",
        location="remote",
        match_score=score,
        match_reasons=["Qualification match: B.Tech"],
        eligibility=JobEligibility(qualifications=["B.Tech"], streams=["CSE"], passout_years=[2025]),
        user_qualifications={"qualification": "B.Tech", "stream": "CSE", "yearOfPassout": 2025, "cgpa": 8.1},
    )


class MatchingJobsEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.rank_jobs_for_candidate")
    def test_returns_ranked_matches(self, mock_rank):
        mock_rank.return_value = [make_job_match("j1", 105), make_job_match("j2", 40)]

        response = self.client.get("/api/matching/jobs?candidate_id=user-1&limit=5")
        self.assertEqual(response.status_code, 200)

        payload = response.get_json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["count"], 2)
        self.assertEqual([m["jobId"] for m in payload["matches"]], ["j1", "j2"])
        mock_rank.assert_called_once_with("user-1", 5)

    @mock.patch("webapp.app.rank_jobs_for_candidate")
    def test_missing_candidate_id_is_rejected(self, mock_rank):
        response = self.client.get("/api/matching/jobs")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()["success"])
        mock_rank.assert_not_called()

    @mock.patch("webapp.app.rank_jobs_for_candidate")
    def test_invalid_limit_is_rejected(self, mock_rank):
        for query in ("limit=abc", "limit=0", "limit=101"):
            response = self.client.get(f"/api/matching/jobs?candidate_id=user-1&{query}")
            self.assertEqual(response.status_code, 400, query)
        mock_rank.assert_not_called()

    @mock.patch("webapp.app.rank_jobs_for_candidate", side_effect=ProfileNotFound("ghost"))
    def test_unknown_candidate_is_404(self, mock_rank):
        response = self.client.get("/api/matching/jobs?candidate_id=ghost")

        self.assertEqual(response.status_code, 404)
        self.assertIn("ghost", response.get_json()["error"])

    @mock.patch("webapp.app.rank_jobs_for_candidate", side_effect=RuntimeError("database is locked"))
    def test_storage_failure_is_500(self, mock_rank):
        response = self.client.get("/api/matching/jobs?candidate_id=user-1")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json()["error"], "database is locked")


class MatchingCandidatesEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.rank_candidates_for_job")
    def test_uses_default_limit(self, mock_rank):
        mock_rank.return_value = [
            UserMatch("user-1", "Asha Rao", "asha@example.com", 105, ["Perfect match bonus"], {"qualification": "B.Tech"}),
        ]

        response = self.client.get("/api/matching/jobs/job-1/candidates")
        self.assertEqual(response.status_code, 200)

        payload = response.get_json()
        self.assertEqual(payload["job_id"], "job-1")
        self.assertEqual(payload["matches"][0]["userId"], "user-1")
        mock_rank.assert_called_once_with("job-1", 50)

    @mock.patch("webapp.app.rank_candidates_for_job", side_effect=JobNotFound("missing"))
    def test_unknown_job_is_404(self, mock_rank):
        response = self.client.get("/api/matching/jobs/missing/candidates")

        self.assertEqual(response.status_code, 404)


class RecommendationsEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.recommend_jobs", return_value=[])
    def test_preferences_are_built_from_body(self, mock_recommend):
        response = self.client.post("/api/matching/recommendations", json={
            "candidate_id": "user-1",
            "preferredJobTypes": ["internship"],
            "minMatchScore": 60,
            "maxResults": 5,
        })
        self.assertEqual(response.status_code, 200)

        preferences = mock_recommend.call_args.args[1]
        self.assertEqual(preferences.preferred_job_types, ["internship"])
        self.assertEqual(preferences.preferred_locations, ["remote", "onsite", "hybrid"])
        self.assertEqual(preferences.min_match_score, 60)
        self.assertEqual(preferences.max_results, 5)

        payload = response.get_json()
        self.assertEqual(payload["recommendations"], [])
        self.assertEqual(payload["preferences"]["maxResults"], 5)

    @mock.patch("webapp.app.recommend_jobs")
    def test_invalid_preferences_are_rejected(self, mock_recommend):
        bad_bodies = [
            {"candidate_id": "user-1", "preferredJobTypes": ["contract"]},
            {"candidate_id": "user-1", "preferredLocations": "remote"},
            {"candidate_id": "user-1", "minMatchScore": 150},
            {"preferredJobTypes": ["job"]},
        ]
        for body in bad_bodies:
            response = self.client.post("/api/matching/recommendations", json=body)
            self.assertEqual(response.status_code, 400, body)
        mock_recommend.assert_not_called()


class AdvancedMatchingEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.advanced_match", return_value=[])
    def test_filters_and_options_are_built_from_body(self, mock_advanced):
        response = self.client.post("/api/matching/advanced", json={
            "candidate_id": "user-1",
            "jobTypes": ["job"],
            "streams": ["CSE"],
            "minSalary": 500000,
            "limit": 10,
            "offset": 20,
            "sortBy": "salary",
        })
        self.assertEqual(response.status_code, 200)

        candidate_id, filters, options = mock_advanced.call_args.args
        self.assertEqual(candidate_id, "user-1")
        self.assertEqual(filters.job_types, ["job"])
        self.assertEqual(filters.streams, ["CSE"])
        self.assertEqual(filters.min_salary, 500000)
        self.assertEqual((options.limit, options.offset, options.sort_by), (10, 20, SortBy.SALARY))
        self.assertEqual(response.get_json()["options"]["sortBy"], "salary")

    @mock.patch("webapp.app.advanced_match", return_value=[])
    def test_qualification_and_stream_filters_are_free_text(self, mock_advanced):
        response = self.client.post("/api/matching/advanced", json={
            "candidate_id": "user-1",
            "qualifications": ["B.Arch"],
            "streams": ["Finance"],
        })
        self.assertEqual(response.status_code, 200)

        filters = mock_advanced.call_args.args[1]
        self.assertEqual(filters.qualifications, ["B.Arch"])
        self.assertEqual(filters.streams, ["Finance"])

        bad = self.client.post("/api/matching/advanced", json={"candidate_id": "user-1", "streams": [7]})
        self.assertEqual(bad.status_code, 400)

    @mock.patch("webapp.app.advanced_match")
    def test_unknown_sort_order_is_rejected(self, mock_advanced):
        response = self.client.post("/api/matching/advanced", json={"candidate_id": "user-1", "sortBy": "random"})

        self.assertEqual(response.status_code, 400)
        mock_advanced.assert_not_called()

    @mock.patch("webapp.app.advanced_match", side_effect=ProfileNotFound("ghost"))
    def test_unknown_candidate_is_404(self, mock_advanced):
        response = self.client.post("/api/matching/advanced", json={"candidate_id": "ghost"})

        self.assertEqual(response.status_code, 404)


class LookupEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.get_matching_statistics")
    def test_stats(self, mock_stats):
        mock_stats.return_value.to_dict.return_value = {"totalUsers": 3, "totalJobs": 2}

        response = self.client.get("/api/matching/stats")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["stats"]["totalUsers"], 3)

    @mock.patch("webapp.app.get_job")
    def test_get_job(self, mock_get_job):
        mock_get_job.return_value = {"job_id": "job-1", "title": "Analyst"}
        self.assertEqual(self.client.get("/api/jobs/job-1").get_json()["job"]["title"], "Analyst")

        mock_get_job.return_value = None
        self.assertEqual(self.client.get("/api/jobs/job-2").status_code, 404)

    @mock.patch("webapp.app.get_profile", return_value=None)
    def test_missing_profile_is_404(self, mock_get_profile):
        response = self.client.get("/api/profiles/ghost")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Profile not found")

    def test_health(self):
        payload = self.client.get("/api/health").get_json()

        self.assertTrue(payload["success"])
        self.assertIn("timestamp", payload)


if __name__ == "__main__":
    unittest.main()
