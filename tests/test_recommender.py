import unittest
from datetime import datetime
from unittest import mock

from config.settings import MAX_MATCH_POPULATION
from matcher import recommender
from matcher.models import RecommendationPreferences


NOW = datetime(2026, 10, 19, 12, 0, 0)

PROFILE = {
    'candidate_id': 'user-1',
    'name': 'Asha Rao',
    'email': 'asha@example.com',
    'qualification': 'B.Tech',
    'stream': 'CSE',
    'year_of_passout': 2024,
    'cgpa_or_percentage': 8.5,
}


def make_job(job_id, qualifications, streams, passout_years, min_cgpa=None):
    return {
        'job_id': job_id,
        'title': f'Role {job_id}',
        'company': 'Acme',
        'job_type': 'internship',
        'location': 'hybrid',
        'is_active': True,
        'application_deadline': '2026-12-31T23:59:59',
        'created_at': '2026-10-10T09:00:00',
        'eligibility': {
            'qualifications': qualifications,
            'streams': streams,
            'passout_years': passout_years,
            'min_cgpa': min_cgpa,
        },
    }


class RecommendJobsTests(unittest.TestCase):

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile', return_value=None)
    def test_missing_profile_returns_empty_list(self, mock_get_profile, mock_list_jobs):
        self.assertEqual(recommender.recommend_jobs('ghost', now=NOW), [])
        mock_list_jobs.assert_not_called()

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile')
    def test_default_preferences_restrict_the_pool(self, mock_get_profile, mock_list_jobs):
        mock_get_profile.return_value = PROFILE
        mock_list_jobs.return_value = []

        recommender.recommend_jobs('user-1', now=NOW)

        mock_list_jobs.assert_called_once_with(
            job_types=['job', 'internship'],
            locations=['remote', 'onsite', 'hybrid'],
            deadline_after=NOW,
            limit=MAX_MATCH_POPULATION,
        )

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile')
    def test_results_below_minimum_score_are_dropped(self, mock_get_profile, mock_list_jobs):
        mock_get_profile.return_value = PROFILE
        mock_list_jobs.return_value = [
            make_job('low', ['MBA'], ['Civil'], [2030]),                 # 10
            make_job('threshold', ['M.Tech'], ['CSE'], [2023], 9.0),     # 40
            make_job('top', ['B.Tech'], ['CSE'], [2024]),                # 105
        ]

        matches = recommender.recommend_jobs('user-1', now=NOW)

        self.assertEqual([m.job_id for m in matches], ['top', 'threshold'])
        for match in matches:
            self.assertGreaterEqual(match.match_score, 40)

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile')
    def test_unreachable_threshold_returns_empty_list(self, mock_get_profile, mock_list_jobs):
        mock_get_profile.return_value = PROFILE
        # Best achievable is 95: full marks except CGPA, plus the bonus
        mock_list_jobs.return_value = [
            make_job('best', ['B.Tech'], ['CSE'], [2024], 9.0),
            make_job('other', ['B.Tech'], ['CSE'], [2025], 9.0),
        ]

        matches = recommender.recommend_jobs(
            'user-1', RecommendationPreferences(min_match_score=100), now=NOW
        )

        self.assertEqual(matches, [])

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile')
    def test_results_are_capped_at_max_results(self, mock_get_profile, mock_list_jobs):
        mock_get_profile.return_value = PROFILE
        mock_list_jobs.return_value = [
            make_job(f'job-{i}', ['B.Tech'], ['CSE'], [2024]) for i in range(5)
        ]

        matches = recommender.recommend_jobs(
            'user-1', RecommendationPreferences(max_results=3), now=NOW
        )

        self.assertEqual([m.job_id for m in matches], ['job-0', 'job-1', 'job-2'])

    @mock.patch('matcher.recommender.list_active_jobs')
    @mock.patch('matcher.recommender.get_profile')
    def test_custom_preferences_are_passed_to_storage(self, mock_get_profile, mock_list_jobs):
        mock_get_profile.return_value = PROFILE
        mock_list_jobs.return_value = []
        preferences = RecommendationPreferences(
            preferred_job_types=['internship'],
            preferred_locations=['remote'],
        )

        recommender.recommend_jobs('user-1', preferences, now=NOW)

        kwargs = mock_list_jobs.call_args.kwargs
        self.assertEqual(kwargs['job_types'], ['internship'])
        self.assertEqual(kwargs['locations'], ['remote'])


class RecommendationPreferencesTests(unittest.TestCase):

    def test_defaults(self):
        preferences = RecommendationPreferences()
        self.assertEqual(preferences.preferred_job_types, ['job', 'internship'])
        self.assertEqual(preferences.preferred_locations, ['remote', 'onsite', 'hybrid'])
        self.assertEqual(preferences.min_match_score, 40)
        self.assertEqual(preferences.max_results, 15)

    def test_empty_lists_fall_back_to_all_values(self):
        preferences = RecommendationPreferences(preferred_job_types=[], preferred_locations=[])
        self.assertEqual(preferences.preferred_job_types, ['job', 'internship'])
        self.assertEqual(preferences.preferred_locations, ['remote', 'onsite', 'hybrid'])


if __name__ == '__main__':
    unittest.main()
