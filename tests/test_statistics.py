import unittest
from datetime import datetime
from unittest import mock

from matcher import statistics


class MatchingStatisticsTests(unittest.TestCase):

    @mock.patch('matcher.statistics.get_field_distribution')
    @mock.patch('matcher.statistics.count_active_jobs', return_value=12)
    @mock.patch('matcher.statistics.count_candidate_profiles', return_value=340)
    def test_statistics_snapshot(self, mock_count_profiles, mock_count_jobs, mock_distribution):
        mock_distribution.side_effect = lambda field, limit: {
            'qualification': [{'value': 'B.Tech', 'count': 200}, {'value': 'MCA', 'count': 40}],
            'stream': [{'value': 'CSE', 'count': 150}],
        }[field]
        now = datetime(2026, 10, 19, 12, 0, 0)

        stats = statistics.get_matching_statistics(now=now)

        self.assertEqual(stats.total_users, 340)
        self.assertEqual(stats.total_jobs, 12)
        self.assertEqual(stats.top_qualifications, ['B.Tech', 'MCA'])
        self.assertEqual(stats.top_streams, ['CSE'])
        self.assertEqual(stats.average_match_score, 75)
        self.assertEqual(stats.matching_efficiency, 'high')
        self.assertEqual(stats.last_updated, now)
        mock_distribution.assert_any_call('qualification', 5)
        mock_distribution.assert_any_call('stream', 5)

    @mock.patch('matcher.statistics.get_field_distribution', return_value=[])
    @mock.patch('matcher.statistics.count_active_jobs', return_value=0)
    @mock.patch('matcher.statistics.count_candidate_profiles', return_value=0)
    def test_empty_population(self, mock_count_profiles, mock_count_jobs, mock_distribution):
        payload = statistics.get_matching_statistics().to_dict()

        self.assertEqual(payload['totalUsers'], 0)
        self.assertEqual(payload['totalJobs'], 0)
        self.assertEqual(payload['topQualifications'], [])
        self.assertEqual(payload['topStreams'], [])
        self.assertIn('lastUpdated', payload)


if __name__ == '__main__':
    unittest.main()
