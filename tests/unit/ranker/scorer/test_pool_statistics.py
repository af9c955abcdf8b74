#!/usr/bin/env python3
"""
Tests for pool statistics, percentiles and comparison helpers.
"""

import unittest

import pytest

from ranker.scorer import statistics as stats
from ranker.scorer.models import PoolStatistics


class TestCalculateStatistics(unittest.TestCase):

    def test_basic(self):
        result = stats.calculate_statistics([10, 20, 30, 40])
        self.assertEqual(result.min, 10.0)
        self.assertEqual(result.max, 40.0)
        self.assertEqual(result.mean, 25.0)
        self.assertEqual(result.median, 25.0)
        # population standard deviation
        self.assertAlmostEqual(result.std_dev, 11.18, places=2)

    def test_empty(self):
        self.assertEqual(stats.calculate_statistics([]), PoolStatistics())

    def test_ignores_none_and_nan(self):
        result = stats.calculate_statistics([50, None, float('nan'), 70])
        self.assertEqual(result.mean, 60.0)


class TestPercentile(unittest.TestCase):

    def test_at_or_below(self):
        values = [40, 60, 60, 90]
        self.assertEqual(stats.percentile(90, values), 100.0)
        self.assertEqual(stats.percentile(60, values), 75.0)
        self.assertEqual(stats.percentile(40, values), 25.0)

    def test_single_value(self):
        self.assertEqual(stats.percentile(0.0, [0.0]), 100.0)

    def test_empty_pool(self):
        self.assertEqual(stats.percentile(50, []), 0.0)

    def test_equal_values_share_percentile(self):
        self.assertEqual(stats.percentile(70, [70, 70, 70]), 100.0)


class TestPresentationHelpers(unittest.TestCase):

    def test_distribution(self):
        result = stats.distribution([0, 10, 50, 90, 100], bucket_count=5)
        self.assertEqual(result['total'], 5)
        self.assertEqual(len(result['buckets']), 5)
        self.assertEqual(result['buckets'][0], {'range': '0-20', 'count': 2})
        self.assertEqual(result['buckets'][-1], {'range': '80-100', 'count': 2})

    def test_distribution_empty(self):
        self.assertEqual(stats.distribution([]), {'buckets': [], 'total': 0})

    def test_gap_from_top(self):
        self.assertEqual(stats.gap_from_top(75, 100), {'absolute': 25.0, 'percentage': 25.0})
        self.assertEqual(stats.gap_from_top(0, 0), {'absolute': 0.0, 'percentage': 0.0})

    def test_performance_label(self):
        self.assertEqual(stats.performance_label(95), 'Exceptional')
        self.assertEqual(stats.performance_label(75), 'Above Average')
        self.assertEqual(stats.performance_label(50), 'Average')
        self.assertEqual(stats.performance_label(25), 'Below Average')
        self.assertEqual(stats.performance_label(10), 'Needs Improvement')

    def test_percentile_text(self):
        self.assertEqual(stats.percentile_text(100, 1), 'Only applicant')
        self.assertEqual(stats.percentile_text(100, 8), 'Best among all 8 applicants')
        self.assertEqual(stats.percentile_text(0, 8), 'Lowest among all 8 applicants')
        self.assertEqual(stats.percentile_text(62.5, 8), 'Better than 62% of applicants')

    def test_is_top_tier(self):
        self.assertTrue(stats.is_top_tier(1, 3))
        self.assertFalse(stats.is_top_tier(2, 3))
        self.assertTrue(stats.is_top_tier(3, 5))
        self.assertTrue(stats.is_top_tier(4, 10))
        self.assertFalse(stats.is_top_tier(5, 10))

    def test_relative_position(self):
        self.assertEqual(stats.relative_position(1, 1), 'Only applicant for this position')
        self.assertEqual(stats.relative_position(1, 10), 'Top-ranked candidate')
        self.assertEqual(stats.relative_position(3, 10), 'Third highest-ranked candidate')
        self.assertEqual(stats.relative_position(4, 21), 'Among top quarter of applicants')
        self.assertEqual(stats.relative_position(21, 21), 'Among bottom quarter of applicants')


@pytest.mark.parametrize("rank,expected", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"),
    (11, "11th"), (12, "12th"), (13, "13th"),
    (21, "21st"), (22, "22nd"), (101, "101st"), (111, "111th"),
])
def test_ordinal(rank, expected):
    assert stats.ordinal(rank) == expected


if __name__ == '__main__':
    unittest.main()
