#!/usr/bin/env python3
"""
Tests for rank assignment and tie groups.
"""

import unittest

from ranker.scorer.models import RankedApplicant, ScoredApplicant, SubScores
from ranker.scorer.ranking import assign_ranks, find_tie_groups


def _scored(applicant_id, match_score, education=0.0, experience=0.0, eligibility=0.0):
    return ScoredApplicant(
        applicant_id=applicant_id,
        applicant_name=None,
        match_score=match_score,
        sub_scores=SubScores(
            education_score=education,
            experience_score=experience,
            skills_score=0.0,
            eligibility_score=eligibility,
        ),
        algorithm_details=None,
        explanation=None,
    )


def _ranked(applicant_id, rank, match_score):
    return RankedApplicant(
        applicant_id=applicant_id,
        applicant_name=None,
        rank=rank,
        match_score=match_score,
        sub_scores=SubScores(),
        algorithm_details=None,
        percentiles={},
        reasoning='',
        explanation=None,
        total_applicants=4,
    )


class TestAssignRanks(unittest.TestCase):

    def test_descending_by_match_score(self):
        ranked = assign_ranks([_scored("a", 50), _scored("b", 90), _scored("c", 70)])
        self.assertEqual([(r, s.applicant_id) for r, s in ranked], [(1, "b"), (2, "c"), (3, "a")])

    def test_secondary_keys(self):
        ranked = assign_ranks([
            _scored("by-education", 80, education=90, eligibility=50),
            _scored("by-eligibility", 80, education=10, eligibility=100),
            _scored("by-experience", 80, education=90, eligibility=50, experience=100),
        ])
        self.assertEqual(
            [s.applicant_id for _, s in ranked],
            ["by-eligibility", "by-experience", "by-education"],
        )

    def test_applicant_id_is_final_tie_break(self):
        ranked = assign_ranks([_scored("zed", 60), _scored("amy", 60), _scored("bob", 60)])
        self.assertEqual([s.applicant_id for _, s in ranked], ["amy", "bob", "zed"])

    def test_ranks_are_one_to_n(self):
        pool = [_scored(str(i), i % 3) for i in range(10)]
        self.assertEqual([r for r, _ in assign_ranks(pool)], list(range(1, 11)))

    def test_input_order_does_not_matter(self):
        pool = [_scored("a", 50), _scored("b", 50), _scored("c", 70)]
        forward = [s.applicant_id for _, s in assign_ranks(pool)]
        backward = [s.applicant_id for _, s in assign_ranks(list(reversed(pool)))]
        self.assertEqual(forward, backward)

    def test_empty(self):
        self.assertEqual(assign_ranks([]), [])


class TestFindTieGroups(unittest.TestCase):

    def test_groups_of_equal_scores(self):
        ranked = [_ranked("a", 1, 90.0), _ranked("b", 2, 75.5), _ranked("c", 3, 75.5), _ranked("d", 4, 60.0)]
        groups = find_tie_groups(ranked)

        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].score, 75.5)
        self.assertEqual(groups[0].applicant_ids, ("b", "c"))

    def test_no_ties(self):
        ranked = [_ranked("a", 1, 90.0), _ranked("b", 2, 80.0)]
        self.assertEqual(find_tie_groups(ranked), [])


if __name__ == '__main__':
    unittest.main()
