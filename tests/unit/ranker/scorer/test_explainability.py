#!/usr/bin/env python3
"""
Tests for explanation building and reasoning text.
"""

import unittest

from ranker.scorer import features
from ranker.scorer.ensemble import select
from ranker.scorer.explainability import ReasoningBuilder, build_explanation
from ranker.scorer.models import AlgorithmResult, FactorContribution, FeatureScore, SubScores


def _feature_scores(education=100.0, experience=100.0, skills=50.0, eligibility=100.0):
    return {
        features.EDUCATION: FeatureScore(features.EDUCATION, education, features.MATCH),
        features.EXPERIENCE: FeatureScore(
            features.EXPERIENCE, experience, features.MEETS,
            details={'actual_years': 4.0, 'required_years': 2.0, 'surplus_years': 2.0},
        ),
        features.SKILLS: FeatureScore(
            features.SKILLS, skills, features.PARTIAL,
            details={'total': 2, 'matched': 1, 'strong': 1, 'related': 0},
        ),
        features.ELIGIBILITY: FeatureScore(features.ELIGIBILITY, eligibility, features.NO_REQUIREMENT),
    }


class TestBuildExplanation(unittest.TestCase):

    def test_blend_contributions_use_weighted_sum_weights(self):
        decision = select(AlgorithmResult('a1', 90.0), AlgorithmResult('a2', 60.0), lambda: None)
        explanation = build_explanation(_feature_scores(), decision)

        education = explanation.factor(features.EDUCATION)
        self.assertEqual(education.weight, 0.30)
        self.assertEqual(education.contribution, 30.0)
        self.assertEqual(explanation.ensemble_method, 'weighted_average')
        self.assertEqual([f.factor for f in explanation.factors],
                         ['education', 'experience', 'skills', 'eligibility'])

    def test_tie_break_contributions_are_points(self):
        a3 = AlgorithmResult('tie_breaker', 80.0, {
            'eligibility': 40.0, 'degree': 30.0, 'extra_years': 0.0, 'skill_diversity': 10.0,
        })
        decision = select(AlgorithmResult('a1', 70.0), AlgorithmResult('a2', 68.0), lambda: a3)
        explanation = build_explanation(_feature_scores(), decision, incomplete_fields=('skills',))

        self.assertIsNone(explanation.factor(features.SKILLS).weight)
        self.assertEqual(explanation.factor(features.SKILLS).contribution, 10.0)
        self.assertEqual(explanation.ensemble_method, 'tie_breaker')
        self.assertEqual(explanation.incomplete_fields, ('skills',))


class TestReasoningBuilder(unittest.TestCase):

    def test_strengths_and_gaps(self):
        text = ReasoningBuilder.strengths_and_gaps(SubScores(90, 100, 20, 0))
        self.assertEqual(
            text,
            'Candidate demonstrates strong educational background, excellent relevant experience. '
            'Areas for development include required skills, certifications.'
        )

    def test_only_gaps(self):
        text = ReasoningBuilder.strengths_and_gaps(SubScores(0, 0, 0, 0))
        self.assertTrue(text.startswith('Needs improvement in education level'))

    def test_middle_scores(self):
        text = ReasoningBuilder.strengths_and_gaps(SubScores(70, 70, 50, 70))
        self.assertEqual(text, 'Candidate evaluated across multiple qualification criteria.')

    def test_and_degree_verdict(self):
        factor = FactorContribution(
            features.EDUCATION, 0.0, 0.3, 0.0, features.AND_PARTIAL, {'mode': 'and', 'matched': 1, 'total': 2}
        )
        self.assertIn('match 1 of 2 required degrees', ReasoningBuilder.describe_factor(factor))

    def test_related_skills_below_threshold_verdict(self):
        factor = FactorContribution(
            features.SKILLS, 0.0, 0.2, 0.0, features.RELATED_ONLY, {'total': 2, 'related': 2}
        )
        text = ReasoningBuilder.describe_factor(factor)
        self.assertIn('below the similarity threshold', text)
        self.assertIn('remains 0%', text)

    def test_experience_verdicts(self):
        short = FactorContribution(
            features.EXPERIENCE, 50.0, 0.2, 10.0, features.SHORT,
            {'actual_years': 1.0, 'required_years': 2.0, 'surplus_years': -1.0},
        )
        self.assertIn('about 1.0 year below the 2.0-year requirement', ReasoningBuilder.describe_factor(short))

    def test_incomplete_note(self):
        self.assertIsNone(ReasoningBuilder.incomplete_note(()))
        self.assertEqual(
            ReasoningBuilder.incomplete_note(('education', 'eligibilities')),
            'Incomplete application: education, eligibilities.'
        )

    def test_build_includes_ensemble_path(self):
        decision = select(AlgorithmResult('a1', 90.0), AlgorithmResult('a2', 60.0), lambda: None)
        explanation = build_explanation(_feature_scores(), decision)
        text = ReasoningBuilder.build(explanation, SubScores(100, 100, 50, 100), decision.to_details())

        self.assertIn('Weighted average of Algorithm 1 (90.0, 60%) and Algorithm 2 (60.0, 40%).', text)
        self.assertIn('No eligibility required.', text)
        self.assertNotIn('Incomplete application', text)


if __name__ == '__main__':
    unittest.main()
