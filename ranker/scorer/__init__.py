#!/usr/bin/env python3
"""
Scoring Module - Sub-scores, ensemble scoring and ranking.

Public API:
- RankingService: Scores and ranks a pool of applicants for one job
- rank_applicants: Convenience wrapper around RankingService
- RankedApplicant / RankingResult: Result dataclasses

Modules:

- models.py: Result data structures
- features.py: Education, experience, skills and eligibility sub-scores
- algorithms.py: Weighted sum, skill-experience composite and tie-breaker
- ensemble.py: Blend vs tie-break decision
- statistics.py: Pool statistics, percentiles and comparison helpers
- ranking.py: Rank assignment and tie groups
- explainability.py: Structured explanations and reasoning text
- service.py: RankingService orchestrator
"""

from ranker.scorer.models import (
    AlgorithmDetails, AlgorithmResult, Explanation, FactorContribution, PoolStatistics,
    RankedApplicant, RankingResult, ScoredApplicant, SubScores, TieGroup
)
from ranker.scorer.service import RankingService, rank_applicants

__all__ = [
    'RankingService', 'rank_applicants',
    'AlgorithmDetails', 'AlgorithmResult', 'Explanation', 'FactorContribution', 'PoolStatistics',
    'RankedApplicant', 'RankingResult', 'ScoredApplicant', 'SubScores', 'TieGroup',
]
