#!/usr/bin/env python3
"""
Scoring Algorithms - Three ways of combining the four sub-scores.

1. Weighted sum of all four factors.
2. Skill-experience composite: skills amplified by how far experience exceeds
   the requirement, plus education and eligibility.
3. Tie-breaker point allocation, used only when 1 and 2 nearly agree.

Weights are fixed constants; they are not configurable per job.
"""

import math
from typing import Dict

from ranker.scorer.models import AlgorithmResult, SubScores
from ranker.utils import clamp

WEIGHTED_SUM = 'weighted_sum'
SKILL_EXPERIENCE_COMPOSITE = 'skill_experience_composite'
TIE_BREAKER = 'tie_breaker'

ALGORITHM1_WEIGHTS: Dict[str, float] = {
    'education': 0.30,
    'experience': 0.20,
    'skills': 0.20,
    'eligibility': 0.30,
}

ALGORITHM2_WEIGHTS: Dict[str, float] = {
    'composite': 0.30,
    'education': 0.35,
    'eligibility': 0.35,
}
EXPERIENCE_RATIO_CAP = 3.0
EXPERIENCE_BETA = 0.5

# Algorithm 3 point budget
ELIGIBILITY_POINTS = 40.0
DEGREE_POINTS = 30.0
POINTS_PER_EXTRA_YEAR = 10.0
MAX_EXTRA_YEAR_POINTS = 20.0
POINTS_PER_MATCHED_SKILL = 10.0
MAX_SKILL_POINTS = 10.0


def algorithm1_weighted_sum(sub_scores: SubScores) -> AlgorithmResult:
    """score = 0.30*Education + 0.20*Experience + 0.20*Skills + 0.30*Eligibility"""
    w = ALGORITHM1_WEIGHTS
    components = {
        'education': w['education'] * sub_scores.education_score,
        'experience': w['experience'] * sub_scores.experience_score,
        'skills': w['skills'] * sub_scores.skills_score,
        'eligibility': w['eligibility'] * sub_scores.eligibility_score,
    }
    return AlgorithmResult(WEIGHTED_SUM, clamp(sum(components.values())), components)


def experience_ratio(actual_years: float, required_years: float) -> float:
    if required_years <= 0:
        return EXPERIENCE_RATIO_CAP
    return min(EXPERIENCE_RATIO_CAP, max(0.0, actual_years / required_years))


def algorithm2_skill_experience_composite(
    sub_scores: SubScores,
    actual_years: float,
    required_years: float,
) -> AlgorithmResult:
    """
    Skills scaled by an exponential experience factor.

    composite = S * e^(beta * ratio) / e^(beta * cap), so it stays within [0, S]
    and reaches S only when experience is at least `cap` times the requirement.
    """
    ratio = experience_ratio(actual_years, required_years)
    factor = math.exp(EXPERIENCE_BETA * ratio) / math.exp(EXPERIENCE_BETA * EXPERIENCE_RATIO_CAP)
    composite = sub_scores.skills_score * factor

    w = ALGORITHM2_WEIGHTS
    components = {
        'experience_ratio': ratio,
        'composite': composite,
        'composite_contribution': w['composite'] * composite,
        'education': w['education'] * sub_scores.education_score,
        'eligibility': w['eligibility'] * sub_scores.eligibility_score,
    }
    score = components['composite_contribution'] + components['education'] + components['eligibility']
    return AlgorithmResult(SKILL_EXPERIENCE_COMPOSITE, clamp(score), components)


def algorithm3_tie_breaker(
    sub_scores: SubScores,
    actual_years: float,
    required_years: float,
    matched_skills_count: int,
) -> AlgorithmResult:
    extra_years = max(0.0, actual_years - required_years)
    components = {
        'eligibility': ELIGIBILITY_POINTS * sub_scores.eligibility_score / 100.0,
        'degree': DEGREE_POINTS * sub_scores.education_score / 100.0,
        'extra_years': min(MAX_EXTRA_YEAR_POINTS, POINTS_PER_EXTRA_YEAR * extra_years),
        'skill_diversity': min(MAX_SKILL_POINTS, POINTS_PER_MATCHED_SKILL * max(0, matched_skills_count)),
    }
    return AlgorithmResult(TIE_BREAKER, clamp(sum(components.values())), components)
