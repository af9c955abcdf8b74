#!/usr/bin/env python3
"""
Ensemble Selector - Decide how Algorithms 1 and 2 become a final score.

States run in one direction only:

    COMPUTE_BASE -> BLEND       |A1 - A2| >  TIE_BREAK_THRESHOLD
    COMPUTE_BASE -> TIE_BREAK   |A1 - A2| <= TIE_BREAK_THRESHOLD

Algorithm 3 is computed lazily, only on the TIE_BREAK path.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple, Union

from ranker.scorer.models import AlgorithmDetails, AlgorithmResult
from ranker.utils import clamp, round_score

logger = logging.getLogger(__name__)

TIE_BREAK_THRESHOLD = 5.0
BLEND_WEIGHTS: Tuple[float, float] = (0.6, 0.4)

WEIGHTED_AVERAGE = 'weighted_average'
TIE_BREAKER = 'tie_breaker'


class EnsembleState(Enum):
    COMPUTE_BASE = 'compute_base'
    BLEND = 'blend'
    TIE_BREAK = 'tie_break'


@dataclass(frozen=True)
class Blend:
    algorithm1: AlgorithmResult
    algorithm2: AlgorithmResult
    score_difference: float
    weights: Tuple[float, float] = BLEND_WEIGHTS

    state = EnsembleState.BLEND
    method = WEIGHTED_AVERAGE

    @property
    def final_score(self) -> float:
        w1, w2 = self.weights
        return clamp(w1 * round_score(self.algorithm1.score) + w2 * round_score(self.algorithm2.score))

    def to_details(self) -> AlgorithmDetails:
        return AlgorithmDetails(
            algorithm1_score=round_score(self.algorithm1.score),
            algorithm2_score=round_score(self.algorithm2.score),
            ensemble_method=self.method,
            is_tie_breaker=False,
            score_difference=self.score_difference,
            algorithm1_weight=self.weights[0],
            algorithm2_weight=self.weights[1],
        )


@dataclass(frozen=True)
class TieBreak:
    algorithm1: AlgorithmResult
    algorithm2: AlgorithmResult
    algorithm3: AlgorithmResult
    score_difference: float

    state = EnsembleState.TIE_BREAK
    method = TIE_BREAKER

    @property
    def final_score(self) -> float:
        return clamp(round_score(self.algorithm3.score))

    def to_details(self) -> AlgorithmDetails:
        return AlgorithmDetails(
            algorithm1_score=round_score(self.algorithm1.score),
            algorithm2_score=round_score(self.algorithm2.score),
            algorithm3_score=round_score(self.algorithm3.score),
            ensemble_method=self.method,
            is_tie_breaker=True,
            score_difference=self.score_difference,
        )


EnsembleDecision = Union[Blend, TieBreak]


def select(
    algorithm1: AlgorithmResult,
    algorithm2: AlgorithmResult,
    tie_breaker: Callable[[], AlgorithmResult],
) -> EnsembleDecision:
    """
    Leave COMPUTE_BASE for BLEND or TIE_BREAK.

    Both base scores and their difference are rounded to two decimals before
    the comparison so float noise cannot flip the branch.

    Args:
        algorithm1: Weighted-sum result
        algorithm2: Skill-experience composite result
        tie_breaker: Computes Algorithm 3; called only on the TIE_BREAK path
    """
    diff = round_score(abs(round_score(algorithm1.score) - round_score(algorithm2.score)))

    if diff <= TIE_BREAK_THRESHOLD:
        decision = TieBreak(algorithm1, algorithm2, tie_breaker(), diff)
    else:
        decision = Blend(algorithm1, algorithm2, diff)

    logger.debug(f"Ensemble {EnsembleState.COMPUTE_BASE.value} -> {decision.state.value} (diff={diff:.2f})")
    return decision
