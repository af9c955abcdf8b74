#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring and ranking results.

Everything here is created fresh per ranking run and frozen once built.
"""

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ranker.matcher.skill_matcher import SkillMatchPair

METRICS = ('education_score', 'experience_score', 'skills_score', 'eligibility_score', 'match_score')


@dataclass(frozen=True)
class SubScores:
    """The four independent 0-100 component scores."""
    education_score: float = 0.0
    experience_score: float = 0.0
    skills_score: float = 0.0
    eligibility_score: float = 0.0


@dataclass(frozen=True)
class FeatureScore:
    """Output of one feature scorer."""
    factor: str
    score: float
    verdict: str
    incomplete: bool = False
    matched_count: int = 0
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AlgorithmResult:
    name: str
    score: float
    components: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AlgorithmDetails:
    algorithm1_score: float
    algorithm2_score: float
    ensemble_method: str  # "weighted_average" | "tie_breaker"
    is_tie_breaker: bool
    score_difference: float
    algorithm3_score: Optional[float] = None
    algorithm1_weight: Optional[float] = None
    algorithm2_weight: Optional[float] = None


@dataclass(frozen=True)
class FactorContribution:
    """One line of an explanation: how a factor scored and what it added."""
    factor: str
    score: float
    weight: Optional[float]
    contribution: Optional[float]
    verdict: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Explanation:
    factors: Tuple[FactorContribution, ...]
    ensemble_method: str
    score_difference: float
    skill_pairs: Tuple[SkillMatchPair, ...] = ()
    incomplete_fields: Tuple[str, ...] = ()

    def factor(self, name: str) -> Optional[FactorContribution]:
        return next((f for f in self.factors if f.factor == name), None)


@dataclass(frozen=True)
class ScoredApplicant:
    """Phase-1 result for one applicant, before pool statistics and ranks exist."""
    applicant_id: str
    applicant_name: Optional[str]
    match_score: float
    sub_scores: SubScores
    algorithm_details: Optional[AlgorithmDetails]
    explanation: Optional[Explanation]
    matched_skills_count: int = 0
    matched_eligibilities_count: int = 0
    incomplete_fields: Tuple[str, ...] = ()

    @property
    def incomplete(self) -> bool:
        return bool(self.incomplete_fields)

    def metric(self, name: str) -> float:
        if name == 'match_score':
            return self.match_score
        return getattr(self.sub_scores, name)


@dataclass(frozen=True)
class RankedApplicant:
    """Final, explainable ranking entry handed to presentation code."""
    applicant_id: str
    applicant_name: Optional[str]
    rank: int
    match_score: float
    sub_scores: SubScores
    algorithm_details: Optional[AlgorithmDetails]
    percentiles: Mapping[str, float]
    reasoning: str
    explanation: Optional[Explanation]
    total_applicants: int
    matched_skills_count: int = 0
    matched_eligibilities_count: int = 0
    incomplete_fields: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'percentiles', MappingProxyType(dict(self.percentiles)))

    @property
    def incomplete(self) -> bool:
        return bool(self.incomplete_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view (lists/dicts/floats only) for UI and notification code."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if is_dataclass(value):
                value = asdict(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            data[f.name] = value
        data['incomplete'] = self.incomplete
        data['incomplete_fields'] = list(self.incomplete_fields)
        return data


@dataclass(frozen=True)
class PoolStatistics:
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0


@dataclass(frozen=True)
class TieGroup:
    """Applicants sharing one final match score, in rank order."""
    score: float
    applicant_ids: Tuple[str, ...]


@dataclass(frozen=True)
class RankingResult:
    job_id: Optional[str]
    applicants: Tuple[RankedApplicant, ...]
    statistics: Mapping[str, PoolStatistics]
    tie_groups: Tuple[TieGroup, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'applicants', tuple(self.applicants))
        object.__setattr__(self, 'statistics', MappingProxyType(dict(self.statistics)))
        object.__setattr__(self, 'tie_groups', tuple(self.tie_groups))

    def __len__(self) -> int:
        return len(self.applicants)
