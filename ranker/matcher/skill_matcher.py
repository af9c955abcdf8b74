#!/usr/bin/env python3
"""
Skill Matcher - Pair each required skill with the applicant's best skill.

Tiers, in order of preference: exact, high, medium, token, none.
exact/high are "strong" matches and earn full credit. medium/token are
"related": they earn partial credit only above the scoring floor, and below
it they are still reported (related=True) but contribute zero.

One applicant skill can satisfy at most one required skill.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ranker.config_loader import SkillMatchConfig
from ranker.matcher.similarity import semantic_similarity, similarity, token_overlap
from ranker.utils import clamp, normalize_text

logger = logging.getLogger(__name__)

EXACT = 'exact'
HIGH = 'high'
MEDIUM = 'medium'
TOKEN = 'token'
NONE = 'none'

STRONG_TIERS = frozenset({EXACT, HIGH})
RELATED_TIERS = frozenset({MEDIUM, TOKEN})

_TIER_RANK: Dict[str, int] = {EXACT: 4, HIGH: 3, MEDIUM: 2, TOKEN: 1, NONE: 0}


@dataclass(frozen=True)
class SkillMatchPair:
    """Best applicant skill found for one required skill."""
    job_skill: str
    applicant_skill: Optional[str]
    similarity: float  # 0-100, shown to HR staff
    match_type: str
    credit: float  # 0-100, what this skill adds to the skills score

    @property
    def is_strong(self) -> bool:
        return self.match_type in STRONG_TIERS

    @property
    def is_related(self) -> bool:
        return self.match_type in RELATED_TIERS

    @property
    def is_credited(self) -> bool:
        return self.credit > 0


@dataclass
class SkillMatchResult:
    score: float
    pairs: List[SkillMatchPair] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return sum(1 for p in self.pairs if p.is_credited)

    @property
    def strong_count(self) -> int:
        return sum(1 for p in self.pairs if p.is_strong)

    @property
    def related_count(self) -> int:
        return sum(1 for p in self.pairs if p.is_related)

    @property
    def related_below_threshold_count(self) -> int:
        return sum(1 for p in self.pairs if p.is_related and not p.is_credited)


class SkillMatcher:
    """Tiered skill matching with configurable thresholds."""

    def __init__(self, config: Optional[SkillMatchConfig] = None):
        self.config = config or SkillMatchConfig()

    def classify(self, job_skill: str, applicant_skill: str) -> Tuple[str, float, float]:
        """
        Classify how an applicant skill relates to a required skill.

        Returns:
            (match_type, display_similarity, scoring_value), all values 0-100
        """
        cfg = self.config
        if normalize_text(job_skill) == normalize_text(applicant_skill):
            return EXACT, 100.0, 100.0

        text_sim = similarity(job_skill, applicant_skill)
        if text_sim >= cfg.high_threshold:
            return HIGH, text_sim, text_sim

        combined = text_sim
        semantic = semantic_similarity(job_skill, applicant_skill)
        if semantic >= cfg.semantic_threshold:
            combined = max(combined, semantic * cfg.semantic_weight)
        if combined >= cfg.medium_threshold:
            return MEDIUM, combined, combined

        overlap = token_overlap(job_skill, applicant_skill)
        if overlap > 0:
            return TOKEN, 100.0 * overlap, cfg.token_weight * overlap

        return NONE, text_sim, 0.0

    def credit(self, match_type: str, value: float) -> float:
        """Credit (0-100) a required skill earns from a match of the given tier."""
        cfg = self.config
        if match_type in STRONG_TIERS:
            return 100.0
        if match_type not in RELATED_TIERS or value < cfg.scoring_floor:
            return 0.0
        span = 100.0 - cfg.scoring_floor
        if span <= 0:
            return 0.0
        return clamp(cfg.partial_credit_weight * (value - cfg.scoring_floor) / span * 100.0)

    def match(self, required_skills: Sequence[str], applicant_skills: Sequence[str]) -> SkillMatchResult:
        """
        Match required skills against applicant skills.

        Exact matches are assigned first so that a loosely related required
        skill earlier in the list cannot consume an applicant skill another
        requirement matches exactly.

        Args:
            required_skills: De-duplicated required skill names, in job order
            applicant_skills: Applicant skill names, in a deterministic order

        Returns:
            SkillMatchResult with one pair per required skill and the 0-100 score
        """
        if not required_skills:
            return SkillMatchResult(score=0.0, pairs=[])

        applicant_by_key: Dict[str, str] = {}
        for skill in applicant_skills:
            key = normalize_text(skill)
            if key and key not in applicant_by_key:
                applicant_by_key[key] = skill

        used: set = set()
        pairs: Dict[int, SkillMatchPair] = {}

        for i, job_skill in enumerate(required_skills):
            key = normalize_text(job_skill)
            if key in applicant_by_key and key not in used:
                used.add(key)
                pairs[i] = SkillMatchPair(job_skill, applicant_by_key[key], 100.0, EXACT, 100.0)

        for i, job_skill in enumerate(required_skills):
            if i in pairs:
                continue

            best: Optional[SkillMatchPair] = None
            best_key = (-1, -1.0)
            for app_key, app_skill in applicant_by_key.items():
                if app_key in used:
                    continue
                match_type, display, value = self.classify(job_skill, app_skill)
                if match_type == NONE:
                    continue
                candidate_key = (_TIER_RANK[match_type], value)
                if candidate_key > best_key:
                    best_key = candidate_key
                    best = SkillMatchPair(
                        job_skill, app_skill, round(display, 1), match_type, self.credit(match_type, value)
                    )

            if best is None:
                pairs[i] = SkillMatchPair(job_skill, None, 0.0, NONE, 0.0)
                continue
            if best.is_credited:
                used.add(normalize_text(best.applicant_skill))
            pairs[i] = best

        ordered = [pairs[i] for i in range(len(required_skills))]
        score = clamp(sum(p.credit for p in ordered) / len(ordered))

        logger.debug(
            f"Skills: {sum(1 for p in ordered if p.is_credited)}/{len(ordered)} credited, score={score:.1f}"
        )
        return SkillMatchResult(score=score, pairs=ordered)
