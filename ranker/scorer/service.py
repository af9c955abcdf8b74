#!/usr/bin/env python3
"""
Ranking Service - Score a pool of applicants against one job and rank them.

Two phases:
1. Per-applicant scoring (independent, optionally on a thread pool):
   sub-scores -> Algorithms 1 and 2 -> ensemble decision -> explanation
2. After every applicant is scored: pool statistics, percentiles, ranks,
   reasoning text and tie groups.

The service holds no per-run state; the same instance can rank any number
of jobs, concurrently if the caller wishes.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional
import logging

from ranker.config_loader import RankingConfig
from ranker.exceptions import InvalidApplicantError
from ranker.matcher.degrees import RelatedFieldTable
from ranker.matcher.models import Applicant, JobRequirement, PreparedJob
from ranker.matcher.skill_matcher import SkillMatcher
from ranker.scorer import algorithms, ensemble, features
from ranker.scorer.explainability import ReasoningBuilder, build_explanation
from ranker.scorer.models import RankedApplicant, RankingResult, ScoredApplicant, SubScores
from ranker.scorer.ranking import assign_ranks, find_tie_groups
from ranker.scorer.statistics import pool_percentiles, pool_statistics
from ranker.utils import clamp_score, round_score

logger = logging.getLogger(__name__)

SCORING_ERROR = 'scoring_error'


class RankingService:
    """
    Deterministic applicant ranking for a single job at a time.

    For a fixed job, applicant pool and config, rank() always returns the
    same result regardless of input order or worker count.
    """

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        related_fields: Optional[RelatedFieldTable] = None
    ):
        self.config = config or RankingConfig()
        self.related_fields = related_fields or RelatedFieldTable.from_yaml(
            self.config.similarity.related_fields_file
        )
        self.skill_matcher = SkillMatcher(self.config.skills)

    def prepare_job(self, job: Any) -> PreparedJob:
        """Validate the job and parse its requirement strings once for the run."""
        job = JobRequirement.from_data(job)
        return PreparedJob.from_job(job, self.config.experience_decimals)

    def score_applicant(self, prepared: PreparedJob, applicant: Applicant) -> ScoredApplicant:
        """Phase 1 for one applicant: sub-scores, algorithms, ensemble and explanation."""
        config = self.config

        education = features.score_education(prepared, applicant, config, self.related_fields)
        experience = features.score_experience(prepared, applicant, config)
        skills, skill_result = features.score_skills(prepared, applicant, config, self.skill_matcher)
        eligibility = features.score_eligibility(prepared, applicant, config)

        sub_scores = SubScores(
            education_score=round_score(clamp_score(education.score), config.score_decimals),
            experience_score=round_score(clamp_score(experience.score), config.score_decimals),
            skills_score=round_score(clamp_score(skills.score), config.score_decimals),
            eligibility_score=round_score(clamp_score(eligibility.score), config.score_decimals),
        )

        actual_years = round(applicant.experience, config.experience_decimals)
        required_years = prepared.required_years

        a1 = algorithms.algorithm1_weighted_sum(sub_scores)
        a2 = algorithms.algorithm2_skill_experience_composite(sub_scores, actual_years, required_years)
        decision = ensemble.select(
            a1, a2,
            lambda: algorithms.algorithm3_tie_breaker(
                sub_scores, actual_years, required_years, skills.matched_count
            ),
        )
        match_score = round_score(clamp_score(decision.final_score), config.score_decimals)

        feature_scores = {f.factor: f for f in (education, experience, skills, eligibility)}
        incomplete_fields = tuple(
            name for name, feature in (
                ('education', education),
                ('skills', skills),
                ('eligibilities', eligibility),
            )
            if feature.incomplete
        )
        explanation = build_explanation(feature_scores, decision, skill_result.pairs, incomplete_fields)

        logger.debug(
            f"Applicant {applicant.id}: edu={sub_scores.education_score:.1f}, "
            f"exp={sub_scores.experience_score:.1f}, skills={sub_scores.skills_score:.1f}, "
            f"elig={sub_scores.eligibility_score:.1f}, match={match_score:.2f} ({decision.method})"
        )

        return ScoredApplicant(
            applicant_id=applicant.id,
            applicant_name=applicant.name,
            match_score=match_score,
            sub_scores=sub_scores,
            algorithm_details=decision.to_details(),
            explanation=explanation,
            matched_skills_count=skills.matched_count,
            matched_eligibilities_count=eligibility.matched_count,
            incomplete_fields=incomplete_fields,
        )

    def _score_safely(self, prepared: PreparedJob, applicant: Applicant) -> ScoredApplicant:
        try:
            return self.score_applicant(prepared, applicant)
        except Exception:
            logger.exception(f"Scoring failed for applicant {applicant.id}, ranking with score 0")
            return ScoredApplicant(
                applicant_id=applicant.id,
                applicant_name=applicant.name,
                match_score=0.0,
                sub_scores=SubScores(),
                algorithm_details=None,
                explanation=None,
                incomplete_fields=(SCORING_ERROR,),
            )

    def _score_pool(self, prepared: PreparedJob, applicants: List[Applicant]) -> List[ScoredApplicant]:
        workers = max(1, self.config.max_workers)
        if workers == 1 or len(applicants) < 2:
            return [self._score_safely(prepared, a) for a in applicants]

        with ThreadPoolExecutor(max_workers=min(workers, len(applicants))) as executor:
            # map() yields in input order
            return list(executor.map(lambda a: self._score_safely(prepared, a), applicants))

    def rank(self, job: Any, applicants: Iterable[Any]) -> RankingResult:
        """
        Score and rank every applicant for the job.

        Args:
            job: JobRequirement or mapping with its fields
            applicants: Applicant models or mappings, in any order

        Returns:
            RankingResult with applicants ordered best first

        Raises:
            InvalidJobRequirementError: job is malformed or requires nothing
            InvalidApplicantError: an applicant record is malformed or its id is duplicated
        """
        prepared = self.prepare_job(job)
        pool = self._validate_applicants(applicants)

        scored = self._score_pool(prepared, pool)

        statistics = pool_statistics(scored)
        percentiles = dict(zip((s.applicant_id for s in scored), pool_percentiles(scored)))
        total = len(scored)

        ranked: List[RankedApplicant] = []
        for rank, s in assign_ranks(scored):
            reasoning = ReasoningBuilder.build(
                s.explanation, s.sub_scores, s.algorithm_details, s.incomplete_fields
            )
            ranked.append(RankedApplicant(
                applicant_id=s.applicant_id,
                applicant_name=s.applicant_name,
                rank=rank,
                match_score=s.match_score,
                sub_scores=s.sub_scores,
                algorithm_details=s.algorithm_details,
                percentiles=percentiles[s.applicant_id],
                reasoning=reasoning,
                explanation=s.explanation,
                total_applicants=total,
                matched_skills_count=s.matched_skills_count,
                matched_eligibilities_count=s.matched_eligibilities_count,
                incomplete_fields=s.incomplete_fields,
            ))

        tie_groups = find_tie_groups(ranked)
        logger.info(
            f"Ranked {total} applicants for job {prepared.job.id or '<unknown>'} "
            f"({len(tie_groups)} tie groups, {sum(1 for r in ranked if r.incomplete)} incomplete)"
        )
        return RankingResult(
            job_id=prepared.job.id,
            applicants=tuple(ranked),
            statistics=statistics,
            tie_groups=tuple(tie_groups),
        )

    @staticmethod
    def _validate_applicants(applicants: Iterable[Any]) -> List[Applicant]:
        pool = [Applicant.from_data(a) for a in applicants]
        seen = set()
        for applicant in pool:
            if applicant.id in seen:
                raise InvalidApplicantError(f"Duplicate applicant id {applicant.id!r}")
            seen.add(applicant.id)
        return pool


def rank_applicants(job: Any, applicants: Iterable[Any], config: Optional[RankingConfig] = None) -> RankingResult:
    """Convenience wrapper: RankingService(config).rank(job, applicants)."""
    return RankingService(config).rank(job, applicants)
