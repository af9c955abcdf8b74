#!/usr/bin/env python3
"""
Explainability Module - Structured explanations and their text rendering.

Scoring builds an Explanation (per-factor score, weight, contribution and
verdict code, plus the ensemble decision). ReasoningBuilder turns it into
the text HR staff read; no other module writes prose.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ranker.matcher.skill_matcher import SkillMatchPair
from ranker.scorer import features
from ranker.scorer.algorithms import ALGORITHM1_WEIGHTS
from ranker.scorer.ensemble import EnsembleDecision, TieBreak
from ranker.scorer.models import AlgorithmDetails, Explanation, FactorContribution, FeatureScore, SubScores

logger = logging.getLogger(__name__)

FACTOR_ORDER = (features.EDUCATION, features.EXPERIENCE, features.SKILLS, features.ELIGIBILITY)

# Algorithm 3 component that each factor feeds on the tie-break path
_TIE_BREAK_COMPONENTS = {
    features.EDUCATION: 'degree',
    features.EXPERIENCE: 'extra_years',
    features.SKILLS: 'skill_diversity',
    features.ELIGIBILITY: 'eligibility',
}

_FIELD_LABELS = {
    'education': 'education',
    'skills': 'skills',
    'eligibilities': 'eligibilities',
    'scoring_error': 'scoring could not be completed',
}


def build_explanation(
    feature_scores: Dict[str, FeatureScore],
    decision: EnsembleDecision,
    skill_pairs: Sequence[SkillMatchPair] = (),
    incomplete_fields: Sequence[str] = (),
) -> Explanation:
    """
    Collect factor contributions for the path the ensemble actually took.

    On the blend path contributions use the weighted-sum weights; on the
    tie-break path they are the Algorithm 3 points each factor earned.
    """
    tie_break = isinstance(decision, TieBreak)
    factors = []
    for name in FACTOR_ORDER:
        feature = feature_scores[name]
        if tie_break:
            weight = None
            contribution = decision.algorithm3.components.get(_TIE_BREAK_COMPONENTS[name])
        else:
            weight = ALGORITHM1_WEIGHTS[name]
            contribution = weight * feature.score
        factors.append(FactorContribution(
            factor=name,
            score=round(feature.score, 2),
            weight=weight,
            contribution=None if contribution is None else round(contribution, 2),
            verdict=feature.verdict,
            details=dict(feature.details),
        ))

    return Explanation(
        factors=tuple(factors),
        ensemble_method=decision.method,
        score_difference=decision.score_difference,
        skill_pairs=tuple(skill_pairs),
        incomplete_fields=tuple(incomplete_fields),
    )


class ReasoningBuilder:
    """Fixed text templates for rendering an Explanation."""

    @staticmethod
    def describe_education(factor: FactorContribution) -> str:
        verdict = factor.verdict
        details = factor.details
        if verdict == features.NO_REQUIREMENT:
            return 'No degree requirement.'
        if verdict == features.MISSING:
            return 'Education information is incomplete.'
        if verdict == features.AND_PARTIAL:
            text = (
                f"Applicant degrees match {details.get('matched', 0)} of {details.get('total', 0)} "
                f"required degrees, but the requirement uses \"and\", so all must be satisfied for full credit."
            )
        elif verdict == features.MATCH:
            if details.get('mode') == 'and':
                text = 'Applicant degrees fully satisfy the multi-degree requirement.'
            else:
                text = 'Applicant degree meets the required degree.'
        elif verdict == features.RELATED_FIELD:
            text = 'Applicant degree is in a closely related field.'
        elif details.get('mode') == 'and':
            text = 'Applicant degrees do not satisfy the full multi-degree requirement.'
        else:
            text = 'Applicant degree does not meet the required degree.'

        if details.get('level_gap'):
            gap = details['level_gap']
            text += f" Degree level is {gap} {'level' if gap == 1 else 'levels'} below the requirement."
        return text

    @staticmethod
    def describe_experience(factor: FactorContribution) -> str:
        details = factor.details
        actual = details.get('actual_years', 0)
        required = details.get('required_years', 0)
        if factor.verdict == features.NO_REQUIREMENT or not required:
            return f"Experience: {actual} years, no minimum required."

        diff = details.get('surplus_years', 0)
        if diff > 0:
            return f"Experience: {actual} years, about {diff} {'year' if diff == 1 else 'years'} above the {required}-year requirement."
        if diff == 0:
            return f"Experience: {actual} years, exactly meets the {required}-year requirement."
        short = abs(diff)
        return f"Experience: {actual} years, about {short} {'year' if short == 1 else 'years'} below the {required}-year requirement."

    @staticmethod
    def describe_skills(factor: FactorContribution) -> str:
        verdict = factor.verdict
        details = factor.details
        total = details.get('total', 0)
        if verdict == features.NO_REQUIREMENT:
            return 'No specific skills required.'
        if verdict == features.MISSING:
            return f"No skills listed by the applicant for {total} required skills."
        if verdict == features.MATCH:
            return f"All {total} required skills are directly matched. Skills score is {factor.score:.1f}%."
        if verdict == features.RELATED_ONLY:
            return (
                f"{details.get('related', 0)} skills look related to the requirements (shared keywords/semantics), "
                f"but they are below the similarity threshold used for scoring, so the skills score remains 0%."
            )
        if verdict == features.NO_MATCH:
            return f"No required skills are matched out of {total} required skills. Skills score is 0.0%."
        return (
            f"Matches {details.get('strong', 0)} of {total} required skills directly, "
            f"plus {details.get('related', 0)} related skills. Skills score is {factor.score:.1f}%."
        )

    @staticmethod
    def describe_eligibility(factor: FactorContribution) -> str:
        verdict = factor.verdict
        details = factor.details
        if verdict == features.NO_REQUIREMENT:
            return 'No eligibility required.'
        if verdict == features.MISSING:
            return 'Applicant lists no eligibilities.'
        if verdict == features.MATCH:
            return f"Meets all {details.get('total', 0)} eligibility requirements."
        return (
            f"Meets {details.get('satisfied', 0)} of {details.get('total', 0)} eligibility requirements; "
            f"all are needed for eligibility credit."
        )

    @staticmethod
    def describe_factor(factor: FactorContribution) -> str:
        describe = {
            features.EDUCATION: ReasoningBuilder.describe_education,
            features.EXPERIENCE: ReasoningBuilder.describe_experience,
            features.SKILLS: ReasoningBuilder.describe_skills,
            features.ELIGIBILITY: ReasoningBuilder.describe_eligibility,
        }[factor.factor]
        return describe(factor)

    @staticmethod
    def strengths_and_gaps(sub_scores: SubScores) -> str:
        strengths: List[str] = []
        gaps: List[str] = []

        if sub_scores.education_score >= 80:
            strengths.append('strong educational background')
        elif sub_scores.education_score < 60:
            gaps.append('education level')

        if sub_scores.experience_score >= 80:
            strengths.append(
                'excellent relevant experience' if sub_scores.experience_score == 100 else 'solid work experience'
            )
        elif sub_scores.experience_score < 60:
            gaps.append('years of experience')

        if sub_scores.skills_score >= 60:
            strengths.append('good technical skills')
        elif sub_scores.skills_score < 40:
            gaps.append('required skills')

        if sub_scores.eligibility_score >= 80:
            strengths.append('appropriate certifications')
        elif sub_scores.eligibility_score < 60:
            gaps.append('certifications')

        parts = []
        if strengths:
            parts.append(f"Candidate demonstrates {', '.join(strengths)}.")
        if gaps:
            lead = 'Areas for development include' if strengths else 'Needs improvement in'
            parts.append(f"{lead} {', '.join(gaps)}.")
        if not parts:
            return 'Candidate evaluated across multiple qualification criteria.'
        return ' '.join(parts)

    @staticmethod
    def ensemble_summary(details: AlgorithmDetails) -> str:
        if details.is_tie_breaker:
            return (
                f"Algorithms 1 & 2 within 5 points ({details.algorithm1_score:.1f} vs "
                f"{details.algorithm2_score:.1f}); tie-breaker score {details.algorithm3_score:.1f} used."
            )
        return (
            f"Weighted average of Algorithm 1 ({details.algorithm1_score:.1f}, "
            f"{details.algorithm1_weight:.0%}) and Algorithm 2 ({details.algorithm2_score:.1f}, "
            f"{details.algorithm2_weight:.0%})."
        )

    @staticmethod
    def incomplete_note(fields: Sequence[str]) -> Optional[str]:
        if not fields:
            return None
        labels = [_FIELD_LABELS.get(f, f) for f in fields]
        return f"Incomplete application: {', '.join(labels)}."

    @staticmethod
    def build(
        explanation: Optional[Explanation],
        sub_scores: SubScores,
        details: Optional[AlgorithmDetails],
        incomplete_fields: Sequence[str] = (),
    ) -> str:
        lines = [ReasoningBuilder.strengths_and_gaps(sub_scores)]
        if explanation is not None:
            lines.extend(ReasoningBuilder.describe_factor(f) for f in explanation.factors)
        if details is not None:
            lines.append(ReasoningBuilder.ensemble_summary(details))

        note = ReasoningBuilder.incomplete_note(incomplete_fields)
        if note:
            lines.append(note)
        return '\n'.join(lines)
