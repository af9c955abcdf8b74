#!/usr/bin/env python3
"""
Feature Scorers - The four independent 0-100 sub-scores.

Each scorer returns a FeatureScore whose `verdict` is a short code
(e.g. "match", "related_field", "and_partial"). Turning codes into sentences
is left to ReasoningBuilder.
"""

import logging
from typing import Dict, List, Set, Tuple

from ranker.config_loader import RankingConfig
from ranker.matcher.degrees import RelatedFieldTable, detect_degree_level, extract_degree_field, level_gap
from ranker.matcher.models import Applicant, PreparedJob
from ranker.matcher.requirement_parser import RequirementGroup, parse_requirement
from ranker.matcher.similarity import similarity
from ranker.matcher.skill_matcher import SkillMatcher, SkillMatchResult
from ranker.scorer.models import FeatureScore
from ranker.utils import clamp, normalize_text

logger = logging.getLogger(__name__)

EDUCATION = 'education'
EXPERIENCE = 'experience'
SKILLS = 'skills'
ELIGIBILITY = 'eligibility'

NO_REQUIREMENT = 'no_requirement'
MISSING = 'missing'
MATCH = 'match'
RELATED_FIELD = 'related_field'
PARTIAL = 'partial'
AND_PARTIAL = 'and_partial'
RELATED_ONLY = 'related_only'
NO_MATCH = 'no_match'
MEETS = 'meets'
SHORT = 'short'

MAX_PENALIZED_LEVELS = 3


def _applicant_degrees(education: str) -> List[str]:
    """An applicant may list several degrees in one string ("BS IT and MS CS")."""
    return parse_requirement(education).fragments


def _best_field_similarity(alternatives, degrees: List[str]) -> Tuple[float, str, str]:
    best = (0.0, '', '')
    for alt in alternatives:
        required_field = extract_degree_field(alt)
        for degree in degrees:
            applicant_field = extract_degree_field(degree)
            sim = similarity(required_field, applicant_field)
            if sim > best[0]:
                best = (sim, required_field, applicant_field)
    return best


def score_education(
    prepared: PreparedJob,
    applicant: Applicant,
    config: RankingConfig,
    related_fields: RelatedFieldTable,
) -> FeatureScore:
    """
    Score the applicant's degree against the job's degree requirement.

    OR/single requirements take the best field similarity (full credit above
    the match threshold, related-field floor otherwise). AND requirements are
    all-or-nothing. A detected degree level below the required one costs a
    fixed penalty per level.
    """
    cfg = config.similarity
    if not prepared.requires_degree:
        return FeatureScore(EDUCATION, config.neutral_score, NO_REQUIREMENT)

    degrees = _applicant_degrees(applicant.education)
    if not degrees:
        return FeatureScore(EDUCATION, 0.0, MISSING, incomplete=True)

    requirement = prepared.degree
    details: Dict = {'mode': requirement.mode, 'requirement': requirement.raw}

    if requirement.requires_all:
        matched = 0
        for group in requirement.groups:
            best, _, _ = _best_field_similarity(group.alternatives, degrees)
            if best >= cfg.degree_match_threshold:
                matched += 1
        total = len(requirement.groups)
        details.update(matched=matched, total=total)
        if matched == total:
            score, verdict = 100.0, MATCH
        else:
            score, verdict = 0.0, AND_PARTIAL if matched else NO_MATCH
    else:
        alternatives = requirement.fragments
        best, required_field, applicant_field = _best_field_similarity(alternatives, degrees)
        details.update(similarity=round(best, 1), required_field=required_field, applicant_field=applicant_field)
        if best >= cfg.degree_match_threshold:
            score, verdict = 100.0, MATCH
        elif _any_related(alternatives, degrees, related_fields):
            score, verdict = max(best, cfg.related_field_score), RELATED_FIELD
        else:
            score, verdict = best, PARTIAL if best > 0 else NO_MATCH

    applicant_level = detect_degree_level(applicant.education)
    gap = min(level_gap(prepared.degree_level, applicant_level), MAX_PENALIZED_LEVELS)
    if gap and score > 0:
        score -= cfg.level_shortfall_penalty * gap
        details.update(level_gap=gap, required_level=prepared.degree_level, applicant_level=applicant_level)

    score = clamp(score)
    logger.debug(f"Education for {applicant.id}: {verdict} -> {score:.1f}")
    return FeatureScore(EDUCATION, score, verdict, details=details)


def _any_related(alternatives, degrees: List[str], related_fields: RelatedFieldTable) -> bool:
    return any(
        related_fields.are_related(extract_degree_field(alt), extract_degree_field(degree))
        for alt in alternatives
        for degree in degrees
    )


def score_experience(prepared: PreparedJob, applicant: Applicant, config: RankingConfig) -> FeatureScore:
    actual = round(applicant.experience, config.experience_decimals)
    required = prepared.required_years
    details = {'actual_years': actual, 'required_years': required}

    if required <= 0:
        verdict = NO_REQUIREMENT if prepared.job.years_of_experience is None else MEETS
        return FeatureScore(EXPERIENCE, 100.0, verdict, details=details)

    score = min(100.0, 100.0 * actual / required)
    details['surplus_years'] = round(actual - required, config.experience_decimals)
    return FeatureScore(EXPERIENCE, score, MEETS if actual >= required else SHORT, details=details)


def score_skills(
    prepared: PreparedJob,
    applicant: Applicant,
    config: RankingConfig,
    matcher: SkillMatcher,
) -> Tuple[FeatureScore, SkillMatchResult]:
    if not prepared.skills:
        return FeatureScore(SKILLS, config.neutral_score, NO_REQUIREMENT), SkillMatchResult(score=0.0)
    if not applicant.skills:
        details = {'total': len(prepared.skills), 'matched': 0}
        return FeatureScore(SKILLS, 0.0, MISSING, incomplete=True, details=details), SkillMatchResult(score=0.0)

    result = matcher.match(prepared.skills, applicant.skills)
    total = len(result.pairs)
    if result.strong_count == total:
        verdict = MATCH
    elif result.matched_count:
        verdict = PARTIAL
    elif result.related_count:
        verdict = RELATED_ONLY
    else:
        verdict = NO_MATCH

    details = {
        'total': total,
        'matched': result.matched_count,
        'strong': result.strong_count,
        'related': result.related_count,
        'related_below_threshold': result.related_below_threshold_count,
    }
    feature = FeatureScore(SKILLS, result.score, verdict, matched_count=result.matched_count, details=details)
    return feature, result


def _group_held(
    group: RequirementGroup,
    applicant_eligibilities: List[Tuple[str, str]],
    threshold: float,
    matched_keys: Set[str],
) -> bool:
    held = False
    for fragment in group.alternatives:
        fragment_key = normalize_text(fragment)
        for key, title in applicant_eligibilities:
            if key == fragment_key or similarity(fragment, title) >= threshold:
                matched_keys.add(key)
                held = True
    return held


def score_eligibility(prepared: PreparedJob, applicant: Applicant, config: RankingConfig) -> FeatureScore:
    """
    All-or-nothing eligibility check: every requirement line must be satisfied.

    matched_count counts unique applicant eligibilities that satisfied at
    least one fragment, whether or not every line was met.
    """
    if not prepared.requires_eligibility:
        return FeatureScore(ELIGIBILITY, config.neutral_score, NO_REQUIREMENT)

    total = len(prepared.eligibility_lines)
    if not applicant.eligibilities:
        details = {'satisfied': 0, 'total': total}
        return FeatureScore(ELIGIBILITY, 0.0, MISSING, incomplete=True, details=details)

    applicant_eligibilities: List[Tuple[str, str]] = []
    seen: Set[str] = set()
    for title in applicant.eligibilities:
        key = normalize_text(title)
        if key and key not in seen:
            seen.add(key)
            applicant_eligibilities.append((key, title))

    threshold = config.similarity.eligibility_match_threshold
    matched_keys: Set[str] = set()
    unmet: List[str] = []
    for line in prepared.eligibility_lines:
        # evaluate every group so matched_keys sees all matches
        held = [_group_held(g, applicant_eligibilities, threshold, matched_keys) for g in line.groups]
        if not all(held):
            unmet.append(line.raw)

    satisfied = total - len(unmet)
    if not unmet:
        score, verdict = 100.0, MATCH
    else:
        score, verdict = 0.0, PARTIAL if satisfied else NO_MATCH

    details = {'satisfied': satisfied, 'total': total, 'unmet': unmet}
    return FeatureScore(ELIGIBILITY, score, verdict, matched_count=len(matched_keys), details=details)
