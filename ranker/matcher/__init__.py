"""Matcher Module - Requirement parsing, text similarity and skill matching."""
from ranker.matcher.models import Applicant, JobRequirement, PreparedJob
from ranker.matcher.requirement_parser import (
    ParsedRequirement, RequirementGroup, is_no_requirement, parse_requirement
)
from ranker.matcher.similarity import (
    SemanticSimilarity, levenshtein_distance, semantic_similarity, similarity, token_overlap, tokenize
)
from ranker.matcher.skill_matcher import SkillMatcher, SkillMatchPair, SkillMatchResult
from ranker.matcher.degrees import RelatedFieldTable, detect_degree_level, extract_degree_field

__all__ = [
    'Applicant', 'JobRequirement', 'PreparedJob',
    'ParsedRequirement', 'RequirementGroup', 'is_no_requirement', 'parse_requirement',
    'SemanticSimilarity', 'levenshtein_distance', 'semantic_similarity', 'similarity',
    'token_overlap', 'tokenize',
    'SkillMatcher', 'SkillMatchPair', 'SkillMatchResult',
    'RelatedFieldTable', 'detect_degree_level', 'extract_degree_field',
]
