"""Applicant ranker - deterministic applicant/job match scoring and ranking."""
from ranker.config_loader import RankingConfig, load_config
from ranker.exceptions import (
    ConfigurationError, InvalidApplicantError, InvalidJobRequirementError, RankingError
)
from ranker.matcher.models import Applicant, JobRequirement
from ranker.scorer import RankedApplicant, RankingResult, RankingService, rank_applicants

__all__ = [
    'RankingConfig', 'load_config',
    'RankingError', 'InvalidJobRequirementError', 'InvalidApplicantError', 'ConfigurationError',
    'Applicant', 'JobRequirement',
    'RankingService', 'rank_applicants', 'RankedApplicant', 'RankingResult',
]
