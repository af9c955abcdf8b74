#!/usr/bin/env python3
"""
Custom exceptions for the ranking engine.
"""


class RankingError(Exception):
    """Base exception for ranking engine errors."""
    pass


class InvalidJobRequirementError(RankingError):
    """Raised when a job requirement is malformed or carries no requirements at all."""
    pass


class InvalidApplicantError(RankingError):
    """Raised when an applicant record cannot be turned into an Applicant."""
    pass


class ConfigurationError(RankingError):
    """Raised when the ranking configuration cannot be loaded."""
    pass
