"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from ranker.config_loader import RankingConfig
from ranker.matcher.models import Applicant, JobRequirement
from ranker.scorer.service import RankingService


@pytest.fixture
def ranking_config():
    return RankingConfig()


@pytest.fixture
def ranking_service(ranking_config):
    return RankingService(ranking_config)


@pytest.fixture
def cs_job():
    """Bachelor's in CS, 2 years, SQL + Python, no eligibility."""
    return JobRequirement(
        id="job-cs",
        title="Programmer",
        degree_requirement="Bachelor's in Computer Science",
        skills=["SQL", "Python"],
        years_of_experience=2,
    )


@pytest.fixture
def make_applicant():
    """Factory for Applicant with sensible defaults."""
    def _make(applicant_id="a1", **overrides):
        data = {
            "id": applicant_id,
            "name": f"Applicant {applicant_id}",
            "education": "",
            "experience": 0,
            "skills": [],
            "eligibilities": [],
        }
        data.update(overrides)
        return Applicant(**data)
    return _make
