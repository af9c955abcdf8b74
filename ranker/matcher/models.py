#!/usr/bin/env python3
"""
Matcher Models - Validated input value types and the per-run prepared job.

JobRequirement and Applicant are built once at the system boundary; loosely
typed records (dicts from storage, camelCase API payloads) are rejected here
before they reach the scorers.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ranker.exceptions import InvalidApplicantError, InvalidJobRequirementError
from ranker.matcher.degrees import detect_degree_level
from ranker.matcher.requirement_parser import ParsedRequirement, is_no_requirement, parse_requirement
from ranker.utils import unique_preserving_order

_ELIGIBILITY_TITLE_KEYS = ('title', 'eligibility_title', 'eligibilityTitle', 'name')


def _as_string_tuple(value: Any, field_name: str) -> Tuple[str, ...]:
    """Coerce None / str / list / set into a tuple of non-blank strings.

    Sets are sorted so that unordered input still yields a deterministic order.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, (set, frozenset)):
        value = sorted(value, key=lambda v: str(v).lower())
    elif not isinstance(value, (list, tuple)):
        raise ValueError(f"{field_name} must be a list of strings, got {type(value).__name__}")

    items = []
    for item in value:
        if item is None:
            continue
        if isinstance(item, Mapping):
            item = next((item[k] for k in _ELIGIBILITY_TITLE_KEYS if item.get(k)), None)
            if item is None:
                continue
        if not isinstance(item, str):
            raise ValueError(f"{field_name} entries must be strings, got {type(item).__name__}")
        if item.strip():
            items.append(item.strip())
    return tuple(items)


def _as_years(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number")
    try:
        years = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    if math.isnan(years) or math.isinf(years):
        raise ValueError(f"{field_name} must be finite")
    if years < 0:
        raise ValueError(f"{field_name} must be >= 0, got {years}")
    return years


class JobRequirement(BaseModel):
    """Requirements of one job posting. Immutable for the duration of a ranking run."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    title: Optional[str] = None
    degree_requirement: str = Field(
        default="", validation_alias=AliasChoices('degree_requirement', 'degreeRequirement')
    )
    eligibilities: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    years_of_experience: Optional[float] = Field(
        default=None, validation_alias=AliasChoices('years_of_experience', 'yearsOfExperience')
    )

    @field_validator('id', mode='before')
    @classmethod
    def _coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator('degree_requirement', mode='before')
    @classmethod
    def _coerce_degree(cls, v):
        return '' if v is None else str(v).strip()

    @field_validator('eligibilities', 'skills', mode='before')
    @classmethod
    def _coerce_lists(cls, v, info):
        return _as_string_tuple(v, info.field_name)

    @field_validator('years_of_experience', mode='before')
    @classmethod
    def _coerce_years(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return _as_years(v, 'years_of_experience')

    @property
    def has_requirements(self) -> bool:
        return bool(
            self.degree_requirement
            or self.eligibilities
            or self.skills
            or self.years_of_experience is not None
        )

    @property
    def required_years(self) -> float:
        return self.years_of_experience or 0.0

    @classmethod
    def from_data(cls, data: Any) -> "JobRequirement":
        """Build a JobRequirement from a model or mapping, rejecting malformed shapes."""
        if isinstance(data, cls):
            job = data
        elif isinstance(data, Mapping):
            try:
                job = cls.model_validate(dict(data))
            except ValidationError as e:
                raise InvalidJobRequirementError(f"Malformed job requirement: {e}") from e
        else:
            raise InvalidJobRequirementError(
                f"Job requirement must be a mapping or JobRequirement, got {type(data).__name__}"
            )

        if not job.has_requirements:
            raise InvalidJobRequirementError(
                f"Job {job.id or '<unknown>'} has no degree, eligibility, skill or experience requirement"
            )
        return job


class Applicant(BaseModel):
    """One candidate's qualifications, as supplied by the calling application."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices('id', 'applicant_id', 'applicantId'))
    name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('name', 'applicant_name', 'applicantName')
    )
    education: str = Field(
        default="", validation_alias=AliasChoices('education', 'highestEducationalAttainment')
    )
    experience: float = Field(
        default=0.0, validation_alias=AliasChoices('experience', 'totalYearsExperience')
    )
    skills: Tuple[str, ...] = ()
    eligibilities: Tuple[str, ...] = ()

    @field_validator('id', mode='before')
    @classmethod
    def _coerce_id(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("applicant id is required")
        return str(v).strip()

    @field_validator('education', mode='before')
    @classmethod
    def _coerce_education(cls, v):
        return '' if v is None else str(v).strip()

    @field_validator('experience', mode='before')
    @classmethod
    def _coerce_experience(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        return _as_years(v, 'experience')

    @field_validator('skills', 'eligibilities', mode='before')
    @classmethod
    def _coerce_lists(cls, v, info):
        return _as_string_tuple(v, info.field_name)

    @classmethod
    def from_data(cls, data: Any) -> "Applicant":
        """Build an Applicant from a model or mapping, rejecting malformed shapes."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise InvalidApplicantError(
                f"Applicant must be a mapping or Applicant, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidApplicantError(f"Malformed applicant record: {e}") from e


@dataclass(frozen=True)
class PreparedJob:
    """A JobRequirement with every requirement string parsed once for the run."""
    job: JobRequirement
    degree: ParsedRequirement
    degree_level: Optional[str]
    eligibility_lines: Tuple[ParsedRequirement, ...]
    skills: Tuple[str, ...]
    required_years: float
    requires_degree: bool
    requires_eligibility: bool

    @classmethod
    def from_job(cls, job: JobRequirement, experience_decimals: int = 1) -> "PreparedJob":
        requires_degree = not is_no_requirement(job.degree_requirement)
        degree = parse_requirement(job.degree_requirement) if requires_degree else parse_requirement('')

        lines = [line for line in job.eligibilities if line.strip()]
        requires_eligibility = bool(lines) and not any(is_no_requirement(line) for line in lines)
        eligibility_lines = tuple(parse_requirement(line) for line in lines) if requires_eligibility else ()

        skills = tuple(s for s in unique_preserving_order(job.skills) if not is_no_requirement(s))

        return cls(
            job=job,
            degree=degree,
            degree_level=detect_degree_level(job.degree_requirement) if requires_degree else None,
            eligibility_lines=eligibility_lines,
            skills=skills,
            required_years=round(job.required_years, experience_decimals),
            requires_degree=requires_degree and not degree.is_empty,
            requires_eligibility=requires_eligibility,
        )
