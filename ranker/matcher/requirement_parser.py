#!/usr/bin/env python3
"""
Requirement Parser - Turn free-text degree/eligibility requirements into AND/OR groups.

Grammar (case-insensitive):
- " and " separates AND-groups (every group must be satisfied)
- " or " separates alternatives inside a group (any one satisfies it)
- commas separate items of whichever connective encloses them:
    "BS IT, BS IS, or BS CS"  -> one group, three alternatives
    "A, B, and C"             -> three groups
- no connective               -> one group with one alternative

Requirements are parsed once per ranking run and evaluated many times.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ranker.utils import normalize_text

logger = logging.getLogger(__name__)

# Text like "... Eligibilities: CSC Professional" mistakenly appended to a degree field
_CONTAMINATION_RE = re.compile(r"\s+(?:eligibilities|skills|experience):", re.IGNORECASE)
_AND_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
_OR_RE = re.compile(r"\s+or\s+", re.IGNORECASE)
_COMMA_RE = re.compile(r"\s*,\s*")
_DANGLING_CONNECTIVE_RE = re.compile(r"^(?:and|or)\b|\b(?:and|or)$", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

NO_REQUIREMENT_SENTINELS = frozenset({
    'none',
    'n/a',
    'not required',
    'no degree required',
    'no eligibility required',
    'no eligibilities required',
    'no skills required',
    'no specific skills required',
})


def is_no_requirement(text: Optional[str]) -> bool:
    """True for empty text and explicit 'none / not required' wording."""
    normalized = normalize_text(text)
    return not normalized or normalized in NO_REQUIREMENT_SENTINELS


@dataclass(frozen=True)
class RequirementGroup:
    """One AND-group: satisfied by any of its alternatives."""
    alternatives: Tuple[str, ...]

    @property
    def is_choice(self) -> bool:
        return len(self.alternatives) > 1


@dataclass(frozen=True)
class ParsedRequirement:
    """Parsed AND/OR structure of a single requirement string."""
    raw: str
    groups: Tuple[RequirementGroup, ...]
    requires_all: bool
    fallback: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def mode(self) -> str:
        """'empty', 'single', 'and' or 'or'."""
        if not self.groups:
            return 'empty'
        if self.requires_all:
            return 'and'
        if self.groups[0].is_choice:
            return 'or'
        return 'single'

    @property
    def fragments(self) -> List[str]:
        """All alternatives of all groups, in order."""
        return [alt for group in self.groups for alt in group.alternatives]


def clean_requirement_text(text: Optional[str]) -> str:
    if not text:
        return ''
    cleaned = _CONTAMINATION_RE.split(str(text))[0]
    return _WHITESPACE_RE.sub(' ', cleaned).strip()


def _clean_pieces(pieces: List[str]) -> List[str]:
    return [p.strip(' ,;') for p in pieces if p and p.strip(' ,;')]


def parse_requirement(text: Optional[str]) -> ParsedRequirement:
    """
    Parse a requirement string into AND-groups of OR-alternatives.

    Malformed structures (a connective with nothing on one side) fall back to
    the whole string as a single alternative rather than failing.

    Args:
        text: Requirement text, e.g. "Bachelor's in IT or Computer Science"

    Returns:
        ParsedRequirement; empty when text is blank
    """
    raw = '' if text is None else str(text)
    cleaned = clean_requirement_text(raw)
    if not cleaned:
        return ParsedRequirement(raw=raw, groups=(), requires_all=False)

    and_parts = _AND_RE.split(cleaned)
    groups: List[RequirementGroup] = []

    for part in and_parts:
        if _OR_RE.search(part):
            pieces = [p for chunk in _OR_RE.split(part) for p in _COMMA_RE.split(chunk)]
            alternatives = _clean_pieces(pieces)
            if alternatives:
                groups.append(RequirementGroup(tuple(alternatives)))
        elif len(and_parts) > 1:
            for piece in _clean_pieces(_COMMA_RE.split(part)):
                groups.append(RequirementGroup((piece,)))
        else:
            pieces = _clean_pieces([part])
            if pieces:
                groups.append(RequirementGroup((pieces[0],)))

    malformed = not groups or any(
        _DANGLING_CONNECTIVE_RE.search(alt) for group in groups for alt in group.alternatives
    )
    if malformed:
        logger.warning(f"Could not parse requirement structure of {cleaned!r}, treating it as one alternative")
        return ParsedRequirement(
            raw=raw,
            groups=(RequirementGroup((cleaned,)),),
            requires_all=False,
            fallback=True,
        )

    return ParsedRequirement(raw=raw, groups=tuple(groups), requires_all=len(groups) > 1)
