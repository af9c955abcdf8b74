#!/usr/bin/env python3
"""
Degree helpers - field extraction, degree level detection and related-field lookup.
"""
import logging
import os
import re
from typing import Dict, List, Optional

import yaml

from ranker.config_loader import DEFAULT_RELATED_FIELDS_FILE
from ranker.exceptions import ConfigurationError
from ranker.utils import normalize_text

logger = logging.getLogger(__name__)

_IN_FIELD_RE = re.compile(r"\bin\s+(.+)$", re.IGNORECASE)
_OF_FIELD_RE = re.compile(r"\bof\s+(.+)$", re.IGNORECASE)

DEGREE_LEVELS = ['elementary', 'secondary', 'vocational', 'bachelor', 'master', 'doctoral']

# Checked highest level first: "Bachelor in Elementary Education" is a bachelor
_LEVEL_PATTERNS = [
    ('doctoral', re.compile(r"\bdoctor|\bph\.?\s?d\b|\bdoctorate\b")),
    ('master', re.compile(
        r"\bmaster|\bm\.s\.|\bm\.a\.|\bm\.sc\b"
        r"|\b(?:ms|msc|mscs|msit|ma|maed|mba|mpa|mph|mpm)\b"
    )),
    # compact forms: bsit, bscs, bsed, bsba, beed
    ('bachelor', re.compile(
        r"\bbachelor|\bcollege\b|\bb\.s\.|\bb\.sc\b|\bbs[a-z]{0,5}\b|\bba\b|\bab\b|\bbeed\b|\bbaed\b"
    )),
    ('vocational', re.compile(r"\bvocational\b|\btech-voc\b|\btvet\b|\btesda\b")),
    ('secondary', re.compile(r"\bhigh school\b|\bsecondary\b|\bsenior high\b|\bjunior high\b")),
    ('elementary', re.compile(r"\belementary\b|\bprimary\b")),
]


def extract_degree_field(degree: str) -> str:
    """Return the field of study: the text after 'in' (preferred) or 'of', else the whole degree."""
    text = (degree or '').strip()
    match = _IN_FIELD_RE.search(text) or _OF_FIELD_RE.search(text)
    if match:
        return match.group(1).strip()
    return text


def detect_degree_level(degree: str) -> Optional[str]:
    """Detect the degree level from free text, or None when it cannot be told."""
    lower = normalize_text(degree)
    if not lower:
        return None
    for level, pattern in _LEVEL_PATTERNS:
        if pattern.search(lower):
            return level
    return None


def level_gap(required_level: Optional[str], applicant_level: Optional[str]) -> int:
    """Levels the applicant is below the requirement (0 when equal, higher or unknown)."""
    if required_level is None or applicant_level is None:
        return 0
    return max(0, DEGREE_LEVELS.index(required_level) - DEGREE_LEVELS.index(applicant_level))


class RelatedFieldTable:
    """Symmetric lookup of closely related degree fields."""

    def __init__(self, related: Optional[Dict[str, List[str]]] = None):
        self._related: Dict[str, List[str]] = {
            normalize_text(k): [normalize_text(v) for v in (values or []) if v]
            for k, values in (related or {}).items()
            if k
        }

    def __len__(self) -> int:
        return len(self._related)

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> "RelatedFieldTable":
        path = path or DEFAULT_RELATED_FIELDS_FILE
        if not os.path.exists(path):
            raise ConfigurationError(f"Related fields file not found: {path}")

        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Could not parse {path}: {e}") from e

        related = data.get('related_fields', data) if isinstance(data, dict) else None
        if not isinstance(related, dict):
            raise ConfigurationError(f"{path} must map degree fields to lists of related fields")

        table = cls(related)
        logger.debug(f"Loaded {len(table)} related degree fields from {path}")
        return table

    def are_related(self, field_a: str, field_b: str) -> bool:
        a = normalize_text(field_a)
        b = normalize_text(field_b)
        if not a or not b:
            return False
        for field, related in self._related.items():
            if field in a and any(r in b for r in related):
                return True
            if field in b and any(r in a for r in related):
                return True
        return False
