#!/usr/bin/env python3
"""
Similarity Calculator - Text similarity between short fragments.

All scores are on a 0-100 scale:
- similarity: exact / substring / Levenshtein-derived similarity
- token_overlap: shared keyword ratio (0.0-1.0)
- semantic_similarity: cosine similarity of character-trigram vectors
"""
import re
from collections import Counter
from typing import Dict, List

import numpy as np
from rapidfuzz.distance import Levenshtein

from ranker.utils import normalize_text

SUBSTRING_SIMILARITY = 90.0

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_STOP_WORDS = frozenset({'the', 'and', 'for', 'with'})


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)."""
    return Levenshtein.distance(a, b)


def contains_phrase(text: str, phrase: str) -> bool:
    """True when `phrase` occurs in `text` on word boundaries ("it" is not in "political")."""
    if not phrase:
        return False
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


def similarity(a: str, b: str) -> float:
    """
    Calculate similarity between two text fragments.

    Args:
        a: First fragment
        b: Second fragment

    Returns:
        100 for an exact (case/whitespace-insensitive) match or two empty
        strings, 0 when only one side is empty, 90 when one contains the
        other as whole words, otherwise 100 * (max_len - distance) / max_len.
    """
    s1 = normalize_text(a)
    s2 = normalize_text(b)

    if s1 == s2:
        return 100.0
    if not s1 or not s2:
        return 0.0
    if contains_phrase(s2, s1) or contains_phrase(s1, s2):
        return SUBSTRING_SIMILARITY

    max_len = max(len(s1), len(s2))
    distance = levenshtein_distance(s1, s2)
    return max(0.0, min(100.0, 100.0 * (max_len - distance) / max_len))


def tokenize(text: str) -> List[str]:
    """Split into lowercase keywords, dropping punctuation, short tokens and stop words."""
    cleaned = _PUNCTUATION_RE.sub(' ', (text or '').lower())
    return [t for t in cleaned.split() if len(t) > 2 and t not in _STOP_WORDS]


def token_overlap(required: str, candidate: str) -> float:
    """Fraction of the required text's keywords that also appear in the candidate (0.0-1.0)."""
    required_tokens = tokenize(required)
    if not required_tokens:
        return 0.0
    candidate_tokens = set(tokenize(candidate))
    common = [t for t in required_tokens if t in candidate_tokens]
    return len(common) / len(required_tokens)


def _trigrams(text: str) -> Counter:
    padded = f"  {normalize_text(text)} "
    return Counter(padded[i:i + 3] for i in range(len(padded) - 2))


class SemanticSimilarity:
    """
    Character-trigram cosine similarity.

    Catches morphological relatives ("data analysis" vs "data analytics",
    "ms excel" vs "excel spreadsheets") that edit distance under-rates.
    Deterministic and model-free.
    """

    @staticmethod
    def calculate(a: str, b: str) -> float:
        """
        Calculate trigram cosine similarity.

        Returns:
            Similarity in [0, 100], or 0.0 if either text is empty
        """
        grams_a = _trigrams(a)
        grams_b = _trigrams(b)
        if not normalize_text(a) or not normalize_text(b):
            return 0.0

        vocab: Dict[str, int] = {g: i for i, g in enumerate(sorted(set(grams_a) | set(grams_b)))}
        vec_a = np.zeros(len(vocab), dtype=np.float64)
        vec_b = np.zeros(len(vocab), dtype=np.float64)
        for g, c in grams_a.items():
            vec_a[vocab[g]] = c
        for g, c in grams_b.items():
            vec_b[vocab[g]] = c

        norm_a = np.linalg.norm(vec_a)
        norm_b = np.linalg.norm(vec_b)
        if norm_a == 0 or norm_b == 0:
            return 0.0

        cosine = float(np.dot(vec_a, vec_b) / (norm_a * norm_b))
        return max(0.0, min(100.0, 100.0 * cosine))


def semantic_similarity(a: str, b: str) -> float:
    return SemanticSimilarity.calculate(a, b)
