#!/usr/bin/env python3
"""
Rank Assigner - Total, deterministic ordering of a scored pool.

Order: match score, then eligibility, education and experience (all
descending), then applicant id ascending. Ranks are 1..n with no gaps, so
equal scores still get distinct ranks; find_tie_groups reports them.
"""

from itertools import groupby
from typing import List, Sequence, Tuple

from ranker.scorer.models import RankedApplicant, ScoredApplicant, TieGroup
from ranker.utils import round_score


def rank_key(scored: ScoredApplicant) -> Tuple:
    sub = scored.sub_scores
    return (
        -scored.match_score,
        -sub.eligibility_score,
        -sub.education_score,
        -sub.experience_score,
        scored.applicant_id,
    )


def assign_ranks(scored: Sequence[ScoredApplicant]) -> List[Tuple[int, ScoredApplicant]]:
    """Return (rank, applicant) pairs, best first."""
    ordered = sorted(scored, key=rank_key)
    return [(position, s) for position, s in enumerate(ordered, start=1)]


def find_tie_groups(ranked: Sequence[RankedApplicant]) -> List[TieGroup]:
    """Groups of two or more applicants with the same two-decimal match score, in rank order."""
    ordered = sorted(ranked, key=lambda r: r.rank)
    groups = []
    for score, members in groupby(ordered, key=lambda r: round_score(r.match_score)):
        ids = tuple(m.applicant_id for m in members)
        if len(ids) > 1:
            groups.append(TieGroup(score=score, applicant_ids=ids))
    return groups
