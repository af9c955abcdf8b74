#!/usr/bin/env python3
"""
Pool Statistics - Descriptive statistics, percentiles and comparison helpers.

Percentiles use "at or below": the share of the pool whose value is <= the
applicant's value, so the top applicant is always at 100.
"""

import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from ranker.scorer.models import METRICS, PoolStatistics, ScoredApplicant
from ranker.utils import round_score

logger = logging.getLogger(__name__)


def _valid(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray([v for v in values if v is not None], dtype=float)
    return arr[~np.isnan(arr)]


def calculate_statistics(values: Sequence[float]) -> PoolStatistics:
    """min, max, mean, median and population standard deviation of the values."""
    arr = _valid(values)
    if arr.size == 0:
        return PoolStatistics()
    return PoolStatistics(
        min=round_score(np.min(arr)),
        max=round_score(np.max(arr)),
        mean=round_score(np.mean(arr)),
        median=round_score(np.median(arr)),
        std_dev=round_score(np.std(arr)),
    )


def percentile(value: float, values: Sequence[float]) -> float:
    """Percentage (0-100) of values at or below `value`."""
    arr = _valid(values)
    if arr.size == 0 or value is None or math.isnan(value):
        return 0.0
    if arr.size == 1:
        return 100.0
    return round_score(100.0 * np.count_nonzero(arr <= value) / arr.size)


def pool_statistics(scored: Sequence[ScoredApplicant]) -> Dict[str, PoolStatistics]:
    return {metric: calculate_statistics([s.metric(metric) for s in scored]) for metric in METRICS}


def pool_percentiles(scored: Sequence[ScoredApplicant]) -> List[Dict[str, float]]:
    """Per-metric percentiles for every applicant, in input order."""
    columns = {metric: [s.metric(metric) for s in scored] for metric in METRICS}
    return [
        {metric: percentile(s.metric(metric), columns[metric]) for metric in METRICS}
        for s in scored
    ]


def distribution(values: Sequence[float], bucket_count: int = 5) -> Dict:
    """
    Histogram buckets between the pool minimum and maximum.

    Returns:
        {'buckets': [{'range': '40-52', 'count': 3}, ...], 'total': n}
    """
    arr = _valid(values)
    if arr.size == 0 or bucket_count < 1:
        return {'buckets': [], 'total': int(arr.size)}

    lo, hi = float(np.min(arr)), float(np.max(arr))
    size = (hi - lo) / bucket_count
    buckets = []
    for i in range(bucket_count):
        start = lo + i * size
        end = hi if i == bucket_count - 1 else start + size
        count = int(np.count_nonzero((arr >= start) & (arr <= end)))
        buckets.append({'range': f"{round(start)}-{round(end)}", 'count': count})
    return {'buckets': buckets, 'total': int(arr.size)}


def gap_from_top(score: float, top_score: float) -> Dict[str, float]:
    if top_score == 0:
        return {'absolute': 0.0, 'percentage': 0.0}
    return {
        'absolute': round(top_score - score, 1),
        'percentage': round((top_score - score) / top_score * 100.0, 1),
    }


def performance_label(pct: float) -> str:
    if pct >= 90:
        return 'Exceptional'
    if pct >= 75:
        return 'Above Average'
    if pct >= 50:
        return 'Average'
    if pct >= 25:
        return 'Below Average'
    return 'Needs Improvement'


def percentile_text(pct: float, total_applicants: int) -> str:
    """E.g. "Better than 75% of applicants"."""
    if total_applicants <= 1:
        return 'Only applicant'
    if pct >= 100:
        return f"Best among all {total_applicants} applicants"
    if pct <= 0:
        return f"Lowest among all {total_applicants} applicants"
    return f"Better than {round(pct)}% of applicants"


def ordinal(rank: int) -> str:
    if 10 <= rank % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(rank % 10, 'th')
    return f"{rank}{suffix}"


def is_top_tier(rank: int, total_applicants: int) -> bool:
    """Rank 1 in pools of three or fewer; otherwise the top third (at least 3)."""
    if total_applicants <= 3:
        return rank == 1
    return rank <= max(3, math.ceil(total_applicants * 0.33))


def relative_position(rank: int, total_applicants: int) -> str:
    if total_applicants <= 1:
        return 'Only applicant for this position'
    if rank == 1:
        return 'Top-ranked candidate'
    if rank == 2:
        return 'Second highest-ranked candidate'
    if rank == 3:
        return 'Third highest-ranked candidate'

    from_top = (rank - 1) / (total_applicants - 1) * 100.0
    if from_top <= 25:
        return 'Among top quarter of applicants'
    if from_top <= 50:
        return 'In upper half of applicants'
    if from_top <= 75:
        return 'In lower half of applicants'
    return 'Among bottom quarter of applicants'
