import logging
import re
from typing import Any, Iterable, List

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp a value into [lo, hi]."""
    return max(lo, min(hi, value))


def clamp_score(value: Any) -> float:
    """Coerce a score into a float in [0, 100].

    NaN and non-numeric values collapse to 0.0 with a warning; scores are
    exposed to HR staff and must never render as NaN.
    """
    try:
        f = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric score {value!r}, using 0.0")
        return 0.0
    if f != f:
        logger.warning("NaN score, using 0.0")
        return 0.0
    return clamp(f, 0.0, 100.0)


def round_score(value: float, decimals: int = 2) -> float:
    return round(float(value), decimals)


def normalize_text(text: Any) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    if text is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(text)).strip().lower()


def unique_preserving_order(items: Iterable[str]) -> List[str]:
    """De-duplicate strings case-insensitively, keeping the first spelling seen."""
    seen = set()
    result = []
    for item in items:
        if item is None:
            continue
        key = normalize_text(item)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(str(item).strip())
    return result
