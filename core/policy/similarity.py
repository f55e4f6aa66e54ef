from __future__ import annotations

from collections import Counter

from models.re_models import WHITESPACE_PATTERN

__all__: list[str] = ["similarity"]


def _normalize(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip().lower()


def similarity(a: str, b: str) -> float:
    """Estimate how alike two translations are on a 0.0 to 1.0 scale.

    Whitespace and case are normalized first; identical texts score 1.0. Otherwise the
    score is the number of shared whitespace-separated tokens divided by the token count
    of the longer text. Shared tokens are counted as a multiset intersection, so the
    score is symmetric.

    Args:
        a (str): First text.
        b (str): Second text.

    Returns:
        float: Similarity in [0.0, 1.0].
    """
    norm_a: str = _normalize(a)
    norm_b: str = _normalize(b)
    if norm_a == norm_b:
        return 1.0

    tokens_a: list[str] = norm_a.split()
    tokens_b: list[str] = norm_b.split()
    longest: int = max(len(tokens_a), len(tokens_b))
    if longest == 0:
        return 0.0

    shared: int = sum((Counter(tokens_a) & Counter(tokens_b)).values())
    return shared / longest
