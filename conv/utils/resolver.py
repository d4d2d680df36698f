"""Shared fuzzy matching utilities.

This module ranks rows of a lookup table against a query string. The
units module uses it to suggest symbols for input it cannot resolve.
"""

from __future__ import annotations
from typing import Callable
import pandas as pd

try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e


def topk_matches(
    candidates: pd.DataFrame,
    query_norm: str,
    k: int = 5,
    column: str = "symbol",
    threshold: float = 0,
    scorer: Callable[..., float] = fuzz.ratio,
) -> list[tuple[pd.Series, float]]:
    """Return top-K matching candidates with scores.

    Useful for interactive review UIs and "did you mean" hints.

    Args:
        candidates: DataFrame of candidate entities
        query_norm: Normalized query string
        k: Number of top candidates to return (default: 5)
        column: Column holding the strings to match against (default: "symbol")
        threshold: Minimum score to keep a candidate (default: 0)
        scorer: RapidFuzz scorer (default: fuzz.ratio)

    Returns:
        List of (row, score) tuples, ordered by descending score.

    Examples:
        >>> candidates = pd.DataFrame({'symbol': ['km', 'kg', 'kib']})
        >>> [(row['symbol'], score) for row, score in topk_matches(candidates, 'kgg', k=1)]
        [('kg', 80.0)]
    """
    if candidates.empty or k <= 0:
        return []

    choices = [str(s).lower() for s in candidates[column].tolist()]
    results = process.extract(
        query_norm,
        choices,
        scorer=scorer,
        limit=k,
        score_cutoff=threshold,
    )

    # process.extract yields (choice, score, position)
    return [
        (candidates.iloc[position].copy(), float(score))
        for _, score, position in results
    ]


__all__ = [
    "topk_matches",
]
