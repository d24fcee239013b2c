"""
Result Ranker

Merges matcher output, removes duplicate questions, orders by score and
decides whether the best candidate is good enough to answer with.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..api.models import MatchResult


def rank_results(results: Iterable[MatchResult]) -> List[MatchResult]:
    """
    De-duplicate by question text (first occurrence wins) and sort by score,
    highest first. Equal scores keep their input order.
    """
    seen = set()
    unique: List[MatchResult] = []

    for result in results:
        if result.question in seen:
            continue
        seen.add(result.question)
        unique.append(result)

    # sorted() is stable
    return sorted(unique, key=lambda r: r.score, reverse=True)


def select_best(
    ranked: List[MatchResult],
    accept_threshold: float = 0.3,
) -> Optional[MatchResult]:
    """
    Return the top result if its score is strictly above the threshold.
    """
    if ranked and ranked[0].score > accept_threshold:
        return ranked[0]
    return None
