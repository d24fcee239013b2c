"""
Fuzzy Matcher

Approximate search over the whole corpus via the prebuilt fuzzy index.
There is no topic scope: this path only runs after the scoped keyword
search came back empty.
"""

from __future__ import annotations

from typing import List, Optional

from ..api.models import MatchKind, MatchResult
from ..knowledge.base import KnowledgeBase


def fuzzy_search(
    kb: KnowledgeBase,
    query: str,
    limit: int = 3,
    threshold: Optional[float] = None,
) -> List[MatchResult]:
    """
    Return at most `limit` fuzzy matches, best first.

    Each score is ``1 - distance`` and lies in [0, 1]. Candidates farther
    than `threshold` (capped by the index threshold) are never returned.
    """
    band = kb.index.threshold
    if threshold is not None:
        band = min(threshold, band)

    results: List[MatchResult] = []

    for entry, distance in kb.index.search(query):
        if distance > band:
            continue

        results.append(
            MatchResult(
                question=entry.question,
                answer=entry.answer,
                topic=entry.topic_id,
                score=min(1.0, max(0.0, 1.0 - distance)),
                type=MatchKind.FUZZY,
            )
        )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]
