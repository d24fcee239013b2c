"""
Keyword Matcher

Exact-substring and keyword-overlap search over the corpus, optionally
restricted to one topic.

Each entry is checked against an ordered rule table. The first rule that
succeeds produces the entry's only MatchResult:

1. exact   (1.0) - the query is a substring of the question text
2. keyword (0.8) - the query contains a keyword or a keyword contains the query

All comparisons are case-insensitive.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from ..api.models import MatchKind, MatchResult
from ..knowledge.base import KnowledgeBase
from ..knowledge.models import CorpusEntry


EXACT_SCORE = 1.0
KEYWORD_SCORE = 0.8

Rule = Tuple[MatchKind, float, Callable[[str, CorpusEntry], bool]]


def _question_contains(query: str, entry: CorpusEntry) -> bool:
    return query in entry.question.lower()


def _keyword_overlaps(query: str, entry: CorpusEntry) -> bool:
    for keyword in entry.keywords:
        kw = keyword.lower()
        # An empty keyword would be contained in every query
        if kw and (query in kw or kw in query):
            return True
    return False


# Order is the tie-break: earlier rules win
RULES: Tuple[Rule, ...] = (
    (MatchKind.EXACT, EXACT_SCORE, _question_contains),
    (MatchKind.KEYWORD, KEYWORD_SCORE, _keyword_overlaps),
)


def match_entry(query: str, entry: CorpusEntry) -> Optional[MatchResult]:
    """
    Apply the rule table to one entry. `query` must already be lowercased.
    """
    for kind, score, rule in RULES:
        if rule(query, entry):
            return MatchResult(
                question=entry.question,
                answer=entry.answer,
                topic=entry.topic_id,
                score=score,
                type=kind,
            )
    return None


def search_by_keywords(
    kb: KnowledgeBase,
    query: str,
    topic_id: Optional[str] = None,
) -> List[MatchResult]:
    """
    Run the keyword matcher.

    Parameters
    ----------
    kb : KnowledgeBase
        Corpus to search.

    query : str
        Non-blank user query.

    topic_id : Optional[str]
        Restrict the search to this topic. Unknown ids match nothing.

    Returns
    -------
    List[MatchResult]
        At most one result per entry, in corpus order. Empty when nothing
        matched.
    """
    lowered = query.lower()
    results: List[MatchResult] = []

    for entry in kb.entries_for(topic_id):
        result = match_entry(lowered, entry)
        if result is not None:
            results.append(result)

    return results
