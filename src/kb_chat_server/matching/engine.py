"""
Matching Engine

Single entry point for answering a query against the knowledge base.

Pipeline
--------
1. Reject blank queries with an error-kind response (no matcher runs).
2. Keyword matcher, optionally scoped to one topic.
3. Only if step 2 found nothing: fuzzy matcher over the whole corpus.
4. Rank (dedupe + sort) and apply the acceptance threshold.
5. Compose an answer or a fallback with topic suggestions.

The engine keeps no state between calls. It only reads the immutable
KnowledgeBase, so concurrent calls are safe.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from .composer import compose_answer, compose_error, compose_fallback
from .config import MatchConfig
from .fuzzy import fuzzy_search
from .keyword import search_by_keywords
from .ranker import rank_results, select_best
from ..api.models import ChatResponse, MatchResult
from ..knowledge.base import KnowledgeBase

logger = logging.getLogger("kb.engine")

DEFAULT_CONFIG = MatchConfig()


def find_matches(
    kb: KnowledgeBase,
    query: str,
    topic_id: Optional[str] = None,
    config: MatchConfig = DEFAULT_CONFIG,
) -> List[MatchResult]:
    """
    Run the matchers and return the ranked candidate list.

    The fuzzy matcher is only invoked when the keyword matcher returned
    nothing.
    """
    results = search_by_keywords(kb, query, topic_id)

    if not results:
        results = fuzzy_search(
            kb, query, limit=config.fuzzy_limit, threshold=config.fuzzy_threshold
        )
        logger.debug("Fuzzy path for %r: %d candidates", query, len(results))
    else:
        logger.debug("Keyword path for %r: %d candidates", query, len(results))

    return rank_results(results)


def match(
    kb: KnowledgeBase,
    query: Optional[str],
    topic_id: Optional[str] = None,
    *,
    config: MatchConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> ChatResponse:
    """
    Answer a free-text query.

    Parameters
    ----------
    kb : KnowledgeBase
        Immutable corpus context.

    query : Optional[str]
        User question. Blank or missing yields an error-kind response.

    topic_id : Optional[str]
        Scope for the keyword matcher.

    config : MatchConfig
        Thresholds and limits.

    rng : Optional[random.Random]
        Source for picking the fallback message.

    Returns
    -------
    ChatResponse
        Never raises for normal input.
    """
    if not query or not query.strip():
        logger.debug("Blank query rejected")
        return compose_error()

    ranked = find_matches(kb, query, topic_id, config)
    best = select_best(ranked, config.accept_threshold)

    if best is not None:
        logger.debug(
            "Answered %r from %s (%s, %.3f)", query, best.topic, best.type.value, best.score
        )
        return compose_answer(best)

    logger.debug("No match above %.2f for %r", config.accept_threshold, query)
    return compose_fallback(kb, rng=rng, suggestion_limit=config.suggestion_limit)
