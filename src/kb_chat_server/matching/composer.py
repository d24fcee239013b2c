"""
Response Composer

Shapes the engine outcome into a ChatResponse: a direct answer, a fallback
with topic suggestions, or an input error.
"""

from __future__ import annotations

import random
from typing import Optional

from ..api.models import ChatResponse, MatchResult
from ..knowledge.base import KnowledgeBase


EMPTY_QUERY_MESSAGE = "Please ask a question or choose a topic to study."

FALLBACK_MESSAGES = (
    "Unfortunately I could not find an exact answer to your question. "
    "Try rephrasing it or pick one of the topics below.",
    "Your question is not quite clear to me. Could you clarify it or choose a topic from the list?",
    "I did not find anything relevant to your request. Let's explore one of the available topics.",
    "Try using different keywords or choose a specific topic to study.",
)


def compose_answer(best: MatchResult) -> ChatResponse:
    return ChatResponse(
        answer=best.answer,
        topic=best.topic,
        type="answer",
        confidence=best.score,
    )


def compose_fallback(
    kb: KnowledgeBase,
    rng: Optional[random.Random] = None,
    suggestion_limit: int = 5,
) -> ChatResponse:
    """
    Pick one apology template and suggest the first topics of the corpus.
    """
    rng = rng or random.Random()
    return ChatResponse(
        answer=rng.choice(FALLBACK_MESSAGES),
        type="fallback",
        suggestions=kb.suggestions(suggestion_limit),
    )


def compose_error() -> ChatResponse:
    return ChatResponse(answer=EMPTY_QUERY_MESSAGE, type="error")
