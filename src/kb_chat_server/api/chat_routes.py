"""
Chat Routes

Single-shot question answering against the static knowledge base. Each
request is matched independently; there is no conversation state.
"""

import random
from typing import Annotated

from fastapi import APIRouter, Depends, status

from .models import ChatRequest, ChatResponse
from .dependencies import get_knowledge_base, get_match_config, get_rng
from ..knowledge.base import KnowledgeBase
from ..matching.config import MatchConfig
from ..matching.engine import match

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    summary="Ask a question",
    status_code=status.HTTP_200_OK,
)
def chat(
    req: ChatRequest,
    kb: Annotated[KnowledgeBase, Depends(get_knowledge_base)],
    config: Annotated[MatchConfig, Depends(get_match_config)],
    rng: Annotated[random.Random, Depends(get_rng)],
) -> ChatResponse:
    """
    Answer a question, optionally scoped to a topic.

    Blank messages get an error-kind reply with status 200; unmatched
    questions get a fallback reply with topic suggestions.
    """
    return match(kb, req.message, req.topic, config=config, rng=rng)
