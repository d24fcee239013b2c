"""
Topic Routes

Read-only listing and lookup of knowledge-base topics.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Annotated

from .models import TopicDetail, TopicSummary
from .dependencies import get_knowledge_base
from ..core.errors import TopicNotFoundError
from ..knowledge.base import KnowledgeBase

router = APIRouter(prefix="/api", tags=["topics"])


@router.get(
    "/topics",
    response_model=List[TopicSummary],
    summary="List topics in stored order",
)
def list_topics(
    kb: Annotated[KnowledgeBase, Depends(get_knowledge_base)],
) -> List[TopicSummary]:
    return kb.list_topics()


@router.get(
    "/topic/{topic_id}",
    response_model=TopicDetail,
    summary="Get a topic with all of its questions",
)
def get_topic(
    topic_id: str,
    kb: Annotated[KnowledgeBase, Depends(get_knowledge_base)],
) -> TopicDetail:
    """
    Return the full topic.

    Raises
    ------
    HTTPException
        404 if the topic id is unknown.
    """
    try:
        topic = kb.get_topic(topic_id)
    except TopicNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Topic not found",
        )

    return TopicDetail(
        id=topic.id,
        title=topic.title,
        description=topic.description,
        questions=list(topic.questions),
    )
