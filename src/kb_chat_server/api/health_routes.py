from typing import Annotated

from fastapi import APIRouter, Depends

from .dependencies import get_knowledge_base
from ..knowledge.base import KnowledgeBase

router = APIRouter(tags=["health"])

@router.get("/health")
def health(kb: Annotated[KnowledgeBase, Depends(get_knowledge_base)]):
    return {"status": "ok", "topics": len(kb)}
