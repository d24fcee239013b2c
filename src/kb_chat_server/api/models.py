"""
API Models for the Knowledge-Base Chat Server

This module defines the Pydantic models used for request/response validation
across the chat and topic endpoints, and the transient match records passed
between matcher, ranker and composer.

Design Goals
------------
- Strong typing
- Immutable transient records
- Explicit output contracts independent of the transport
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict

from ..knowledge.models import QuestionRecord


# ---------------------------------------------------------------------
# Match Records (Engine Internal)
# ---------------------------------------------------------------------

class MatchKind(str, Enum):
    EXACT = "exact"
    KEYWORD = "keyword"
    FUZZY = "fuzzy"


class MatchResult(BaseModel):
    """
    One candidate answer produced by a matcher for a single query.
    """
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    score: float = Field(..., ge=0.0, le=1.0)
    type: MatchKind

    model_config = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------
# Topic Models
# ---------------------------------------------------------------------

class TopicSummary(BaseModel):
    """
    Topic listing entry.
    """
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class TopicSuggestion(BaseModel):
    """
    Topic offered to the user when no answer could be found.
    """
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)


class TopicDetail(BaseModel):
    """
    Full topic payload including all stored questions.
    """
    id: str
    title: str
    description: str = ""
    questions: List[QuestionRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------
# Chat Models
# ---------------------------------------------------------------------

class ChatRequest(BaseModel):
    """
    Chat request payload.

    `message` may be missing, null or blank; the engine answers that with an
    error-kind response rather than a validation failure. An empty `topic`
    means no scope.
    """
    message: Optional[str] = None
    topic: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class ChatResponse(BaseModel):
    """
    Chat response payload. One per query.
    """
    answer: str
    type: Literal["answer", "fallback", "error"]
    topic: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    suggestions: Optional[List[TopicSuggestion]] = None

    model_config = ConfigDict(extra="forbid")
