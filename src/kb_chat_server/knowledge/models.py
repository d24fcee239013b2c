"""
Knowledge Data Models

This module defines the canonical, immutable records that make up the
knowledge base: topics, their question/answer records, and the flattened
corpus entries the matchers iterate over.

All models are frozen once created. The knowledge base is loaded once at
startup and never mutated afterwards.
"""

from __future__ import annotations

from typing import Tuple
from pydantic import BaseModel, Field, ConfigDict


class QuestionRecord(BaseModel):
    """
    A single stored question with its answer and keyword tags.

    The question text is the identity used for de-duplication and is
    expected to be unique across the whole corpus.
    """

    question: str = Field(
        ...,
        min_length=1,
        description="Canonical question text.",
    )

    answer: str = Field(
        ...,
        min_length=1,
        description="Stored answer returned when this question matches.",
    )

    keywords: Tuple[str, ...] = Field(
        default=(),
        description="Keyword tags used for keyword-overlap matching.",
    )

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


class Topic(BaseModel):
    """
    A named subject area grouping related question records.
    """

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    questions: Tuple[QuestionRecord, ...] = ()

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


class CorpusEntry(BaseModel):
    """
    Flattened view of a QuestionRecord with a back-reference to its topic.

    This is the unit indexed by the fuzzy index and iterated by the
    keyword matcher.
    """

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    topic_id: str = Field(..., min_length=1)
    keywords: Tuple[str, ...] = ()

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    @classmethod
    def from_record(cls, topic_id: str, record: QuestionRecord) -> "CorpusEntry":
        return cls(
            question=record.question,
            answer=record.answer,
            topic_id=topic_id,
            keywords=record.keywords,
        )
