"""
Knowledge Base Context

The KnowledgeBase is the explicitly constructed, immutable context passed to
the matching engine. It owns:

- The ordered topic mapping (read-only view)
- The flattened corpus entries (topic order, then question order)
- The fuzzy index built over those entries

Instances are built once at startup and held for the process lifetime. There
are no mutators; concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .index import FuzzyIndex
from .models import CorpusEntry, Topic
from ..api.models import TopicSuggestion, TopicSummary
from ..core.errors import CorpusIndexError, TopicNotFoundError

logger = logging.getLogger("kb.index")


class KnowledgeBase:
    """
    Read-only topic collection plus its searchable corpus.
    """

    def __init__(
        self,
        topics: Mapping[str, Topic],
        fuzzy_threshold: float = 0.4,
    ) -> None:
        """
        Parameters
        ----------
        topics : Mapping[str, Topic]
            Topic id to Topic, in stored order.

        fuzzy_threshold : float
            Maximum distance accepted by the fuzzy index.

        Raises
        ------
        CorpusIndexError
            If a mapping key disagrees with its topic id, or the index
            cannot be built.
        """
        for key, topic in topics.items():
            if key != topic.id:
                raise CorpusIndexError(
                    f"Topic key {key!r} does not match topic id {topic.id!r}."
                )

        self._topics: Mapping[str, Topic] = MappingProxyType(dict(topics))

        self._entries: Tuple[CorpusEntry, ...] = tuple(
            CorpusEntry.from_record(topic.id, record)
            for topic in self._topics.values()
            for record in topic.questions
        )

        self._index = FuzzyIndex(self._entries, threshold=fuzzy_threshold)

        logger.info(
            "Knowledge base ready: %d topics, %d questions",
            len(self._topics),
            len(self._entries),
        )

    @classmethod
    def from_topics(
        cls,
        topics: Iterable[Topic],
        fuzzy_threshold: float = 0.4,
    ) -> "KnowledgeBase":
        """Build from topics in iteration order. Later duplicates of an id are rejected."""
        mapping = {}
        for topic in topics:
            if topic.id in mapping:
                raise CorpusIndexError(f"Duplicate topic id {topic.id!r}.")
            mapping[topic.id] = topic
        return cls(mapping, fuzzy_threshold=fuzzy_threshold)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def topics(self) -> Mapping[str, Topic]:
        return self._topics

    @property
    def entries(self) -> Tuple[CorpusEntry, ...]:
        return self._entries

    @property
    def index(self) -> FuzzyIndex:
        return self._index

    def __len__(self) -> int:
        return len(self._topics)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._topics

    def entries_for(self, topic_id: Optional[str] = None) -> Tuple[CorpusEntry, ...]:
        """
        Return the corpus entries of one topic, or all entries when
        topic_id is None or empty. Unknown topic ids yield an empty tuple.
        """
        if not topic_id:
            return self._entries
        return tuple(e for e in self._entries if e.topic_id == topic_id)

    # ------------------------------------------------------------------
    # Topic projections
    # ------------------------------------------------------------------

    def get_topic(self, topic_id: str) -> Topic:
        try:
            return self._topics[topic_id]
        except KeyError:
            raise TopicNotFoundError(topic_id) from None

    def list_topics(self) -> List[TopicSummary]:
        return [
            TopicSummary(id=t.id, title=t.title, description=t.description)
            for t in self._topics.values()
        ]

    def suggestions(self, limit: int = 5) -> List[TopicSuggestion]:
        """First `limit` topics in stored order, reduced to id and title."""
        return [
            TopicSuggestion(id=t.id, title=t.title)
            for t in list(self._topics.values())[:max(limit, 0)]
        ]
