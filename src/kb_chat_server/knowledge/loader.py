"""
Knowledge Loader

Reads one JSON file per topic from the knowledge directory and builds the
KnowledgeBase context.

File format (``<knowledge_dir>/<topic_id>.json``)::

    {
      "title": "Bayes' theorem",
      "description": "...",
      "questions": [
        {"question": "...", "answer": "...", "keywords": ["bayes"]}
      ]
    }

A broken topic file is logged and skipped; the remaining topics still load.
A missing knowledge directory aborts loading.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .base import KnowledgeBase
from .models import QuestionRecord, Topic
from ..core.errors import KnowledgeLoadError

logger = logging.getLogger("kb.loader")


def parse_topic(topic_id: str, raw: Dict[str, Any]) -> Topic:
    """
    Build a Topic from decoded JSON, applying defaults for missing fields.

    Raises
    ------
    ValueError
        If the payload is not an object or a record fails validation.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Topic {topic_id!r} must be a JSON object.")

    questions = []
    for q in raw.get("questions") or []:
        keywords = q.get("keywords") or ()
        # A bare string would otherwise be split into single-letter keywords
        if isinstance(keywords, str):
            raise ValueError(
                f"Topic {topic_id!r}: keywords must be a list, got {keywords!r}."
            )
        questions.append(
            QuestionRecord(
                question=q.get("question"),
                answer=q.get("answer"),
                keywords=keywords,
            )
        )

    return Topic(
        id=topic_id,
        title=raw.get("title") or topic_id,
        description=raw.get("description") or "",
        questions=tuple(questions),
    )


def _discover_topic_ids(directory: Path) -> List[str]:
    return sorted(p.stem for p in directory.glob("*.json") if p.is_file())


def load_topic_file(path: Path) -> Optional[Topic]:
    """
    Load a single topic file. Returns None (after logging) on any failure.
    """
    topic_id = path.stem
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return parse_topic(topic_id, raw)
    except (OSError, ValueError, ValidationError, AttributeError, TypeError) as exc:
        logger.error("Failed to load topic %s: %s", topic_id, exc)
        return None


def load_knowledge_base(
    knowledge_dir: str | Path,
    topic_ids: Optional[Sequence[str]] = None,
    fuzzy_threshold: float = 0.4,
) -> KnowledgeBase:
    """
    Load every topic and build the KnowledgeBase.

    Parameters
    ----------
    knowledge_dir : str | Path
        Directory holding ``<topic_id>.json`` files.

    topic_ids : Optional[Sequence[str]]
        Explicit topic order. When empty or None, all JSON files in the
        directory are loaded in filename order.

    fuzzy_threshold : float
        Passed through to the fuzzy index.

    Raises
    ------
    KnowledgeLoadError
        If the directory does not exist.
    """
    directory = Path(knowledge_dir)
    if not directory.is_dir():
        raise KnowledgeLoadError(f"Knowledge directory not found: {directory}")

    ids = list(topic_ids) if topic_ids else _discover_topic_ids(directory)

    topics: List[Topic] = []
    seen = set()
    for topic_id in ids:
        if topic_id in seen:
            logger.warning("Topic %s listed more than once; ignoring repeat", topic_id)
            continue
        seen.add(topic_id)

        topic = load_topic_file(directory / f"{topic_id}.json")
        if topic is not None:
            topics.append(topic)

    logger.info("Loaded %d of %d topics from %s", len(topics), len(ids), directory)

    return KnowledgeBase.from_topics(topics, fuzzy_threshold=fuzzy_threshold)
