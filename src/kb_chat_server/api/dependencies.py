import random
from functools import lru_cache

from ..config import settings
from ..knowledge.base import KnowledgeBase
from ..knowledge.loader import load_knowledge_base
from ..matching.config import MatchConfig


@lru_cache
def get_match_config() -> MatchConfig:
    return MatchConfig.from_settings()


# Built once per process; the lifespan hook calls this at startup so a
# broken corpus fails before the first request.
@lru_cache
def get_knowledge_base() -> KnowledgeBase:
    return load_knowledge_base(
        settings.knowledge_dir,
        settings.topic_ids,
        fuzzy_threshold=get_match_config().fuzzy_threshold,
    )


def get_rng() -> random.Random:
    return random.Random()
