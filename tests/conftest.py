import pytest

from kb_chat_server.knowledge.base import KnowledgeBase
from kb_chat_server.knowledge.models import QuestionRecord, Topic


def make_topic(topic_id, *records, title=None, description=""):
    return Topic(
        id=topic_id,
        title=title or topic_id,
        description=description,
        questions=tuple(
            QuestionRecord(question=q, answer=a, keywords=tuple(kw))
            for q, a, kw in records
        ),
    )


@pytest.fixture
def bayes_kb():
    """Single-topic corpus used by the worked examples."""
    return KnowledgeBase.from_topics([
        make_topic(
            "bayes-theorem",
            ("What is Bayes' theorem?", "P(H|E) = P(E|H) P(H) / P(E).", ["bayes", "probability"]),
            title="Bayes' theorem",
        ),
    ])


@pytest.fixture
def multi_kb():
    """Six topics, one of them empty."""
    return KnowledgeBase.from_topics([
        make_topic(
            "bayes-theorem",
            ("What is Bayes' theorem?", "Bayes answer.", ["bayes", "probability"]),
            ("What is a prior probability?", "Prior answer.", ["prior"]),
            title="Bayes' theorem",
        ),
        make_topic(
            "production-rules",
            ("What is a production rule?", "Rule answer.", ["production", "rule"]),
            ("What is forward chaining?", "Chaining answer.", ["forward chaining"]),
            title="Production rules",
        ),
        make_topic(
            "expert-systems",
            ("What does the inference engine do?", "Engine answer.", ["inference"]),
            title="Expert systems",
        ),
        make_topic("empty-topic", title="Empty topic"),
        make_topic(
            "knowledge-acquisition",
            ("How is knowledge acquired from experts?", "Acquisition answer.", ["acquisition"]),
            title="Knowledge acquisition",
        ),
        make_topic(
            "uncertainty-methods",
            ("How do expert systems handle uncertainty?", "Uncertainty answer.", ["uncertainty"]),
            title="Uncertainty methods",
        ),
    ])
