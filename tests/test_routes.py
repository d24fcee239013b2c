import contextlib
import json
import random

import pytest
from fastapi.testclient import TestClient

from kb_chat_server.main import create_app
from kb_chat_server.config import settings
from kb_chat_server.api.dependencies import get_knowledge_base, get_rng
from kb_chat_server.core.errors import KnowledgeLoadError
from kb_chat_server.matching.composer import EMPTY_QUERY_MESSAGE, FALLBACK_MESSAGES


@pytest.fixture
def app(multi_kb):
    app = create_app()
    app.dependency_overrides[get_knowledge_base] = lambda: multi_kb
    app.dependency_overrides[get_rng] = lambda: random.Random(0)

    # Mock lifespan to avoid loading the knowledge directory
    @contextlib.asynccontextmanager
    async def mock_lifespan(app):
        yield

    app.router.lifespan_context = mock_lifespan
    yield app
    app.dependency_overrides = {}

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

@pytest.fixture
def clear_kb_cache():
    get_knowledge_base.cache_clear()
    yield
    get_knowledge_base.cache_clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "topics": 6}

def test_list_topics(client):
    resp = client.get("/api/topics")
    assert resp.status_code == 200
    data = resp.json()
    assert data[0] == {
        "id": "bayes-theorem",
        "title": "Bayes' theorem",
        "description": "",
    }
    assert [t["id"] for t in data][-1] == "uncertainty-methods"

def test_get_topic(client):
    resp = client.get("/api/topic/production-rules")
    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Production rules"
    assert data["questions"][1] == {
        "question": "What is forward chaining?",
        "answer": "Chaining answer.",
        "keywords": ["forward chaining"],
    }

def test_get_unknown_topic_is_404(client):
    resp = client.get("/api/topic/no-such-topic")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Topic not found"

def test_chat_answer(client):
    resp = client.post("/api/chat", json={"message": "prior probability"})
    assert resp.status_code == 200
    assert resp.json() == {
        "answer": "Prior answer.",
        "type": "answer",
        "topic": "bayes-theorem",
        "confidence": 1.0,
    }

def test_chat_topic_scope(client):
    resp = client.post("/api/chat", json={"message": "what is", "topic": "production-rules"})
    assert resp.status_code == 200
    assert resp.json()["topic"] == "production-rules"

def test_chat_blank_message(client):
    resp = client.post("/api/chat", json={"message": "   "})
    assert resp.status_code == 200
    assert resp.json() == {"answer": EMPTY_QUERY_MESSAGE, "type": "error"}

def test_chat_fallback(client):
    resp = client.post("/api/chat", json={"message": "xyzzy"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["type"] == "fallback"
    assert data["answer"] in FALLBACK_MESSAGES
    assert len(data["suggestions"]) == 5
    assert data["suggestions"][0] == {"id": "bayes-theorem", "title": "Bayes' theorem"}
    assert "confidence" not in data

@pytest.mark.parametrize("payload", [{"topic": "bayes-theorem"}, {"message": None}])
def test_chat_missing_message_is_error_reply(client, payload):
    resp = client.post("/api/chat", json=payload)
    assert resp.status_code == 200
    assert resp.json() == {"answer": EMPTY_QUERY_MESSAGE, "type": "error"}

def test_chat_empty_topic_means_no_scope(client):
    resp = client.post("/api/chat", json={"message": "what is", "topic": ""})
    assert resp.status_code == 200
    data = resp.json()
    assert data["type"] == "answer"
    assert data["topic"] == "bayes-theorem"
    assert data["confidence"] == 1.0

def test_chat_wrong_message_type_is_422(client):
    resp = client.post("/api/chat", json={"message": ["what", "is"]})
    assert resp.status_code == 422

def test_unhandled_error_is_generic_500(app):
    def _broken():
        raise RuntimeError("corpus exploded")

    app.dependency_overrides[get_knowledge_base] = _broken

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/topics")

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }


def test_startup_loads_knowledge_dir(tmp_path, monkeypatch, clear_kb_cache):
    (tmp_path / "bayes-theorem.json").write_text(json.dumps({
        "title": "Bayes' theorem",
        "questions": [{
            "question": "What is Bayes' theorem?",
            "answer": "Bayes answer.",
            "keywords": ["bayes", "probability"],
        }],
    }), encoding="utf-8")
    monkeypatch.setattr(settings, "knowledge_dir", str(tmp_path))
    monkeypatch.setattr(settings, "topic_ids", [])

    with TestClient(create_app()) as c:
        resp = c.post("/api/chat", json={"message": "bayes theorem formula"})

    assert resp.json()["confidence"] == 0.8

def test_startup_fails_without_knowledge_dir(tmp_path, monkeypatch, clear_kb_cache):
    monkeypatch.setattr(settings, "knowledge_dir", str(tmp_path / "missing"))

    with pytest.raises(KnowledgeLoadError):
        with TestClient(create_app()):
            pass
