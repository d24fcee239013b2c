from kb_chat_server.api.models import ChatRequest, ChatResponse

def test_chat_request_topic_default():
    """Verify topic scope defaults to None."""
    req = ChatRequest(message="hello")
    assert req.topic is None

def test_chat_request_topic_set():
    """Verify topic scope can be set."""
    req = ChatRequest(message="hello", topic="bayes-theorem")
    assert req.topic == "bayes-theorem"

def test_chat_request_blank_message_allowed():
    """Blank messages are answered by the engine, not rejected by validation."""
    req = ChatRequest(message="   ")
    assert req.message == "   "

def test_chat_request_extra_field_rejected():
    """Verify unknown fields raise validation error."""
    try:
        ChatRequest(message="hello", session_id="abc")
        assert False, "Should have raised validation error"
    except ValueError:
        pass

def test_chat_response_confidence_bounds():
    """Verify confidence outside [0, 1] raises validation error."""
    try:
        ChatResponse(answer="a", type="answer", confidence=1.5)
        assert False, "Should have raised validation error"
    except ValueError:
        pass

def test_chat_response_type_invalid():
    """Verify unknown response kinds raise validation error."""
    try:
        ChatResponse(answer="a", type="maybe")
        assert False, "Should have raised validation error"
    except ValueError:
        pass

def test_chat_request_message_optional():
    """Missing or null messages reach the engine as None."""
    assert ChatRequest().message is None
    assert ChatRequest(message=None, topic="bayes-theorem").message is None
