"""
Global Error Handling

This module defines the knowledge-base exception hierarchy and the
application-wide exception handlers for the chat server.

Error Taxonomy
--------------
- Blank queries are not exceptions; the engine answers them with an
  error-kind ChatResponse.
- Unknown topic ids raise TopicNotFoundError, which routes map to 404.
- A query with no acceptable match is a normal fallback response.
- Failures while loading or indexing the corpus raise at startup.
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("kb.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class KnowledgeBaseError(RuntimeError):
    """Base error for knowledge base failures."""


class KnowledgeLoadError(KnowledgeBaseError):
    """Raised when the knowledge directory cannot be read at all."""


class CorpusIndexError(KnowledgeBaseError):
    """Raised when the approximate-match index cannot be built."""


class TopicNotFoundError(KnowledgeBaseError, LookupError):
    """Raised when a topic id is not present in the knowledge base."""

    def __init__(self, topic_id: str) -> None:
        super().__init__(f"Topic not found: {topic_id!r}")
        self.topic_id = topic_id


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Logs the full stack trace internally and returns a generic 500 payload
    with no internal details.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
        A JSON 500 response with a minimal error payload.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
