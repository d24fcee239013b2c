"""
Knowledge-Base Chat Server Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures global exception handling, and provides a test-friendly application
factory.

Design Goals
------------
- Knowledge base built once, before the first request
- Fail-fast startup on a broken corpus
- Centralized router registration
- Global exception safety net
- Test-friendly via create_app()
"""

from __future__ import annotations

import contextlib
import logging
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .core.errors import unhandled_exception_handler

from .api import (
    chat_routes,
    topic_routes,
    health_routes,
)
from .api.dependencies import get_knowledge_base


logger = logging.getLogger("kb.app")


# ---------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------

@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Build the knowledge base at startup.

    Any KnowledgeBaseError propagates and aborts startup.
    """
    logger.info("Starting kb-chat-server (knowledge_dir=%s)", settings.knowledge_dir)

    kb = get_knowledge_base()

    logger.info(
        "Knowledge base loaded: %d topics, %d questions",
        len(kb),
        len(kb.entries),
    )

    yield

    logger.info("Shutting down kb-chat-server")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    logging.getLogger("kb").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="kb-chat-server",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # --------------------------------------------------------------
    # Middleware
    # --------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --------------------------------------------------------------
    # Global Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(topic_routes.router)
    app.include_router(chat_routes.router)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
