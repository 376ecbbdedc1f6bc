"""
Venture AI Backend - FastAPI Application

Provides:
- Document-grounded chat with short conversation memory
- Idea and comprehensive venture analysis
- Clarifying questions, task suggestions and finance analysis
- Business plan drafting
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from ventureai import __version__
from ventureai.api.middleware import RequestIDMiddleware, get_cors_origins
from ventureai.api.routes import ai, documents, health
from ventureai.config import Settings, get_settings
from ventureai.conversation import InMemoryConversationStore
from ventureai.documents import DocumentStorage, InMemoryDocumentRepository
from ventureai.kernel.http.errors import register_exception_handlers
from ventureai.llm import build_generation_client, validate_registry
from ventureai.monitoring import get_metrics
from ventureai.services import VentureAIService

# Map log level string to logging constant
_LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the process."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _LOG_LEVEL_MAP.get(settings.log_level.lower(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(get_settings())

logger = structlog.get_logger()


def build_service(settings: Settings, app: FastAPI) -> VentureAIService:
    """Wire collaborators once per process and expose them on app.state."""
    conversations = InMemoryConversationStore()
    document_repository = InMemoryDocumentRepository()

    app.state.settings = settings
    app.state.conversations = conversations
    app.state.documents = document_repository

    return VentureAIService(
        settings=settings,
        client=build_generation_client(settings),
        conversations=conversations,
        documents=document_repository,
        storage=DocumentStorage(settings.uploads_root),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    logger.info(
        "Starting Venture AI Backend",
        version=__version__,
        environment=settings.environment,
        uploads_root=settings.uploads_root,
    )

    # Refuse to boot with an incomplete endpoint registry
    validate_registry()
    get_metrics()

    app.state.venture_ai = build_service(settings, app)
    logger.info("Venture AI service ready", generation_configured=app.state.venture_ai.is_configured)

    yield

    logger.info("Shutting down Venture AI Backend")


app = FastAPI(
    title="Venture AI API",
    description="Document-grounded AI assistance for venture workspaces",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request ID tracking
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

register_exception_handlers(app)

# Prometheus metrics endpoint
app.mount("/metrics", make_asgi_app())

app.include_router(health.router, tags=["Health"])
app.include_router(ai.router, prefix="/api/v1", tags=["Venture AI"])
app.include_router(documents.router, prefix="/api/v1", tags=["Documents"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Venture AI API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
