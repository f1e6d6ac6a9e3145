"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, uvicorn, landmark_rag.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landmark_rag import __version__
from landmark_rag.api.deps import get_service_cache
from landmark_rag.boundary.db import create_tables
from landmark_rag.configs import get_settings
from landmark_rag.observability import configure_logging

from .routers import (
    chat_router,
    health_router,
    index_router,
    prompts_router,
    search_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup creates tables, seeds default prompts and pre-warms the
    service cache; shutdown disposes connections.
    """
    cache = get_service_cache()

    await create_tables(cache.engine)
    if await cache.prompt_service.seed_defaults():
        logger.info(f"{__name__}:lifespan - Seeded default prompts")

    # Trigger property access to load instances
    _ = cache.vector_store
    _ = cache.retrieval_service
    _ = cache.index_builder
    _ = cache.rag_question_service
    logger.info(f"{__name__}:lifespan - Service cache pre-warmed")

    yield

    await cache.aclose()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Landmark RAG API",
        description="Retrieval-augmented chat over world landmark articles",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(index_router, prefix="/api")
    app.include_router(search_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(prompts_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Launch the API server with uvicorn."""
    uvicorn.run(
        "landmark_rag.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
