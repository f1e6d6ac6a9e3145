"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite session factory, sample chunks, fake embedding
and chat capabilities
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

from typing import Sequence

import pytest
from langchain_core.messages import AIMessage, BaseMessage

from landmark_rag.models.chat import ChatOptions, ChatResponse
from landmark_rag.models.chunk import DocumentChunk


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a fresh database with all tables
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from landmark_rag.boundary.db import create_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)

    yield async_sessionmaker(engine, autoflush=False, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def info_logging():
    """
    Configure application logging at INFO for one test.

    Restores the root logger level and handlers afterwards.
    """
    import logging

    from landmark_rag.observability import configure_logging

    root_logger = logging.getLogger()
    saved_level = root_logger.level
    saved_handlers = root_logger.handlers[:]

    configure_logging("INFO")
    yield

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


def make_chunk(
    title: str = "Eiffel Tower",
    section: str = "History",
    sequence: int = 1,
    content: str = "The tower was completed in 1889.",
) -> DocumentChunk:
    """Build a chunk with a deterministic id."""
    return DocumentChunk(
        id=f"{title}_{section}_{sequence:02d}".replace(" ", "_"),
        title=title,
        section=section,
        sequence=sequence,
        content=content,
        source_ref=f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}#{section}",
    )


@pytest.fixture
def sample_chunk() -> DocumentChunk:
    """Provide a sample chunk."""
    return make_chunk()


class FakeEmbeddingGenerator:
    """Deterministic embedding capability keyed by text."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, dimensions: int = 4) -> None:
        self.vectors = vectors or {}
        self.dimensions = dimensions
        self.calls: list[list[str]] = []

    async def generate_embeddings(self, texts: Sequence[str], dimensions: int) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.vectors.get(text, [1.0] + [0.0] * (dimensions - 1)) for text in texts]


class ScriptedChatClient:
    """Chat capability replaying canned responses and recording requests."""

    def __init__(self, *responses: ChatResponse | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[tuple[list[BaseMessage], ChatOptions | None]] = []

    async def get_response(
        self,
        messages: Sequence[BaseMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        self.requests.append((list(messages), options))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def text_response(text: str) -> ChatResponse:
    """ChatResponse holding a single plain assistant message."""
    return ChatResponse(messages=[AIMessage(content=text)])
