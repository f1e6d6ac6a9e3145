"""
Chunk content store for the remote vector backend.

S3 Vectors keeps only vectors and small metadata; chunk text lives in the
local `chunks` table, keyed by the same id.

Dependencies: sqlalchemy, landmark_rag.boundary.db
System role: Local content half of the remote vector backend
"""

from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from landmark_rag.boundary.db.CRUD import chunk_crud
from landmark_rag.core.exceptions import QueryError, StoreError
from landmark_rag.models.chunk import DocumentChunk


class ChunkContentStore:
    """Async wrapper around chunk_crud with store error mapping."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def save(self, chunk: DocumentChunk) -> None:
        """Insert or replace chunk content. Raises StoreError."""
        try:
            async with self._session_factory() as session:
                await chunk_crud.upsert_chunk(session, chunk)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(
                "Failed to save chunk content",
                operation="upsert",
                details={"chunk_id": chunk.id, "error": str(e)},
            ) from e

    async def get_many(self, ids: Sequence[str]) -> dict[str, DocumentChunk]:
        """Batch fetch chunk content by id. Raises QueryError."""
        try:
            async with self._session_factory() as session:
                return await chunk_crud.get_chunks(session, ids)
        except SQLAlchemyError as e:
            raise QueryError(
                "Failed to load chunk content",
                operation="search",
                details={"chunk_count": len(ids), "error": str(e)},
            ) from e
