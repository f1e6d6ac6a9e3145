"""
Chunk CRUD operations.

Maps DocumentChunk domain objects onto the `chunks` and `vector_chunks`
tables.

Dependencies: sqlalchemy, landmark_rag.boundary.db.models
System role: Chunk persistence operations for both vector backends
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from landmark_rag.boundary.db.CRUD.base_crud import BaseCRUD
from landmark_rag.boundary.db.models.chunk_model import ChunkContentModel, VectorChunkModel
from landmark_rag.models.chunk import DocumentChunk


def chunk_columns(chunk: DocumentChunk) -> dict:
    """Column values for a chunk row."""
    return {
        "id": chunk.id,
        "title": chunk.title,
        "section": chunk.section,
        "sequence": chunk.sequence,
        "content": chunk.content,
        "source_ref": chunk.source_ref,
    }


def to_document_chunk(row: ChunkContentModel | VectorChunkModel) -> DocumentChunk:
    """Convert a chunk row back to the domain model."""
    return DocumentChunk(
        id=row.id,
        title=row.title,
        section=row.section,
        sequence=row.sequence,
        content=row.content,
        source_ref=row.source_ref,
    )


class ChunkCRUD(BaseCRUD[ChunkContentModel]):
    """CRUD operations for the content-only `chunks` table."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkContentModel."""
        super().__init__(ChunkContentModel)

    async def upsert_chunk(self, session: AsyncSession, chunk: DocumentChunk) -> None:
        """
        Insert or replace a chunk by id.

        Args:
            session: Async database session
            chunk: Chunk to persist
        """
        await self.upsert(session, **chunk_columns(chunk))

    async def get_chunks(
        self,
        session: AsyncSession,
        ids: Sequence[str],
    ) -> dict[str, DocumentChunk]:
        """
        Batch fetch chunks by id.

        Args:
            session: Async database session
            ids: Chunk ids

        Returns:
            dict[str, DocumentChunk]: Found chunks keyed by id
        """
        rows = await self.get_many(session, ids)
        return {row.id: to_document_chunk(row) for row in rows}


class VectorChunkCRUD(BaseCRUD[VectorChunkModel]):
    """CRUD operations for the local `vector_chunks` table."""

    def __init__(self) -> None:
        """Initialize VectorChunkCRUD with VectorChunkModel."""
        super().__init__(VectorChunkModel)

    async def upsert_chunk(
        self,
        session: AsyncSession,
        chunk: DocumentChunk,
        embedding: bytes,
        dimensions: int,
    ) -> None:
        """
        Insert or replace a chunk and its vector by id.

        Args:
            session: Async database session
            chunk: Chunk to persist
            embedding: float32 vector bytes
            dimensions: Vector length
        """
        await self.upsert(
            session,
            **chunk_columns(chunk),
            embedding=embedding,
            dimensions=dimensions,
        )

    async def get_embeddings(
        self,
        session: AsyncSession,
        ids: Sequence[str] | None = None,
    ) -> list[tuple[str, bytes, int]]:
        """
        Load (id, embedding bytes, dimensions) rows without chunk text.

        Args:
            session: Async database session
            ids: Restrict to these ids (all rows when None)

        Returns:
            list[tuple[str, bytes, int]]: Rows ordered by id
        """
        stmt = select(
            VectorChunkModel.id,
            VectorChunkModel.embedding,
            VectorChunkModel.dimensions,
        ).order_by(VectorChunkModel.id)
        if ids is not None:
            stmt = stmt.where(VectorChunkModel.id.in_(list(ids)))
        result = await session.execute(stmt)
        return [(row.id, row.embedding, row.dimensions) for row in result]


chunk_crud = ChunkCRUD()
vector_chunk_crud = VectorChunkCRUD()
