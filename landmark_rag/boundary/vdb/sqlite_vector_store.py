"""
Local embedded vector store.

Keeps chunk text and float32 vectors in one SQLite table. Search is an
exact cosine scan through an in-memory FAISS inner-product index over
L2-normalized vectors, rebuilt lazily after writes.

Dependencies: faiss-cpu, numpy, sqlalchemy, landmark_rag.boundary.db
System role: Local development vector store
"""

import asyncio
import logging
from typing import Sequence

import faiss
import numpy as np
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from landmark_rag.boundary.db.CRUD import to_document_chunk, vector_chunk_crud
from landmark_rag.boundary.vdb.vector_math import as_float32, l2_normalize
from landmark_rag.core.exceptions import QueryError, StoreError
from landmark_rag.models.chunk import DocumentChunk
from landmark_rag.models.search import VectorSearchResult

logger = logging.getLogger(__name__)


class SqliteVectorStore:
    """
    Vector store backed by the local SQLite database.

    Satisfies the VectorStore protocol. The FAISS index is a cache of the
    table and is rebuilt on the next search after any write. Writes bump a
    generation counter; an index built from an older generation is stale.
    """

    def __init__(self, session_factory: async_sessionmaker, dimensions: int = 512) -> None:
        """
        Initialize the local store.

        Args:
            session_factory: Async session factory bound to the SQLite engine
            dimensions: Fixed vector length for this store
        """
        self._session_factory = session_factory
        self._dimensions = dimensions
        self._index: faiss.IndexFlatIP | None = None
        self._index_ids: list[str] = []
        self._generation = 0
        self._index_generation = -1
        self._lock = asyncio.Lock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def upsert(self, chunk: DocumentChunk, vector: Sequence[float]) -> None:
        """
        Insert or replace a chunk and its vector.

        Args:
            chunk: Chunk to store
            vector: Embedding of the chunk

        Raises:
            ConfigurationError: If the vector length is wrong
            StoreError: If the write fails
        """
        array = as_float32(vector, self._dimensions, "upsert")
        try:
            async with self._session_factory() as session:
                await vector_chunk_crud.upsert_chunk(
                    session, chunk, array.tobytes(), self._dimensions
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:upsert - {type(e).__name__}: {e}", extra={"chunk_id": chunk.id})
            raise StoreError(
                "Failed to upsert chunk",
                operation="upsert",
                details={"chunk_id": chunk.id, "error": str(e)},
            ) from e

        self._generation += 1

    async def search(self, query_vector: Sequence[float], k: int) -> list[VectorSearchResult]:
        """
        Exact cosine search.

        Args:
            query_vector: Query embedding
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Results by descending cosine similarity

        Raises:
            ConfigurationError: If the vector length is wrong
            QueryError: If reading the table fails
        """
        if k <= 0:
            return []

        query = l2_normalize(as_float32(query_vector, self._dimensions, "search"))

        try:
            index, index_ids = await self._current_index()
            if index.ntotal == 0:
                return []

            scores, positions = await run_in_threadpool(index.search, query, min(k, index.ntotal))
            ranked = [
                (index_ids[position], float(score))
                for score, position in zip(scores[0], positions[0])
                if position >= 0
            ]

            async with self._session_factory() as session:
                rows = await vector_chunk_crud.get_many(session, [chunk_id for chunk_id, _ in ranked])
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:search - {type(e).__name__}: {e}")
            raise QueryError(
                "Failed to search local vector store",
                operation="search",
                details={"k": k, "error": str(e)},
            ) from e

        chunks = {row.id: to_document_chunk(row) for row in rows}
        results = [
            VectorSearchResult(chunk=chunks[chunk_id], score=score)
            for chunk_id, score in ranked
            if chunk_id in chunks
        ]

        logger.info(
            f"{__name__}:search - Found {len(results)} results",
            extra={"k": k, "indexed": index.ntotal},
        )
        return results

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                return await vector_chunk_crud.count(session)
        except SQLAlchemyError as e:
            raise QueryError(
                "Failed to count vectors",
                operation="count",
                details={"error": str(e)},
            ) from e

    async def clear(self) -> None:
        """Delete every stored chunk."""
        try:
            async with self._session_factory() as session:
                deleted = await vector_chunk_crud.delete_all(session)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(
                "Failed to clear local vector store",
                operation="clear",
                details={"error": str(e)},
            ) from e

        self._generation += 1
        logger.info(f"{__name__}:clear - Deleted {deleted} chunks")

    async def get_vectors(self, ids: Sequence[str]) -> dict[str, list[float]]:
        """
        Stored vectors for the given ids.

        Args:
            ids: Chunk ids

        Returns:
            dict[str, list[float]]: Vectors keyed by id; unknown ids omitted
        """
        if not ids:
            return {}
        try:
            async with self._session_factory() as session:
                rows = await vector_chunk_crud.get_embeddings(session, ids)
        except SQLAlchemyError as e:
            raise QueryError(
                "Failed to load vectors",
                operation="get_vectors",
                details={"error": str(e)},
            ) from e

        return {
            chunk_id: np.frombuffer(blob, dtype=np.float32).tolist()
            for chunk_id, blob, _ in rows
        }

    async def _current_index(self) -> tuple[faiss.IndexFlatIP, list[str]]:
        """Return the FAISS index, rebuilding it from the table if stale."""
        async with self._lock:
            if self._index is None or self._index_generation != self._generation:
                generation = self._generation
                async with self._session_factory() as session:
                    rows = await vector_chunk_crud.get_embeddings(session)

                index = faiss.IndexFlatIP(self._dimensions)
                ids = []
                vectors = []
                for chunk_id, blob, dimensions in rows:
                    if dimensions != self._dimensions:
                        logger.warning(
                            f"{__name__}:_current_index - Skipping vector with wrong dimensions",
                            extra={"chunk_id": chunk_id, "dimensions": dimensions},
                        )
                        continue
                    ids.append(chunk_id)
                    vectors.append(np.frombuffer(blob, dtype=np.float32))

                if vectors:
                    index.add(l2_normalize(np.vstack(vectors)))

                self._index = index
                self._index_ids = ids
                self._index_generation = generation
                logger.debug(f"{__name__}:_current_index - Rebuilt index with {len(ids)} vectors")

            return self._index, self._index_ids
