"""
Vector store capability.

Both backends satisfy this protocol; callers depend only on it and the
concrete strategy is chosen once at startup by the factory.

Dependencies: landmark_rag.models
System role: Storage/retrieval contract for chunk embeddings
"""

from typing import Protocol, Sequence, runtime_checkable

from landmark_rag.models.chunk import DocumentChunk
from landmark_rag.models.search import VectorSearchResult


@runtime_checkable
class VectorStore(Protocol):
    """
    Chunk embedding storage with nearest-neighbour search.

    Results are always ordered best-first. Vectors must have exactly
    `dimensions` components; anything else raises ConfigurationError.
    """

    @property
    def dimensions(self) -> int: ...

    async def upsert(self, chunk: DocumentChunk, vector: Sequence[float]) -> None:
        """Insert or overwrite a chunk and its vector. Raises StoreError."""
        ...

    async def search(self, query_vector: Sequence[float], k: int) -> list[VectorSearchResult]:
        """At most k chunks, descending relevance. Raises QueryError."""
        ...

    async def count(self) -> int: ...

    async def clear(self) -> None:
        """Remove every chunk. May raise UnsupportedOperationError."""
        ...

    async def get_vectors(self, ids: Sequence[str]) -> dict[str, list[float]]:
        """Stored vectors for the given ids; unknown ids are omitted."""
        ...
