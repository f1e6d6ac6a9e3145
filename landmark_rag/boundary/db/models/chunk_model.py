"""
Chunk ORM models.

`chunks` stores chunk text for the S3 Vectors backend, which keeps only
vectors remotely. `vector_chunks` is the local backend's single table: chunk
text plus the float32 vector blob.

Dependencies: sqlalchemy, landmark_rag.boundary.db.base
System role: Chunk persistence for both vector backends
"""

from sqlalchemy import Integer, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from landmark_rag.boundary.db.base import Base, ChunkColumnsMixin


class ChunkContentModel(Base, ChunkColumnsMixin):
    """Chunk content keyed by the same id as the remote vector."""

    __tablename__ = "chunks"


class VectorChunkModel(Base, ChunkColumnsMixin):
    """
    Chunk content with its embedding.

    Attributes:
        embedding: Little-endian float32 bytes (numpy tobytes)
        dimensions: Vector length, checked against the store on load
    """

    __tablename__ = "vector_chunks"

    embedding: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    dimensions: Mapped[int] = mapped_column(Integer, nullable=False)
