"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base: Model building block
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - ChunkContentModel, VectorChunkModel, PromptModel: Persisted entities
  - chunk_crud, vector_chunk_crud, prompt_crud: CRUD operation singletons

Dependencies: sqlalchemy, aiosqlite, landmark_rag.configs
System role: SQLite adapter for chunk content, local vectors and prompt overrides
"""

from landmark_rag.boundary.db.base import Base
from landmark_rag.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from landmark_rag.boundary.db.models import ChunkContentModel, PromptModel, VectorChunkModel
from landmark_rag.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    PromptCRUD,
    VectorChunkCRUD,
    chunk_crud,
    prompt_crud,
    vector_chunk_crud,
)

__all__ = [
    # Base classes
    "Base",
    # Connection
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChunkContentModel",
    "PromptModel",
    "VectorChunkModel",
    # CRUD classes
    "BaseCRUD",
    "ChunkCRUD",
    "PromptCRUD",
    "VectorChunkCRUD",
    # CRUD singletons
    "chunk_crud",
    "prompt_crud",
    "vector_chunk_crud",
]
