"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from landmark_rag.boundary.db.CRUD import chunk_crud, prompt_crud

    async with session_factory() as session:
        chunks = await chunk_crud.get_chunks(session, ids)
"""

from landmark_rag.boundary.db.CRUD.base_crud import BaseCRUD
from landmark_rag.boundary.db.CRUD.chunk_crud import (
    ChunkCRUD,
    VectorChunkCRUD,
    chunk_crud,
    to_document_chunk,
    vector_chunk_crud,
)
from landmark_rag.boundary.db.CRUD.prompt_crud import PromptCRUD, prompt_crud

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "VectorChunkCRUD",
    "PromptCRUD",
    "chunk_crud",
    "vector_chunk_crud",
    "prompt_crud",
    "to_document_chunk",
]
