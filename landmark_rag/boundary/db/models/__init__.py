"""
Database models package.

Exports:
  - ChunkContentModel: Chunk text for the remote vector backend
  - VectorChunkModel: Chunk text plus vector for the local backend
  - PromptModel: Prompt overrides

Dependencies: sqlalchemy, landmark_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from landmark_rag.boundary.db.models.chunk_model import ChunkContentModel, VectorChunkModel
from landmark_rag.boundary.db.models.prompt_model import PromptModel

__all__ = [
    "ChunkContentModel",
    "VectorChunkModel",
    "PromptModel",
]
