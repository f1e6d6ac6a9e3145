"""
Vector database boundary layer.

Provides the VectorStore capability and its two strategies:
- SqliteVectorStore: local embedded store (FAISS exact cosine scan)
- S3VectorsStore: Amazon S3 Vectors + local content store

Dependencies: boto3, faiss-cpu, numpy, sqlalchemy
System role: Vector store adapter for RAG retrieval
"""

from landmark_rag.boundary.vdb.content_store import ChunkContentStore
from landmark_rag.boundary.vdb.s3_vectors_store import S3VectorsStore
from landmark_rag.boundary.vdb.sqlite_vector_store import SqliteVectorStore
from landmark_rag.boundary.vdb.vector_store import VectorStore
from landmark_rag.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "ChunkContentStore",
    "S3VectorsStore",
    "SqliteVectorStore",
    "VectorStore",
    "get_vector_store",
]
