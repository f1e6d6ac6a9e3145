"""
Vector store factory for selecting between the local SQLite store (dev)
and S3 Vectors (prod).

Depends on VECTOR_STORE_PROVIDER environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: boto3, landmark_rag.boundary.vdb, landmark_rag.configs
System role: Vector store instantiation and selection
"""

import logging

import boto3
from sqlalchemy.ext.asyncio import async_sessionmaker

from landmark_rag.boundary.vdb.content_store import ChunkContentStore
from landmark_rag.boundary.vdb.s3_vectors_store import S3VectorsStore
from landmark_rag.boundary.vdb.sqlite_vector_store import SqliteVectorStore
from landmark_rag.boundary.vdb.vector_store import VectorStore
from landmark_rag.configs.settings import Settings
from landmark_rag.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("sqlite", "s3")


def get_vector_store(settings: Settings, session_factory: async_sessionmaker) -> VectorStore:
    """
    Build the configured vector store.

    Args:
        settings: Application settings
        session_factory: Async session factory for the local database

    Returns:
        VectorStore: SqliteVectorStore or S3VectorsStore

    Raises:
        ConfigurationError: If VECTOR_STORE_PROVIDER is not supported
    """
    config = settings.vector_store
    provider = config.provider.strip().lower()

    if provider == "sqlite":
        logger.info(
            f"{__name__}:get_vector_store - Creating SQLite vector store (local dev mode)",
            extra={"dimensions": config.dimensions},
        )
        return SqliteVectorStore(session_factory, dimensions=config.dimensions)

    if provider == "s3":
        logger.info(
            f"{__name__}:get_vector_store - Creating S3 Vectors store (production mode)",
            extra={"bucket": config.s3_bucket, "index": config.s3_index_name},
        )
        return S3VectorsStore(
            client=boto3.client("s3vectors", region_name=config.aws_region),
            content_store=ChunkContentStore(session_factory),
            vectors_bucket=config.s3_bucket,
            index_name=config.s3_index_name,
            dimensions=config.dimensions,
        )

    raise ConfigurationError(
        f"Unknown vector store provider '{config.provider}'",
        setting="VECTOR_STORE_PROVIDER",
        details={"supported": list(SUPPORTED_PROVIDERS)},
    )
