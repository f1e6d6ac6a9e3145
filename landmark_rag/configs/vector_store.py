"""
Vector store configuration settings.

Selects the vector backend (local SQLite store or remote S3 Vectors index)
and holds the embedding dimensionality shared by indexing and querying.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (SQLite for local, S3 Vectors for remote)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="sqlite",
        description="Vector store provider: 'sqlite' (local embedded) or 's3' (remote managed)",
    )
    dimensions: int = Field(
        default=512,
        description="Embedding vector dimension, fixed per store instance",
        gt=0,
    )

    s3_bucket: str = Field(
        default="landmark-rag-vectors",
        description="S3 Vectors bucket name",
    )
    s3_index_name: str = Field(default="landmark-chunks", description="S3 Vectors index name")
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")

    top_k: int = Field(default=5, description="Number of top results to retrieve")
