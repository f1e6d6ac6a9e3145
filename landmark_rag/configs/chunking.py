"""
Chunking configuration settings.

Token budgets for the article splitter and the per-document chunk cap used
by the index builder.

Dependencies: pydantic, pydantic_settings
System role: Document chunking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """Article splitter configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    max_tokens_per_chunk: int = Field(default=300, description="Estimated tokens per chunk", gt=0)
    overlap_tokens: int = Field(default=60, description="Estimated tokens shared by adjacent chunks", ge=0)
    soft_wrap_chars: int = Field(default=400, description="Lines longer than this are soft-wrapped", gt=0)
    max_chunks_per_document: int = Field(
        default=25,
        description="Cap on chunks indexed per document",
        gt=0,
    )
