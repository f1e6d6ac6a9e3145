"""
Retrieval configuration settings.

HYDE query expansion and rank fusion parameters.

Dependencies: pydantic, pydantic_settings
System role: Retrieval tuning configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """HYDE, RRF and MMR configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    use_hyde: bool = Field(
        default=False,
        description="Embed a hypothetical answer passage instead of the raw query",
    )
    hyde_max_chars: int = Field(default=1500, description="Character ceiling for HYDE passages", gt=0)
    rrf_k: int = Field(default=60, description="Reciprocal Rank Fusion damping constant", gt=0)
    mmr_lambda: float = Field(
        default=0.7,
        description="MMR balance factor (0=diversity, 1=relevance)",
        ge=0.0,
        le=1.0,
    )
    mmr_fetch_k: int = Field(default=20, description="Candidate pool size before MMR", gt=0)
