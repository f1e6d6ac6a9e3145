"""
LLM provider configuration settings.

Chat and embedding model identifiers for the Google Generative AI
integration, plus the tool-calling loop bound.

Dependencies: pydantic, pydantic_settings
System role: Upstream model configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini chat model ID",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID (supports reduced output dimensionality)",
    )
    temperature: float = Field(default=0.0, description="Chat model temperature")
    max_tool_iterations: int = Field(
        default=5,
        description="Maximum model round-trips per exchange when tools are requested",
        ge=1,
    )
