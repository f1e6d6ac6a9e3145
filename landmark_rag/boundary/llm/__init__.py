"""
LLM boundary layer.

Exports:
  - EmbeddingGenerator, GeminiEmbeddingGenerator, create_embeddings
  - ChatClient, ToolCallingChatClient, create_chat_model

Dependencies: langchain_core, langchain_google_genai
System role: Embedding and chat capabilities
"""

from landmark_rag.boundary.llm.chat_client import (
    ChatClient,
    ToolCallingChatClient,
    create_chat_model,
)
from landmark_rag.boundary.llm.embedding_generator import (
    EmbeddingGenerator,
    GeminiEmbeddingGenerator,
    create_embeddings,
)

__all__ = [
    "ChatClient",
    "EmbeddingGenerator",
    "GeminiEmbeddingGenerator",
    "ToolCallingChatClient",
    "create_chat_model",
    "create_embeddings",
]
