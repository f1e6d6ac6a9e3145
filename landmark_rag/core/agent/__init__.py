"""
Chat agent components.

Exports:
  - ProgressTrackingChatClient: progress event decorator over a ChatClient
  - create_search_tool: database_search_service tool factory
  - DEFAULT_PROMPTS and prompt names
"""

from landmark_rag.core.agent.progress_tracking import ProgressTrackingChatClient
from landmark_rag.core.agent.prompts import (
    CHAT_SYSTEM_PROMPT_NAME,
    DEFAULT_PROMPTS,
    HYDE_PROMPT_NAME,
    RAG_SYSTEM_PROMPT_NAME,
)
from landmark_rag.core.agent.search_tool import SEARCH_TOOL_NAME, create_search_tool

__all__ = [
    "CHAT_SYSTEM_PROMPT_NAME",
    "DEFAULT_PROMPTS",
    "HYDE_PROMPT_NAME",
    "ProgressTrackingChatClient",
    "RAG_SYSTEM_PROMPT_NAME",
    "SEARCH_TOOL_NAME",
    "create_search_tool",
]
