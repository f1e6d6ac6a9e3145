"""
Application services.

Exports:
  - IndexBuilder, IndexBuildResult
  - RetrievalService
  - ChatStreamService
  - RagQuestionService
  - PromptService
"""

from landmark_rag.application.services.chat_stream_service import ChatStreamService
from landmark_rag.application.services.index_builder import IndexBuilder, IndexBuildResult
from landmark_rag.application.services.prompt_service import PromptService
from landmark_rag.application.services.rag_question_service import RagQuestionService
from landmark_rag.application.services.retrieval_service import RetrievalService

__all__ = [
    "ChatStreamService",
    "IndexBuildResult",
    "IndexBuilder",
    "PromptService",
    "RagQuestionService",
    "RetrievalService",
]
