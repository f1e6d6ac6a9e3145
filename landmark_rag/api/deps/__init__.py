"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_chat_client,
    get_chat_options,
    get_chat_stream_service,
    get_index_builder,
    get_prompt_service,
    get_rag_question_service,
    get_retrieval_service,
    get_service_cache,
    get_settings_dependency,
    get_vector_store_dependency,
)

__all__ = [
    "ServiceCache",
    "get_chat_client",
    "get_chat_options",
    "get_chat_stream_service",
    "get_index_builder",
    "get_prompt_service",
    "get_rag_question_service",
    "get_retrieval_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_vector_store_dependency",
]
