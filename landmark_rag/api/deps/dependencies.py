"""
Dependency injection container.

ServiceCache builds shared resources lazily from settings (engine, vector
store, capabilities, services); FastAPI dependency functions hand them to
routers. Tests replace these functions through dependency_overrides.

Dependencies: landmark_rag.configs, landmark_rag.application, landmark_rag.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from landmark_rag.application.services import (
    ChatStreamService,
    IndexBuilder,
    PromptService,
    RagQuestionService,
    RetrievalService,
)
from landmark_rag.boundary.db import get_async_engine, get_async_session_factory
from landmark_rag.boundary.llm import (
    ChatClient,
    GeminiEmbeddingGenerator,
    ToolCallingChatClient,
    create_chat_model,
    create_embeddings,
)
from landmark_rag.boundary.sources import WikipediaClient
from landmark_rag.boundary.vdb import VectorStore, get_vector_store
from landmark_rag.configs import Settings, get_settings
from landmark_rag.core.agent import create_search_tool
from landmark_rag.core.chunking import ArticleSplitter
from landmark_rag.core.retrieval import HydeExpander
from landmark_rag.models.chat import ChatOptions


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._reset()

    def _reset(self) -> None:
        self._engine = None
        self._session_factory = None
        self._vector_store = None
        self._embedding_generator = None
        self._chat_client = None
        self._wikipedia_client = None
        self._retrieval_service = None
        self._index_builder = None
        self._prompt_service = None
        self._rag_question_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        """Get cached async engine."""
        if self._engine is None:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store."""
        if self._vector_store is None:
            self._vector_store = get_vector_store(self.settings, self.session_factory)
        return self._vector_store

    @property
    def embedding_generator(self) -> GeminiEmbeddingGenerator:
        if self._embedding_generator is None:
            self._embedding_generator = GeminiEmbeddingGenerator(
                create_embeddings(self.settings.llm.embedding_model)
            )
        return self._embedding_generator

    @property
    def chat_client(self) -> ChatClient:
        """Get cached tool-calling chat client."""
        if self._chat_client is None:
            llm = self.settings.llm
            self._chat_client = ToolCallingChatClient(
                create_chat_model(llm.chat_model, llm.temperature),
                max_tool_iterations=llm.max_tool_iterations,
            )
        return self._chat_client

    @property
    def wikipedia_client(self) -> WikipediaClient:
        if self._wikipedia_client is None:
            self._wikipedia_client = WikipediaClient()
        return self._wikipedia_client

    @property
    def retrieval_service(self) -> RetrievalService:
        if self._retrieval_service is None:
            retrieval = self.settings.retrieval
            self._retrieval_service = RetrievalService(
                vector_store=self.vector_store,
                embedding_generator=self.embedding_generator,
                hyde_expander=HydeExpander(self.chat_client, max_chars=retrieval.hyde_max_chars),
                use_hyde=retrieval.use_hyde,
                rrf_k=retrieval.rrf_k,
                mmr_lambda=retrieval.mmr_lambda,
                fetch_k=retrieval.mmr_fetch_k,
            )
        return self._retrieval_service

    @property
    def index_builder(self) -> IndexBuilder:
        if self._index_builder is None:
            chunking = self.settings.chunking
            self._index_builder = IndexBuilder(
                source=self.wikipedia_client,
                splitter=ArticleSplitter(
                    max_tokens_per_chunk=chunking.max_tokens_per_chunk,
                    overlap_tokens=chunking.overlap_tokens,
                    soft_wrap_chars=chunking.soft_wrap_chars,
                ),
                embedding_generator=self.embedding_generator,
                vector_store=self.vector_store,
                max_chunks_per_document=chunking.max_chunks_per_document,
            )
        return self._index_builder

    @property
    def prompt_service(self) -> PromptService:
        if self._prompt_service is None:
            self._prompt_service = PromptService(self.session_factory)
        return self._prompt_service

    @property
    def rag_question_service(self) -> RagQuestionService:
        if self._rag_question_service is None:
            self._rag_question_service = RagQuestionService(
                self.retrieval_service, self.chat_client
            )
        return self._rag_question_service

    async def aclose(self) -> None:
        """Release connections and clear all cached instances."""
        if self._wikipedia_client is not None:
            await self._wikipedia_client.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        self._reset()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_vector_store_dependency() -> VectorStore:
    return get_service_cache().vector_store


def get_index_builder() -> IndexBuilder:
    return get_service_cache().index_builder


def get_retrieval_service() -> RetrievalService:
    return get_service_cache().retrieval_service


def get_prompt_service() -> PromptService:
    return get_service_cache().prompt_service


def get_rag_question_service() -> RagQuestionService:
    return get_service_cache().rag_question_service


def get_chat_client() -> ChatClient:
    return get_service_cache().chat_client


async def get_chat_options(
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
    prompt_service: PromptService = Depends(get_prompt_service),
) -> ChatOptions:
    """
    Chat options for one request.

    The search tool is built per request so it picks up the current HYDE prompt.

    Returns:
        ChatOptions: Options exposing database_search_service
    """
    hyde_prompt = await prompt_service.hyde_prompt()
    return ChatOptions(tools=[create_search_tool(retrieval_service, hyde_prompt=hyde_prompt)])


def get_chat_stream_service(
    chat_client: ChatClient = Depends(get_chat_client),
    options: ChatOptions = Depends(get_chat_options),
    prompt_service: PromptService = Depends(get_prompt_service),
) -> ChatStreamService:
    """
    Get chat stream service instance.

    Args:
        chat_client: Tool-calling chat client (injected via Depends)
        options: Per-request tools (injected via Depends)
        prompt_service: Chat system prompt source (injected via Depends)

    Returns:
        ChatStreamService: Streaming service for one exchange
    """
    return ChatStreamService(chat_client, options, prompt_service)
