"""
Single-shot RAG question answering.

Retrieves the top chunks for a question, lays them out in the user prompt
and asks the chat model once, without tools.

Dependencies: langchain_core, landmark_rag.application.services.retrieval_service
System role: /api/ask orchestration
"""

import logging

from langchain_core.messages import HumanMessage, SystemMessage

from landmark_rag.application.services.retrieval_service import RetrievalService
from landmark_rag.boundary.llm.chat_client import ChatClient
from landmark_rag.models.search import VectorSearchResult

logger = logging.getLogger(__name__)

RAG_TOP_K = 5


def build_user_prompt(question: str, results: list[VectorSearchResult]) -> str:
    """Question followed by the retrieved sections."""
    sections = "\n\n".join(
        f"Title: {r.chunk.title}\n"
        f"Section: {r.chunk.section}\n"
        f"Part: {r.chunk.sequence}\n"
        f"Content: {r.chunk.content}\n"
        f"URL:{r.chunk.source_ref}"
        for r in results
    )
    return f"User question:\n{question}\n\nRetrieved article sections:\n{sections}\n"


class RagQuestionService:
    """Answers a question from the top retrieved chunks."""

    def __init__(self, retrieval_service: RetrievalService, chat_client: ChatClient) -> None:
        self._retrieval_service = retrieval_service
        self._chat_client = chat_client

    async def answer_question(self, question: str, system_prompt: str) -> str:
        """
        Answer a question in one model call.

        Args:
            question: User question
            system_prompt: RAG system prompt

        Returns:
            str: Model answer

        Raises:
            QueryError: If retrieval fails
            UpstreamGenerationError: If embedding or generation fails
        """
        results = await self._retrieval_service.find_top_k_chunks(question, RAG_TOP_K)
        logger.info(
            f"{__name__}:answer_question - Retrieved {len(results)} chunks",
            extra={"question_len": len(question)},
        )

        response = await self._chat_client.get_response(
            [
                SystemMessage(content=system_prompt),
                HumanMessage(content=build_user_prompt(question, results)),
            ]
        )
        return response.text
