"""
Search and single-shot question API endpoints.

Routes: GET /search, GET /ask

Dependencies: landmark_rag.application.services
System role: Retrieval HTTP API
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query

from landmark_rag.api.deps import (
    get_prompt_service,
    get_rag_question_service,
    get_retrieval_service,
    get_settings_dependency,
)
from landmark_rag.api.routers.router_utils import to_http_exception
from landmark_rag.application.services import (
    PromptService,
    RagQuestionService,
    RetrievalService,
)
from landmark_rag.configs import Settings
from landmark_rag.core.exceptions import LandmarkRagException
from landmark_rag.models.chat import AskResponse
from landmark_rag.models.search import VectorSearchResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

SearchStrategy = Literal["default", "plain", "fused", "diverse"]


@router.get("/search", response_model=list[VectorSearchResult])
async def search(
    query: str,
    k: int = Query(default=3, ge=1, le=50),
    strategy: SearchStrategy = "default",
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
    prompt_service: PromptService = Depends(get_prompt_service),
    settings: Settings = Depends(get_settings_dependency),
) -> list[VectorSearchResult]:
    """
    Search indexed chunks.

    Args:
        query: Search text
        k: Number of results
        strategy: "plain" vector search, "fused" raw+HYDE RRF, "diverse" MMR;
            "default" is fused when RETRIEVAL_USE_HYDE is set, plain otherwise
    """
    if strategy == "default":
        strategy = "fused" if settings.retrieval.use_hyde else "plain"

    try:
        if strategy == "fused":
            hyde_prompt = await prompt_service.hyde_prompt()
            return await retrieval_service.find_fused_chunks(query, k, hyde_prompt)
        if strategy == "diverse":
            return await retrieval_service.find_diverse_chunks(query, k)
        return await retrieval_service.find_top_k_chunks(query, k)
    except LandmarkRagException as e:
        logger.error(f"{__name__}:search - {type(e).__name__}: {e}", extra={"strategy": strategy})
        raise to_http_exception(e, "search")


@router.get("/ask", response_model=AskResponse)
async def ask(
    question: str,
    rag_service: RagQuestionService = Depends(get_rag_question_service),
    prompt_service: PromptService = Depends(get_prompt_service),
) -> AskResponse:
    """Answer a question from the top 5 retrieved chunks."""
    try:
        system_prompt = await prompt_service.rag_system_prompt()
        answer = await rag_service.answer_question(question, system_prompt)
    except LandmarkRagException as e:
        logger.error(f"{__name__}:ask - {type(e).__name__}: {e}")
        raise to_http_exception(e, "answer question")
    return AskResponse(answer=answer)
