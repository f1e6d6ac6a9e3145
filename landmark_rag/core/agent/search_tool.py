"""
Database search tool for the landmark chat agent.

Wraps RetrievalService.find_in_database for agent tool calling. The tool
returns formatted chunks to the model and the chunk list as artifact.

Dependencies: langchain_core.tools, landmark_rag.application.services
System role: Search tool for agent context retrieval
"""

import logging
from typing import TYPE_CHECKING

from langchain_core.tools import BaseTool, tool

from landmark_rag.models.search import VectorSearchResult

if TYPE_CHECKING:
    from landmark_rag.application.services.retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

SEARCH_TOOL_NAME = "database_search_service"


def format_results(results: list[VectorSearchResult]) -> str:
    """Render search results as the text the model reads."""
    if not results:
        return "No relevant landmarks found."

    blocks = []
    for result in results:
        chunk = result.chunk
        blocks.append(
            f"""---
title: {chunk.title}
section: {chunk.section}
part: {chunk.sequence}
source_url: {chunk.source_ref}
relevance_score: {result.score:.3f}

{chunk.content}
---"""
        )
    return "\n".join(blocks)


def create_search_tool(
    retrieval_service: "RetrievalService",
    hyde_prompt: str | None = None,
) -> BaseTool:
    """
    Create the search tool bound to a RetrievalService.

    Args:
        retrieval_service: Service performing the top-5 database search
        hyde_prompt: HYDE template used when the service has HYDE enabled

    Returns:
        BaseTool: Async structured tool named database_search_service
    """

    @tool(SEARCH_TOOL_NAME, response_format="content_and_artifact")
    async def database_search_service(query: str) -> tuple[str, list[VectorSearchResult]]:
        """Searches for information about landmarks in the database based on a semantic search query."""
        logger.info(f"{__name__}:database_search_service - START query_len={len(query)}")
        results = await retrieval_service.find_in_database(query, hyde_prompt=hyde_prompt)
        logger.info(f"{__name__}:database_search_service - END results={len(results)}")
        return format_results(results), results

    return database_search_service
