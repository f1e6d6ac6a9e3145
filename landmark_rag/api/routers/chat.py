"""
Chat API endpoints.

Routes:
- POST /chat - One tool-calling exchange, returns the produced messages
- POST /chat/stream - Same exchange streamed as Server-Sent Events (SSE)

Dependencies: landmark_rag.application.services.chat_stream_service
System role: Chat messaging HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from langchain_core.messages import BaseMessage, SystemMessage

from landmark_rag.api.deps import (
    get_chat_client,
    get_chat_options,
    get_chat_stream_service,
    get_prompt_service,
)
from landmark_rag.api.routers.router_utils import to_http_exception
from landmark_rag.application.services import ChatStreamService, PromptService
from landmark_rag.boundary.llm import ChatClient
from landmark_rag.core.exceptions import LandmarkRagException
from landmark_rag.models.chat import ChatMessageIn, ChatOptions, serialize_message
from landmark_rag.models.streaming import STREAM_END_MARKER, sse_frame

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def to_langchain_history(messages: list[ChatMessageIn]) -> list[BaseMessage]:
    """Convert client history, dropping messages with no provider equivalent."""
    converted = [message.to_langchain() for message in messages]
    return [message for message in converted if message is not None]


@router.post("", response_model=list[dict[str, Any]])
async def chat(
    messages: list[ChatMessageIn],
    chat_client: ChatClient = Depends(get_chat_client),
    options: ChatOptions = Depends(get_chat_options),
    prompt_service: PromptService = Depends(get_prompt_service),
) -> list[dict[str, Any]]:
    """
    Run one exchange with the chat system prompt and the search tool.

    Args:
        messages: Conversation history, oldest first

    Returns:
        list[dict]: Assistant and tool messages produced by the exchange

    Raises:
        HTTPException(502): Model or retrieval failure
    """
    try:
        system_prompt = await prompt_service.chat_system_prompt()
        response = await chat_client.get_response(
            [SystemMessage(content=system_prompt), *to_langchain_history(messages)],
            options,
        )
    except LandmarkRagException as e:
        logger.error(f"{__name__}:chat - {type(e).__name__}: {e}")
        raise to_http_exception(e, "process chat")
    return [serialize_message(message) for message in response.new_messages()]


@router.post("/stream")
async def chat_stream(
    messages: list[ChatMessageIn],
    stream_service: ChatStreamService = Depends(get_chat_stream_service),
) -> StreamingResponse:
    """
    Stream the exchange's progress using Server-Sent Events (SSE).

    SSE Format (one JSON event per frame, discriminated by "type"):
        data: {"type": "status", "message": "...", "phase": "started", ...}

        data: {"type": "function_call", "name": "database_search_service", ...}

        data: {"type": "function_result", "result_count": 5, ...}

        data: {"type": "completion", "text": "...", "new_messages": [...]}

        data: [DONE]

    A failed exchange or system prompt lookup sends {"type": "error", ...}
    followed by [DONE].

    Args:
        messages: Conversation history, oldest first
        stream_service: Injected ChatStreamService

    Returns:
        StreamingResponse: SSE stream of progress events
    """
    logger.info(f"{__name__}:chat_stream - START messages={len(messages)}")
    history = to_langchain_history(messages)

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE frames from the progress stream."""
        async for item in stream_service.stream(history):
            if isinstance(item, str):
                yield sse_frame(STREAM_END_MARKER)
            else:
                yield item.to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
