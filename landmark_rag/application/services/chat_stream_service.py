"""
Streaming chat service.

Runs one tool-calling exchange in a producer task and yields its progress
events as they are generated, followed by the end-of-stream marker. A
failed exchange, including a failed system prompt lookup, yields an error
event before the marker; a consumer that stops iterating cancels the
producer.

Dependencies: asyncio, landmark_rag.core.agent, landmark_rag.models.streaming
System role: Server-Sent Events source for /api/chat/stream
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Sequence

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from landmark_rag.application.services.prompt_service import PromptService
from landmark_rag.boundary.llm.chat_client import ChatClient
from landmark_rag.core.agent.progress_tracking import ProgressTrackingChatClient
from landmark_rag.core.agent.prompts import CHAT_SYSTEM_PROMPT_NAME, DEFAULT_PROMPTS
from landmark_rag.models.chat import ChatOptions, message_text
from landmark_rag.models.streaming import STREAM_END_MARKER, ProgressEventBase, StatusEvent
from landmark_rag.observability.log_utils import preview

logger = logging.getLogger(__name__)

QUESTION_PREVIEW_CHARS = 100
_PRODUCER_DONE = object()


def last_user_question(messages: Sequence[BaseMessage]) -> str:
    """Text of the most recent user message, or ""."""
    for message in reversed(messages):
        if isinstance(message, HumanMessage):
            return message_text(message)
    return ""


class ChatStreamService:
    """Streams progress events of a chat exchange."""

    def __init__(
        self,
        chat_client: ChatClient,
        options: ChatOptions | None = None,
        prompt_service: PromptService | None = None,
    ) -> None:
        """
        Args:
            chat_client: Tool-calling chat capability
            options: Tools offered to the model
            prompt_service: Source of the chat system prompt (embedded default when None)
        """
        self._chat_client = chat_client
        self._options = options or ChatOptions()
        self._prompt_service = prompt_service

    async def _chat_system_prompt(self) -> str:
        if self._prompt_service is None:
            return DEFAULT_PROMPTS[CHAT_SYSTEM_PROMPT_NAME]
        return await self._prompt_service.chat_system_prompt()

    async def stream(
        self,
        messages: Sequence[BaseMessage],
        system_prompt: str | None = None,
    ) -> AsyncIterator[ProgressEventBase | str]:
        """
        Run the exchange and yield its events.

        Args:
            messages: Conversation history (without system prompt)
            system_prompt: System prompt prepended to the history; looked up
                from the prompt store inside the stream when None

        Yields:
            ProgressEventBase | str: Events in generation order, then STREAM_END_MARKER
        """
        queue: asyncio.Queue = asyncio.Queue()

        async def produce() -> None:
            try:
                await queue.put(StatusEvent(message="📨 Processing your request...", phase="started"))

                question = last_user_question(messages)
                if question:
                    await queue.put(
                        StatusEvent(
                            message=f'🔍 Analyzing: "{preview(question, QUESTION_PREVIEW_CHARS)}"',
                            phase="analyzing",
                        )
                    )

                prompt = system_prompt
                if prompt is None:
                    prompt = await self._chat_system_prompt()

                client = ProgressTrackingChatClient(self._chat_client, on_progress=queue.put)
                await client.get_response(
                    [SystemMessage(content=prompt), *messages],
                    self._options,
                )
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"{__name__}:stream - Exchange failed: {type(e).__name__}: {e}")
                await queue.put(
                    StatusEvent(type="error", message=f"❌ Error: {e}", phase="error")
                )
            finally:
                queue.put_nowait(_PRODUCER_DONE)

        producer = asyncio.create_task(produce())
        event_count = 0
        try:
            while True:
                item = await queue.get()
                if item is _PRODUCER_DONE:
                    break
                event_count += 1
                yield item
            yield STREAM_END_MARKER
            logger.info(f"{__name__}:stream - END events={event_count}")
        finally:
            if not producer.done():
                logger.info(f"{__name__}:stream - Consumer left, cancelling exchange")
                producer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await producer
