"""
Progress tracking decorator for tool-calling chat exchanges.

Wraps a ChatClient, lets the inner client run the whole exchange, then walks
the resulting transcript and reports what happened as ordered progress
events (initial status, tool calls, tool results, synthesis, completion).

The inner call is opaque, so event times after it are synthetic: a clock
started when analysis begins and advanced by a fixed step per event. The
timeline is illustrative, only the ordering is meaningful.

Dependencies: landmark_rag.models.chat, landmark_rag.models.streaming
System role: Streaming UX affordance over the chat capability
"""

import json
import logging
import re
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Sequence

from langchain_core.messages import BaseMessage

from landmark_rag.boundary.llm.chat_client import ChatClient
from landmark_rag.core.agent.search_tool import SEARCH_TOOL_NAME
from landmark_rag.models.chat import (
    ChatOptions,
    ChatResponse,
    FunctionCallContent,
    FunctionResultContent,
    serialize_message,
)
from landmark_rag.models.streaming import (
    CompletionEvent,
    ExchangePhase,
    FunctionCallEvent,
    FunctionResultEvent,
    ProgressEventBase,
    StatusEvent,
    utc_now,
)
from landmark_rag.observability.log_utils import preview

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEventBase], Awaitable[None]]

RESULT_PREVIEW_CHARS = 150
_TITLE_FIELD = re.compile(r'"?title"?\s*:', re.IGNORECASE)


class SyntheticClock:
    """Strictly increasing timestamps advanced by a fixed step."""

    def __init__(self, start: datetime, step: timedelta) -> None:
        self._current = start
        self._step = step

    def tick(self) -> datetime:
        self._current = self._current + self._step
        return self._current


def count_result_items(result: FunctionResultContent) -> int:
    """
    Best-effort number of items a tool returned.

    Uses the structured artifact when the tool provided one, otherwise
    counts title fields in the text. 0 means unknown.
    """
    if result.items is not None:
        return len(result.items)
    return len(_TITLE_FIELD.findall(result.result))


def describe_arguments(call: FunctionCallContent) -> str:
    """The "query" argument if present, else the raw argument blob."""
    if "query" in call.arguments:
        return str(call.arguments["query"])
    return json.dumps(call.arguments, default=str) if call.arguments else ""


class ProgressTrackingChatClient:
    """
    ChatClient decorator emitting progress events for one exchange.

    Phases: IDLE -> AWAITING_MODEL -> ANALYZING_TOOL_CALLS -> SYNTHESIZING -> DONE.
    The decorator never alters the response and never swallows errors from
    the inner client.
    """

    def __init__(
        self,
        inner: ChatClient,
        on_progress: ProgressCallback | None = None,
        clock_step: timedelta = timedelta(milliseconds=2),
    ) -> None:
        """
        Args:
            inner: Client that performs the exchange
            on_progress: Async callback receiving each event in order
            clock_step: Increment of the synthetic clock per event
        """
        self._inner = inner
        self._on_progress = on_progress
        self._clock_step = clock_step
        self.phase = ExchangePhase.IDLE

    async def _emit(self, event: ProgressEventBase) -> None:
        if self._on_progress is not None:
            await self._on_progress(event)

    async def get_response(
        self,
        messages: Sequence[BaseMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """
        Run the exchange through the inner client and report its progress.

        Args:
            messages: Conversation so far
            options: Tools available to the model

        Returns:
            ChatResponse: The inner client's response, unchanged
        """
        options = options or ChatOptions()
        started_at = utc_now()

        self.phase = ExchangePhase.AWAITING_MODEL
        if options.has_tools:
            await self._emit(
                StatusEvent(
                    message="🤖 Sending initial query to LLM...",
                    timestamp=started_at,
                    phase="llm_initial",
                )
            )

        response = await self._inner.get_response(messages, options)

        self.phase = ExchangePhase.ANALYZING_TOOL_CALLS
        clock = SyntheticClock(max(utc_now(), started_at), self._clock_step)
        tool_calls = 0
        tool_results = 0

        for item in response.content_items():
            if isinstance(item, FunctionCallContent):
                tool_calls += 1
                arguments = describe_arguments(item)
                name = item.name or "unknown"
                if name == SEARCH_TOOL_NAME:
                    message = f'🧠 LLM decided to search database with query: "{arguments}"'
                else:
                    message = f"🧠 LLM decided to call tool: {name}"
                await self._emit(
                    FunctionCallEvent(
                        message=message,
                        timestamp=clock.tick(),
                        name=name,
                        arguments=arguments,
                    )
                )
            elif isinstance(item, FunctionResultContent):
                tool_results += 1
                count = count_result_items(item)
                if count > 0:
                    message = f"📊 Database returned {count} relevant chunks"
                else:
                    message = "✅ Database search completed - Found relevant information"
                await self._emit(
                    FunctionResultEvent(
                        message=message,
                        timestamp=clock.tick(),
                        name=item.name or item.call_id or "unknown",
                        result_summary=preview(item.result, RESULT_PREVIEW_CHARS),
                        result_count=count,
                    )
                )

        if tool_results:
            self.phase = ExchangePhase.SYNTHESIZING
            await self._emit(
                StatusEvent(
                    message="🤖 LLM synthesizing answer from search results...",
                    timestamp=clock.tick(),
                    phase="llm_synthesis",
                )
            )

        await self._emit(
            CompletionEvent(
                message="✅ Response complete",
                timestamp=clock.tick(),
                text=response.text,
                new_messages=[serialize_message(m) for m in response.new_messages()],
            )
        )
        self.phase = ExchangePhase.DONE

        logger.info(
            f"{__name__}:get_response - Exchange analyzed",
            extra={"tool_calls": tool_calls, "tool_results": tool_results},
        )
        return response
