"""
Test suite for ChatStreamService.

Tests event ordering, error termination and the end-of-stream marker.

System role: Verification of the chat streaming source
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import tool

from landmark_rag.application.services import ChatStreamService
from landmark_rag.application.services.chat_stream_service import last_user_question
from landmark_rag.core.exceptions import QueryError, UpstreamGenerationError
from landmark_rag.models.chat import ChatOptions, ChatResponse
from landmark_rag.models.streaming import STREAM_END_MARKER, CompletionEvent, StatusEvent
from tests.conftest import ScriptedChatClient, text_response


@tool
def database_search_service(query: str) -> str:
    """Searches for information about landmarks."""
    return "title: Petra"


async def collect(service: ChatStreamService, messages, system_prompt: str = "system") -> list:
    return [item async for item in service.stream(messages, system_prompt)]


class TestChatStreamService:
    """Test suite for ChatStreamService.stream()."""

    @pytest.mark.asyncio
    async def test_should_stream_status_completion_and_marker(self) -> None:
        """Test a plain exchange yields started, analyzing, completion, then the marker."""
        # Arrange
        chat_client = ScriptedChatClient(text_response("Petra is in Jordan."))
        service = ChatStreamService(chat_client)

        # Act
        items = await collect(service, [HumanMessage(content="Where is Petra?")], "Be helpful.")

        # Assert
        assert items[-1] == STREAM_END_MARKER
        events = items[:-1]
        assert [getattr(event, "phase", None) for event in events[:2]] == ["started", "analyzing"]
        assert events[0].message == "📨 Processing your request..."
        assert events[1].message == '🔍 Analyzing: "Where is Petra?"'
        assert isinstance(events[-1], CompletionEvent)
        assert events[-1].text == "Petra is in Jordan."

        messages, _ = chat_client.requests[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == "Be helpful."

    @pytest.mark.asyncio
    async def test_should_include_tool_progress_between_status_and_completion(self) -> None:
        """Test decorator events appear after the analyzing status in order."""
        # Arrange
        response = ChatResponse(
            messages=[
                AIMessage(
                    content="",
                    tool_calls=[{"id": "c1", "name": "database_search_service", "args": {"query": "Petra"}}],
                ),
                ToolMessage(content="title: Petra", tool_call_id="c1", name="database_search_service"),
                AIMessage(content="Petra is in Jordan."),
            ]
        )
        service = ChatStreamService(
            ScriptedChatClient(response), ChatOptions(tools=[database_search_service])
        )

        # Act
        items = await collect(service, [HumanMessage(content="Where is Petra?")])

        # Assert
        types = [item if isinstance(item, str) else item.type for item in items]
        assert types == [
            "status",
            "status",
            "status",
            "function_call",
            "function_result",
            "status",
            "completion",
            STREAM_END_MARKER,
        ]
        timestamps = [item.timestamp for item in items[:-1]]
        assert timestamps == sorted(timestamps)

    @pytest.mark.asyncio
    async def test_should_end_with_error_event_then_marker(self) -> None:
        """Test a failed exchange yields an error event followed by the marker."""
        # Arrange
        service = ChatStreamService(
            ScriptedChatClient(UpstreamGenerationError("model unavailable", capability="chat"))
        )

        # Act
        items = await collect(service, [HumanMessage(content="Hi")])

        # Assert
        assert items[-1] == STREAM_END_MARKER
        error = items[-2]
        assert isinstance(error, StatusEvent)
        assert error.type == "error"
        assert error.phase == "error"
        assert error.message.startswith("❌ Error: model unavailable")
        assert not any(isinstance(item, CompletionEvent) for item in items)

    @pytest.mark.asyncio
    async def test_should_read_system_prompt_from_prompt_service(self) -> None:
        """Test the stored chat system prompt is used when none is passed."""
        # Arrange
        prompt_service = MagicMock()
        prompt_service.chat_system_prompt = AsyncMock(return_value="Stored guide prompt.")
        chat_client = ScriptedChatClient(text_response("Hello"))
        service = ChatStreamService(chat_client, prompt_service=prompt_service)

        # Act
        items = [item async for item in service.stream([HumanMessage(content="Hi")])]

        # Assert
        assert items[-1] == STREAM_END_MARKER
        messages, _ = chat_client.requests[0]
        assert messages[0].content == "Stored guide prompt."

    @pytest.mark.asyncio
    async def test_should_end_with_error_event_when_prompt_lookup_fails(self) -> None:
        """Test a prompt store failure becomes an error event followed by the marker."""
        # Arrange
        prompt_service = MagicMock()
        prompt_service.chat_system_prompt = AsyncMock(
            side_effect=QueryError("Failed to read prompt", operation="get_prompt")
        )
        chat_client = ScriptedChatClient(text_response("unused"))
        service = ChatStreamService(chat_client, prompt_service=prompt_service)

        # Act
        items = [item async for item in service.stream([HumanMessage(content="Hi")])]

        # Assert
        assert items[-1] == STREAM_END_MARKER
        assert items[0].phase == "started"
        error = items[-2]
        assert error.type == "error"
        assert error.message.startswith("❌ Error: Failed to read prompt")
        assert chat_client.requests == []

    @pytest.mark.asyncio
    async def test_should_skip_analyzing_without_user_message(self) -> None:
        """Test no analyzing status is sent when there is no user question."""
        # Arrange
        service = ChatStreamService(ScriptedChatClient(text_response("Hello")))

        # Act
        items = await collect(service, [AIMessage(content="Earlier answer")])

        # Assert
        phases = [item.phase for item in items if isinstance(item, StatusEvent)]
        assert phases == ["started"]

    @pytest.mark.asyncio
    async def test_should_truncate_long_questions_in_analyzing_status(self) -> None:
        """Test the analyzing status previews at most 100 characters of the question."""
        # Arrange
        service = ChatStreamService(ScriptedChatClient(text_response("ok")))

        # Act
        items = await collect(service, [HumanMessage(content="q" * 300)])

        # Assert
        assert items[1].message == f'🔍 Analyzing: "{"q" * 100}..."'


class TestLastUserQuestion:
    """Test suite for last_user_question()."""

    def test_should_return_most_recent_user_message(self) -> None:
        """Test the latest human message wins."""
        messages = [
            HumanMessage(content="first"),
            AIMessage(content="answer"),
            HumanMessage(content="second"),
        ]
        assert last_user_question(messages) == "second"

    def test_should_return_empty_without_user_messages(self) -> None:
        """Test no human messages yields empty string."""
        assert last_user_question([SystemMessage(content="s")]) == ""
