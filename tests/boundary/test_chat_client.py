"""
Test suite for ToolCallingChatClient.

Uses a MagicMock chat model so tool-calling rounds can be scripted.

System role: Verification of the chat capability tool loop
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage
from langchain_core.tools import tool

from landmark_rag.boundary.llm import ToolCallingChatClient
from landmark_rag.core.exceptions import UpstreamGenerationError
from landmark_rag.models.chat import ChatOptions


@tool
def opening_hours(landmark: str) -> str:
    """Opening hours of a landmark."""
    return f"{landmark} opens at 9:00"


def tool_call_message(name: str = "opening_hours", call_id: str = "call_1") -> AIMessage:
    return AIMessage(
        content="",
        tool_calls=[{"id": call_id, "name": name, "args": {"landmark": "Louvre"}}],
    )


@pytest.fixture
def mock_model() -> MagicMock:
    """Provide mock chat model whose bound runnable is scriptable."""
    model = MagicMock()
    model.runnable = MagicMock()
    model.runnable.ainvoke = AsyncMock()
    model.bind_tools.return_value = model.runnable
    model.ainvoke = AsyncMock()
    return model


class TestToolCallingChatClient:
    """Test suite for ToolCallingChatClient.get_response()."""

    @pytest.mark.asyncio
    async def test_should_execute_tool_calls_and_return_produced_messages(
        self, mock_model: MagicMock
    ) -> None:
        """Test one tool round followed by a final answer."""
        # Arrange
        mock_model.runnable.ainvoke.side_effect = [tool_call_message(), AIMessage(content="Opens at 9.")]
        client = ToolCallingChatClient(mock_model)

        # Act
        response = await client.get_response(
            [HumanMessage(content="When does the Louvre open?")],
            ChatOptions(tools=[opening_hours]),
        )

        # Assert
        assert [type(message) for message in response.messages] == [AIMessage, ToolMessage, AIMessage]
        tool_message = response.messages[1]
        assert tool_message.content == "Louvre opens at 9:00"
        assert tool_message.tool_call_id == "call_1"
        assert response.text == "Opens at 9."
        mock_model.bind_tools.assert_called_once_with([opening_hours])
        second_transcript = mock_model.runnable.ainvoke.call_args_list[1].args[0]
        assert isinstance(second_transcript[-1], ToolMessage)

    @pytest.mark.asyncio
    async def test_should_run_tool_round_with_info_logging_enabled(
        self, mock_model: MagicMock, info_logging
    ) -> None:
        """Test tool execution logs its arguments without breaking the exchange."""
        # Arrange
        mock_model.runnable.ainvoke.side_effect = [tool_call_message(), AIMessage(content="Opens at 9.")]
        client = ToolCallingChatClient(mock_model)

        # Act
        response = await client.get_response(
            [HumanMessage(content="When does the Louvre open?")],
            ChatOptions(tools=[opening_hours]),
        )

        # Assert
        assert response.text == "Opens at 9."
        assert response.messages[1].content == "Louvre opens at 9:00"

    @pytest.mark.asyncio
    async def test_should_call_model_directly_without_tools(self, mock_model: MagicMock) -> None:
        """Test no tools means no binding and a single call."""
        # Arrange
        mock_model.ainvoke.return_value = AIMessage(content="Hello")
        client = ToolCallingChatClient(mock_model)

        # Act
        response = await client.get_response([HumanMessage(content="Hi")])

        # Assert
        assert response.text == "Hello"
        mock_model.bind_tools.assert_not_called()
        mock_model.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_should_answer_unknown_tool_with_error_message(self, mock_model: MagicMock) -> None:
        """Test a call to an unregistered tool yields an error ToolMessage."""
        # Arrange
        mock_model.runnable.ainvoke.side_effect = [
            tool_call_message(name="teleport"),
            AIMessage(content="Sorry."),
        ]
        client = ToolCallingChatClient(mock_model)

        # Act
        response = await client.get_response([], ChatOptions(tools=[opening_hours]))

        # Assert
        tool_message = response.messages[1]
        assert tool_message.status == "error"
        assert "teleport" in tool_message.content

    @pytest.mark.asyncio
    async def test_should_stop_after_iteration_budget(self, mock_model: MagicMock) -> None:
        """Test the loop ends when the tool iteration budget is spent."""
        # Arrange
        mock_model.runnable.ainvoke.side_effect = [tool_call_message(), tool_call_message(call_id="call_2")]
        client = ToolCallingChatClient(mock_model, max_tool_iterations=1)

        # Act
        response = await client.get_response([], ChatOptions(tools=[opening_hours]))

        # Assert
        assert mock_model.runnable.ainvoke.await_count == 2
        assert len(response.messages) == 3

    @pytest.mark.asyncio
    async def test_should_wrap_model_failure(self, mock_model: MagicMock) -> None:
        """Test provider exceptions become UpstreamGenerationError."""
        # Arrange
        mock_model.ainvoke.side_effect = RuntimeError("503 from provider")
        client = ToolCallingChatClient(mock_model)

        # Act & Assert
        with pytest.raises(UpstreamGenerationError) as exc_info:
            await client.get_response([HumanMessage(content="Hi")])
        assert exc_info.value.details["capability"] == "chat"
