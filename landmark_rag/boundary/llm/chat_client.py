"""
Chat capability with tool calling.

ToolCallingChatClient runs the function-invocation loop over a LangChain
chat model: bind tools, execute the tool calls the model requests, feed
the ToolMessages back, repeat until the model answers in plain text or the
iteration budget is spent.

Dependencies: langchain_core, langchain_google_genai
System role: LLM chat exchange for the agent and HYDE
"""

import logging
from typing import Protocol, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ToolMessage
from langchain_core.tools import BaseTool
from langchain_google_genai import ChatGoogleGenerativeAI

from landmark_rag.core.exceptions import LandmarkRagException, UpstreamGenerationError
from landmark_rag.models.chat import ChatOptions, ChatResponse

logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """A single chat exchange; may involve tool calls."""

    async def get_response(
        self,
        messages: Sequence[BaseMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse: ...


def create_chat_model(model: str, temperature: float = 0.0) -> BaseChatModel:
    """
    Build the Gemini chat model.

    Args:
        model: Gemini model name
        temperature: Sampling temperature

    Returns:
        BaseChatModel: ChatGoogleGenerativeAI instance
    """
    return ChatGoogleGenerativeAI(model=model, temperature=temperature)


class ToolCallingChatClient:
    """ChatClient that executes tool calls locally between model turns."""

    def __init__(self, model: BaseChatModel, max_tool_iterations: int = 5) -> None:
        """
        Initialize the client.

        Args:
            model: LangChain chat model supporting bind_tools
            max_tool_iterations: Maximum rounds of tool execution per exchange
        """
        self._model = model
        self._max_tool_iterations = max_tool_iterations

    async def get_response(
        self,
        messages: Sequence[BaseMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """
        Run one exchange.

        Args:
            messages: Conversation so far (system prompt included)
            options: Tools available to the model

        Returns:
            ChatResponse: Assistant and tool messages produced by the exchange

        Raises:
            UpstreamGenerationError: If the model call fails
        """
        options = options or ChatOptions()
        runnable = self._model.bind_tools(options.tools) if options.has_tools else self._model
        tools_by_name = {tool.name: tool for tool in options.tools}

        transcript = list(messages)
        produced: list[BaseMessage] = []
        iterations = 0

        try:
            while True:
                ai_message = await runnable.ainvoke(list(transcript))
                produced.append(ai_message)
                transcript.append(ai_message)

                if not (isinstance(ai_message, AIMessage) and ai_message.tool_calls):
                    break
                if iterations >= self._max_tool_iterations:
                    logger.warning(
                        f"{__name__}:get_response - Tool iteration budget exhausted",
                        extra={"max_tool_iterations": self._max_tool_iterations},
                    )
                    break

                iterations += 1
                for tool_call in ai_message.tool_calls:
                    tool_message = await self._run_tool(tools_by_name, tool_call)
                    produced.append(tool_message)
                    transcript.append(tool_message)
        except LandmarkRagException:
            raise
        except Exception as e:
            logger.error(f"{__name__}:get_response - {type(e).__name__}: {e}")
            raise UpstreamGenerationError(
                "Chat model call failed",
                capability="chat",
                details={"error": str(e), "tool_iterations": iterations},
            ) from e

        logger.info(
            f"{__name__}:get_response - Exchange complete",
            extra={"tool_iterations": iterations, "messages": len(produced)},
        )
        return ChatResponse(messages=produced)

    async def _run_tool(self, tools_by_name: dict[str, BaseTool], tool_call: dict) -> ToolMessage:
        """Execute one requested tool call and return its ToolMessage."""
        name = tool_call.get("name", "")
        tool = tools_by_name.get(name)
        if tool is None:
            logger.warning(f"{__name__}:_run_tool - Model requested unknown tool '{name}'")
            return ToolMessage(
                content=f"Error: tool '{name}' is not available.",
                tool_call_id=tool_call.get("id") or "",
                name=name,
                status="error",
            )

        logger.info(
            f"{__name__}:_run_tool - Invoking {name}",
            extra={"tool_args": tool_call.get("args")},
        )
        result = await tool.ainvoke({**tool_call, "type": "tool_call"})
        if isinstance(result, ToolMessage):
            return result
        return ToolMessage(content=str(result), tool_call_id=tool_call.get("id") or "", name=name)
