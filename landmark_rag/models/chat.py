"""
Chat exchange models.

Typed view over a LangChain message transcript. A tool-calling exchange is
flattened into content items (plain text, tool call, tool result) so
observers can classify them without parsing serialized text.

Dependencies: pydantic, langchain_core
System role: Chat capability request/response structures
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field


def message_text(message: BaseMessage) -> str:
    """
    Extract plain text from a message.

    Content may be a string or a list of content blocks (provider-specific);
    only text blocks are kept.

    Args:
        message: Any LangChain message

    Returns:
        str: Concatenated text content
    """
    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


@dataclass(frozen=True)
class TextContent:
    """Plain text produced by a participant."""

    role: str
    text: str


@dataclass(frozen=True)
class FunctionCallContent:
    """The model asking for a tool invocation."""

    call_id: str
    name: str
    arguments: dict[str, Any]


@dataclass(frozen=True)
class FunctionResultContent:
    """
    Output of a tool invocation.

    Attributes:
        call_id: ID of the call this answers
        name: Tool name (may be empty when the provider omits it)
        result: Text returned to the model
        items: Structured artifact returned alongside the text, if any
    """

    call_id: str
    name: str
    result: str
    items: list[Any] | None = None


ContentItem = TextContent | FunctionCallContent | FunctionResultContent


@dataclass
class ChatOptions:
    """Per-exchange options; tools the model may call."""

    tools: list[BaseTool] = field(default_factory=list)

    @property
    def has_tools(self) -> bool:
        return len(self.tools) > 0


@dataclass
class ChatResponse:
    """
    Result of one chat exchange.

    Attributes:
        messages: Messages produced during the exchange (assistant turns and
            tool results), in order. The request messages are not included.
    """

    messages: list[BaseMessage] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Text of the final assistant message."""
        for message in reversed(self.messages):
            if isinstance(message, AIMessage):
                return message_text(message)
        return ""

    def content_items(self) -> Iterator[ContentItem]:
        """Yield typed content items in transcript order."""
        for message in self.messages:
            if isinstance(message, AIMessage):
                text = message_text(message)
                if text:
                    yield TextContent(role="assistant", text=text)
                for tool_call in message.tool_calls:
                    yield FunctionCallContent(
                        call_id=tool_call.get("id") or "",
                        name=tool_call.get("name") or "",
                        arguments=dict(tool_call.get("args") or {}),
                    )
            elif isinstance(message, ToolMessage):
                artifact = message.artifact
                yield FunctionResultContent(
                    call_id=message.tool_call_id,
                    name=message.name or "",
                    result=message_text(message),
                    items=list(artifact) if isinstance(artifact, (list, tuple)) else None,
                )
            else:
                yield TextContent(role=message.type, text=message_text(message))

    def new_messages(self) -> list[BaseMessage]:
        """Assistant and tool messages only; prior history is not re-sent."""
        return [m for m in self.messages if isinstance(m, (AIMessage, ToolMessage))]


class ChatMessageIn(BaseModel):
    """Chat history message as sent by API clients."""

    role: Literal["system", "user", "assistant", "tool"] = Field(description="Message author role")
    content: str = Field(default="", description="Message text")

    def to_langchain(self) -> BaseMessage | None:
        """
        Convert to a LangChain message.

        Tool messages are dropped: without the originating tool call they
        are not a valid provider transcript.

        Returns:
            BaseMessage | None: Converted message, or None for tool messages
        """
        if self.role == "system":
            return SystemMessage(content=self.content)
        if self.role == "user":
            return HumanMessage(content=self.content)
        if self.role == "assistant":
            return AIMessage(content=self.content)
        return None


class AskResponse(BaseModel):
    """Single-shot RAG answer."""

    answer: str


def serialize_message(message: BaseMessage) -> dict[str, Any]:
    """
    JSON-safe view of an assistant or tool message for API clients.

    Args:
        message: LangChain message

    Returns:
        dict: role, content and tool call details where present
    """
    if isinstance(message, ToolMessage):
        return {
            "role": "tool",
            "content": message_text(message),
            "tool_call_id": message.tool_call_id,
            "name": message.name,
        }
    if isinstance(message, AIMessage):
        payload: dict[str, Any] = {"role": "assistant", "content": message_text(message)}
        if message.tool_calls:
            payload["tool_calls"] = [
                {"id": call.get("id"), "name": call.get("name"), "arguments": call.get("args", {})}
                for call in message.tool_calls
            ]
        return payload
    return {"role": message.type, "content": message_text(message)}
