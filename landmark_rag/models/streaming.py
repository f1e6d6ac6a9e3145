"""
Streaming event schemas for Server-Sent Events chat.

Defines the progress events emitted while a tool-calling exchange runs,
and the SSE framing used to deliver them.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

STREAM_END_MARKER = "[DONE]"


class ProgressEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    STATUS = "status"
    FUNCTION_CALL = "function_call"
    FUNCTION_RESULT = "function_result"
    COMPLETION = "completion"
    ERROR = "error"


class ExchangePhase(str, Enum):
    """Lifecycle of a single observed chat exchange."""

    IDLE = "idle"
    AWAITING_MODEL = "awaiting_model"
    ANALYZING_TOOL_CALLS = "analyzing_tool_calls"
    SYNTHESIZING = "synthesizing"
    DONE = "done"


def utc_now() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


class ProgressEventBase(BaseModel):
    """
    Base progress event.

    Attributes:
        message: Human-readable description for the UI
        timestamp: Event time; only ordering is guaranteed meaningful
    """

    message: str
    timestamp: datetime = Field(default_factory=utc_now)

    def to_sse(self) -> str:
        """Serialize as one complete SSE data frame."""
        return sse_frame(self.model_dump_json())


class StatusEvent(ProgressEventBase):
    """General status update, or the terminal error of a failed stream."""

    type: Literal["status", "error"] = "status"
    phase: str


class FunctionCallEvent(ProgressEventBase):
    """The model decided to call a tool."""

    type: Literal["function_call"] = "function_call"
    name: str
    arguments: str | None = None


class FunctionResultEvent(ProgressEventBase):
    """A tool call completed."""

    type: Literal["function_result"] = "function_result"
    name: str
    result_summary: str | None = None
    result_count: int = 0


class CompletionEvent(ProgressEventBase):
    """Final answer and the messages produced by the exchange."""

    type: Literal["completion"] = "completion"
    text: str
    new_messages: list[dict[str, Any]] = Field(default_factory=list)


ProgressEvent = Annotated[
    Union[StatusEvent, FunctionCallEvent, FunctionResultEvent, CompletionEvent],
    Field(discriminator="type"),
]


def sse_frame(payload: str) -> str:
    """Wrap a payload in SSE data framing."""
    return f"data: {payload}\n\n"


def event_durations(events: Sequence[ProgressEventBase]) -> list[timedelta]:
    """
    Inter-event durations as a consumer would render them.

    Args:
        events: Events in delivery order

    Returns:
        list[timedelta]: One entry per event; the first is zero
    """
    durations = []
    previous: datetime | None = None
    for event in events:
        durations.append(event.timestamp - previous if previous else timedelta(0))
        previous = event.timestamp
    return durations
