"""
Hypothetical Document Embeddings (HYDE) query expansion.

Asks the chat model for a short passage that would answer the question;
the passage is embedded instead of the raw question because it sits closer
to the indexed chunks in embedding space.

Dependencies: langchain_core, landmark_rag.boundary.llm.chat_client
System role: Optional query rewriting before retrieval
"""

import logging

from langchain_core.messages import HumanMessage, SystemMessage

from landmark_rag.boundary.llm.chat_client import ChatClient
from landmark_rag.core.exceptions import UpstreamGenerationError
from landmark_rag.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

HYDE_SYSTEM_MESSAGE = "You create concise, factual reference passages."
QUESTION_PLACEHOLDER = "{{question}}"


class HydeExpander:
    """Generates hypothetical answer passages for retrieval."""

    def __init__(self, chat_client: ChatClient, max_chars: int = 1500) -> None:
        """
        Args:
            chat_client: Chat capability (called without tools)
            max_chars: Passage length cap
        """
        self._chat_client = chat_client
        self._max_chars = max_chars

    async def expand(self, query: str, prompt_template: str) -> str:
        """
        Generate a hypothetical passage for a query.

        Args:
            query: User question
            prompt_template: Prompt containing the {{question}} placeholder

        Returns:
            str: Stripped passage of at most max_chars characters, or "" when
            the model returns nothing or the call fails. Callers fall back
            to the raw query on "".
        """
        messages = [
            SystemMessage(content=HYDE_SYSTEM_MESSAGE),
            HumanMessage(content=prompt_template.replace(QUESTION_PLACEHOLDER, query)),
        ]

        try:
            response = await self._chat_client.get_response(messages)
        except UpstreamGenerationError as e:
            logger.warning(
                f"{__name__}:expand - Hypothesis generation failed, using raw query: {e}",
                extra={"query": safe_log_value(query, 100)},
            )
            return ""

        text = response.text.strip()
        if not text:
            return ""
        return text[: self._max_chars]
