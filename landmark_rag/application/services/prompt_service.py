"""
Prompt service.

Reads prompts from the prompt store on every access so edits take effect
immediately; prompts never saved fall back to the embedded defaults.

Dependencies: sqlalchemy, landmark_rag.boundary.db.CRUD, landmark_rag.core.agent.prompts
System role: Prompt management for chat, HYDE and RAG
"""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from landmark_rag.boundary.db.CRUD import prompt_crud
from landmark_rag.boundary.db.models import PromptModel
from landmark_rag.core.agent.prompts import (
    CHAT_SYSTEM_PROMPT_NAME,
    DEFAULT_PROMPTS,
    HYDE_PROMPT_NAME,
    RAG_SYSTEM_PROMPT_NAME,
)
from landmark_rag.core.exceptions import QueryError

logger = logging.getLogger(__name__)


class PromptService:
    """Prompt store access with embedded defaults."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def get_prompt(self, name: str) -> str | None:
        """
        Current text of a prompt.

        Args:
            name: Prompt key

        Returns:
            str | None: Stored text, else the default, else None

        Raises:
            QueryError: If the prompt store cannot be read
        """
        try:
            async with self._session_factory() as session:
                row = await prompt_crud.get_by_id(session, name)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:get_prompt - {type(e).__name__}: {e}", extra={"prompt": name})
            raise QueryError(
                "Failed to read prompt",
                operation="get_prompt",
                details={"name": name, "error": str(e)},
            ) from e
        if row is not None:
            return row.content
        return DEFAULT_PROMPTS.get(name)

    async def chat_system_prompt(self) -> str:
        return await self.get_prompt(CHAT_SYSTEM_PROMPT_NAME)

    async def hyde_prompt(self) -> str:
        return await self.get_prompt(HYDE_PROMPT_NAME)

    async def rag_system_prompt(self) -> str:
        return await self.get_prompt(RAG_SYSTEM_PROMPT_NAME)

    async def list_prompts(self) -> Sequence[PromptModel]:
        """Stored prompts ordered by name."""
        async with self._session_factory() as session:
            return await prompt_crud.get_all(session)

    async def get_stored_prompt(self, name: str) -> PromptModel | None:
        async with self._session_factory() as session:
            return await prompt_crud.get_by_id(session, name)

    async def set_prompt(self, name: str, content: str) -> datetime:
        """
        Create or overwrite a prompt.

        Args:
            name: Prompt key
            content: New text

        Returns:
            datetime: Stored update time
        """
        async with self._session_factory() as session:
            updated_at = await prompt_crud.set_content(session, name, content)
            await session.commit()

        logger.info(f"{__name__}:set_prompt - Updated '{name}'", extra={"content_len": len(content)})
        return updated_at

    async def reset_to_defaults(self) -> int:
        """
        Overwrite every default prompt with its embedded text.

        Returns:
            int: Number of prompts reset
        """
        async with self._session_factory() as session:
            for name, content in DEFAULT_PROMPTS.items():
                await prompt_crud.set_content(session, name, content)
            await session.commit()

        logger.info(f"{__name__}:reset_to_defaults - Reset {len(DEFAULT_PROMPTS)} prompts")
        return len(DEFAULT_PROMPTS)

    async def seed_defaults(self) -> bool:
        """
        Store the defaults if the prompt table is empty.

        Returns:
            bool: True when defaults were written
        """
        async with self._session_factory() as session:
            if await prompt_crud.count(session) > 0:
                return False
        await self.reset_to_defaults()
        return True
