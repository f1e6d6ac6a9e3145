"""
Test suite for PromptService.

Runs against an in-memory SQLite prompt table.

System role: Verification of prompt storage and defaults
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from landmark_rag.application.services import PromptService
from landmark_rag.boundary.db.CRUD import prompt_crud
from landmark_rag.core.agent.prompts import (
    CHAT_SYSTEM_PROMPT,
    CHAT_SYSTEM_PROMPT_NAME,
    DEFAULT_PROMPTS,
    HYDE_PROMPT_NAME,
)
from landmark_rag.core.exceptions import QueryError


@pytest.fixture
def prompt_service(session_factory) -> PromptService:
    return PromptService(session_factory)


class TestPromptService:
    """Test suite for PromptService."""

    @pytest.mark.asyncio
    async def test_get_prompt_should_fall_back_to_default(self, prompt_service: PromptService) -> None:
        """Test unsaved prompts return the embedded default."""
        assert await prompt_service.chat_system_prompt() == CHAT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_get_prompt_should_return_none_for_unknown_name(self, prompt_service: PromptService) -> None:
        """Test a name with neither stored value nor default yields None."""
        assert await prompt_service.get_prompt("NoSuchPrompt") is None

    @pytest.mark.asyncio
    async def test_set_prompt_should_take_effect_immediately(self, prompt_service: PromptService) -> None:
        """Test an edited prompt is returned on the next read."""
        # Act
        updated_at = await prompt_service.set_prompt(HYDE_PROMPT_NAME, "Describe {{question}}")

        # Assert
        assert await prompt_service.hyde_prompt() == "Describe {{question}}"
        stored = await prompt_service.get_stored_prompt(HYDE_PROMPT_NAME)
        assert stored.content == "Describe {{question}}"
        assert stored.updated_at is not None
        assert updated_at is not None

    @pytest.mark.asyncio
    async def test_seed_defaults_should_only_fill_empty_table(self, prompt_service: PromptService) -> None:
        """Test seeding writes defaults once and never overwrites edits."""
        # Act
        first = await prompt_service.seed_defaults()
        await prompt_service.set_prompt(CHAT_SYSTEM_PROMPT_NAME, "Edited")
        second = await prompt_service.seed_defaults()

        # Assert
        assert first is True
        assert second is False
        assert await prompt_service.chat_system_prompt() == "Edited"

    @pytest.mark.asyncio
    async def test_list_prompts_should_order_by_name(self, prompt_service: PromptService) -> None:
        """Test stored prompts are listed alphabetically."""
        # Arrange
        await prompt_service.seed_defaults()

        # Act
        prompts = await prompt_service.list_prompts()

        # Assert
        assert [prompt.name for prompt in prompts] == sorted(DEFAULT_PROMPTS)

    @pytest.mark.asyncio
    async def test_reset_should_restore_defaults(self, prompt_service: PromptService) -> None:
        """Test reset overwrites edits with the embedded texts."""
        # Arrange
        await prompt_service.set_prompt(CHAT_SYSTEM_PROMPT_NAME, "Edited")

        # Act
        count = await prompt_service.reset_to_defaults()

        # Assert
        assert count == 3
        assert await prompt_service.chat_system_prompt() == CHAT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_get_prompt_should_raise_query_error_when_store_fails(
        self, prompt_service: PromptService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test database failures surface as QueryError."""
        # Arrange
        monkeypatch.setattr(
            prompt_crud,
            "get_by_id",
            AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))),
        )

        # Act & Assert
        with pytest.raises(QueryError) as exc_info:
            await prompt_service.chat_system_prompt()
        assert exc_info.value.details["operation"] == "get_prompt"
        assert exc_info.value.details["name"] == CHAT_SYSTEM_PROMPT_NAME
