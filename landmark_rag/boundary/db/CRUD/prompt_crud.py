"""
Prompt CRUD operations.

Dependencies: sqlalchemy, landmark_rag.boundary.db.models
System role: Prompt override persistence operations
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from landmark_rag.boundary.db.base import utc_now
from landmark_rag.boundary.db.CRUD.base_crud import BaseCRUD
from landmark_rag.boundary.db.models.prompt_model import PromptModel


class PromptCRUD(BaseCRUD[PromptModel]):
    """
    CRUD operations for PromptModel.

    get_all() already orders by name, which is the listing order.
    """

    def __init__(self) -> None:
        """Initialize PromptCRUD with PromptModel."""
        super().__init__(PromptModel)

    async def set_content(
        self,
        session: AsyncSession,
        name: str,
        content: str,
    ) -> datetime:
        """
        Create or overwrite a prompt.

        Args:
            session: Async database session
            name: Prompt key
            content: New prompt text

        Returns:
            datetime: The stored updated_at timestamp
        """
        updated_at = utc_now()
        await self.upsert(session, name=name, content=content, updated_at=updated_at)
        return updated_at


prompt_crud = PromptCRUD()
