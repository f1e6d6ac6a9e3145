"""
Prompt ORM model.

Key-value store of prompt overrides. Missing rows fall back to the
embedded defaults.

Dependencies: sqlalchemy, landmark_rag.boundary.db.base
System role: Editable prompt persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landmark_rag.boundary.db.base import Base, TimestampMixin


class PromptModel(Base, TimestampMixin):
    """
    Prompt ORM model.

    Attributes:
        name: Prompt key (ChatSystemPrompt, HydePrompt, RagSystemPrompt)
        content: Prompt text
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "prompts"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
