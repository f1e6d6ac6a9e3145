"""
Prompt management API schemas.

Dependencies: pydantic
System role: Request/response models for prompt endpoints
"""

from datetime import datetime

from pydantic import BaseModel, Field


class PromptListItem(BaseModel):
    """Summary of a prompt for list view."""

    name: str
    preview: str = Field(description="First 100 characters of the prompt")
    updated_at: datetime


class PromptDetail(BaseModel):
    """Full prompt details for editing."""

    name: str
    content: str
    updated_at: datetime


class PromptUpdateRequest(BaseModel):
    """Request to update a prompt's content."""

    content: str


class PromptUpdateResponse(BaseModel):
    """Response after updating a prompt."""

    message: str
    name: str
    updated_at: datetime


class PromptResetResponse(BaseModel):
    """Response after resetting prompts."""

    message: str
    prompts_reset: int
