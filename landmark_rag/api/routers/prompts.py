"""
Prompt management API endpoints.

Routes:
- GET /prompts - List stored prompts with previews
- GET /prompts/{name} - Full prompt
- PUT /prompts/{name} - Update prompt content
- POST /prompts/reset - Restore the embedded defaults

Dependencies: landmark_rag.application.services.prompt_service
System role: Prompt editing HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from landmark_rag.api.deps import get_prompt_service
from landmark_rag.application.services import PromptService
from landmark_rag.models.prompts import (
    PromptDetail,
    PromptListItem,
    PromptResetResponse,
    PromptUpdateRequest,
    PromptUpdateResponse,
)
from landmark_rag.observability.log_utils import preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prompts", tags=["prompts"])

PREVIEW_CHARS = 100


@router.get("", response_model=list[PromptListItem])
async def list_prompts(
    prompt_service: PromptService = Depends(get_prompt_service),
) -> list[PromptListItem]:
    """List stored prompts ordered by name."""
    prompts = await prompt_service.list_prompts()
    return [
        PromptListItem(
            name=prompt.name,
            preview=preview(prompt.content, PREVIEW_CHARS),
            updated_at=prompt.updated_at,
        )
        for prompt in prompts
    ]


@router.get("/{name}", response_model=PromptDetail)
async def get_prompt(
    name: str,
    prompt_service: PromptService = Depends(get_prompt_service),
) -> PromptDetail:
    """
    Get one stored prompt.

    Raises:
        HTTPException(404): Prompt not stored
    """
    prompt = await prompt_service.get_stored_prompt(name)
    if prompt is None:
        raise HTTPException(status_code=404, detail=f"Prompt '{name}' not found")
    return PromptDetail(name=prompt.name, content=prompt.content, updated_at=prompt.updated_at)


@router.put("/{name}", response_model=PromptUpdateResponse)
async def update_prompt(
    name: str,
    request: PromptUpdateRequest,
    prompt_service: PromptService = Depends(get_prompt_service),
) -> PromptUpdateResponse:
    """
    Create or overwrite a prompt.

    Raises:
        HTTPException(400): Empty content
    """
    if not request.content.strip():
        raise HTTPException(status_code=400, detail="Content cannot be empty")

    updated_at = await prompt_service.set_prompt(name, request.content)
    return PromptUpdateResponse(
        message="Prompt updated successfully",
        name=name,
        updated_at=updated_at,
    )


@router.post("/reset", response_model=PromptResetResponse)
async def reset_prompts(
    prompt_service: PromptService = Depends(get_prompt_service),
) -> PromptResetResponse:
    """Restore every default prompt."""
    count = await prompt_service.reset_to_defaults()
    return PromptResetResponse(message="All prompts reset to defaults", prompts_reset=count)
