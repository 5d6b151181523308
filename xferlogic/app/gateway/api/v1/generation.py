"""Text and image generation API endpoints."""

from typing import Any

from fastapi import APIRouter, BackgroundTasks

from xferlogic.app.gateway.schema.generation import (
    ImageGenerationParam,
    ImageGenerationResponse,
    TextGenerationParam,
    TextGenerationResponse,
)
from xferlogic.app.gateway.service.generation_service import CurrentGenerationGateway
from xferlogic.app.gateway.service.usage_service import apply_usage
from xferlogic.core.security.jwt import CurrentIdentity
from xferlogic.database.db import CurrentSession

router = APIRouter(tags=['Generation'])


@router.post('/text', response_model=TextGenerationResponse)
async def generate_text(
    obj: TextGenerationParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    gateway: CurrentGenerationGateway,
    background_tasks: BackgroundTasks,
) -> Any:
    """Generate text with OpenAI (``model == "openai"``) or Anthropic (anything else)."""
    result = await gateway.generate_text(obj.prompt, obj.model)

    await apply_usage(
        db_session=db,
        background_tasks=background_tasks,
        user_id=identity.user_id,
        endpoint='text',
        token_count=result.token_count,
        cost=result.estimated_cost,
    )
    return TextGenerationResponse(result=result.text)


@router.post('/image', response_model=ImageGenerationResponse)
async def generate_image(
    obj: ImageGenerationParam,
    identity: CurrentIdentity,
    db: CurrentSession,
    gateway: CurrentGenerationGateway,
    background_tasks: BackgroundTasks,
) -> Any:
    """Generate a 1024x1024 image and return its URL."""
    result = await gateway.generate_image(obj.prompt)

    await apply_usage(
        db_session=db,
        background_tasks=background_tasks,
        user_id=identity.user_id,
        endpoint='image',
        cost=result.estimated_cost,
    )
    return ImageGenerationResponse(image=result.url)
