import logging
from functools import lru_cache

from xferlogic.core.conf import settings
from xferlogic.src.llms.llm import get_openai_client

from .base import BaseImageGenerationClient
from .openai_images import OpenAIImageGenerationClient

logger = logging.getLogger(__name__)


@lru_cache
def create_image_generation_client() -> BaseImageGenerationClient:
    """Factory function that creates (once) the image generation client from settings."""
    logger.info(f"Using OpenAI images for image generation: model={settings.OPENAI_IMAGE_MODEL}")
    return OpenAIImageGenerationClient(
        client=get_openai_client(),
        model=settings.OPENAI_IMAGE_MODEL,
        size=settings.OPENAI_IMAGE_SIZE,
        cost_per_image=settings.IMAGE_COST_PER_CALL,
    )
