from .base import BaseImageGenerationClient, ImageGenerationResult
from .factory import create_image_generation_client
from .openai_images import OpenAIImageGenerationClient

__all__ = [
    "BaseImageGenerationClient",
    "ImageGenerationResult",
    "OpenAIImageGenerationClient",
    "create_image_generation_client",
]
