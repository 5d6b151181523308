from abc import ABC, abstractmethod

from pydantic import BaseModel


class ImageGenerationResult(BaseModel):
    url: str
    estimated_cost: float


class BaseImageGenerationClient(ABC):
    """Base interface for image generation clients."""

    @abstractmethod
    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        """Generate an image based on the provided text prompt."""
        pass
