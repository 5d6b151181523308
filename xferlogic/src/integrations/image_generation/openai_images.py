from openai import AsyncOpenAI

from .base import BaseImageGenerationClient, ImageGenerationResult


class OpenAIImageGenerationClient(BaseImageGenerationClient):
    """OpenAI Images API implementation of image generation client."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        size: str,
        cost_per_image: float,
    ):
        """
        Initialize the OpenAI images client.

        Args:
            client: Shared AsyncOpenAI client
            model: Image model name
            size: Fixed output resolution, e.g. "1024x1024"
            cost_per_image: Flat estimated cost per call in USD
        """
        self.client = client
        self.model = model
        self.size = size
        self.cost_per_image = cost_per_image

    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        """Generate one image and return a URL for it."""
        result = await self.client.images.generate(
            model=self.model,
            prompt=prompt,
            size=self.size,
        )
        image = result.data[0]

        # gpt-image models return base64 data instead of a hosted URL
        if image.url:
            url = image.url
        elif image.b64_json:
            url = f"data:image/png;base64,{image.b64_json}"
        else:
            raise ValueError("Image response contained neither a URL nor image data")

        return ImageGenerationResult(url=url, estimated_cost=self.cost_per_image)
