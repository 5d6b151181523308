"""Generation gateway.

Routes prompts to the text provider chosen by the caller, or to the image
provider, and normalises every upstream failure into ``ProviderError``.
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from xferlogic.common.exception import errors
from xferlogic.src.integrations.image_generation import (
    BaseImageGenerationClient,
    ImageGenerationResult,
    create_image_generation_client,
)
from xferlogic.src.llms.base import BaseTextGenerationProvider, TextGenerationResult
from xferlogic.src.llms.llm import TextProviderName, get_text_provider, resolve_provider_name

logger = logging.getLogger(__name__)


class GenerationGateway:
    """Facade over the text and image providers.

    Providers are resolved through factories on each call so the cached,
    lazily-built instances are only created when actually used.
    """

    def __init__(
        self,
        text_provider_factory: Callable[[TextProviderName], BaseTextGenerationProvider] = get_text_provider,
        image_client_factory: Callable[[], BaseImageGenerationClient] = create_image_generation_client,
    ):
        self._text_provider_factory = text_provider_factory
        self._image_client_factory = image_client_factory

    async def generate_text(self, prompt: str, model: str | None) -> TextGenerationResult:
        """Generate text with the provider selected by ``model``.

        Args:
            prompt: Prompt forwarded unchanged (may be empty)
            model: "openai" selects OpenAI; any other value selects Anthropic

        Raises:
            ProviderError: If the provider call fails for any reason
        """
        provider_name = resolve_provider_name(model)
        try:
            provider = self._text_provider_factory(provider_name)
            result = await provider.generate(prompt)
        except Exception as e:
            logger.error(f"Text generation failed on {provider_name}: {e}", exc_info=True)
            raise errors.ProviderError(str(e), provider=provider_name)

        logger.info(f"Generated text with {provider_name}: tokens={result.token_count}")
        return result

    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        """Generate one fixed-size image.

        Raises:
            ProviderError: If the provider call fails for any reason
        """
        try:
            client = self._image_client_factory()
            result = await client.generate_image(prompt)
        except Exception as e:
            logger.error(f"Image generation failed: {e}", exc_info=True)
            raise errors.ProviderError(str(e), provider="openai")

        logger.info("Generated image")
        return result


def get_generation_gateway() -> GenerationGateway:
    """Dependency returning the gateway; overridden in tests."""
    return GenerationGateway()


# Gateway Annotated
CurrentGenerationGateway = Annotated[GenerationGateway, Depends(get_generation_gateway)]
