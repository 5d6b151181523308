"""Text provider factory.

Builds the SDK clients and provider instances from settings. Instances are
process-scoped and created lazily on first use, so importing this module does
not require API keys.

Supported providers:
- openai: openai.AsyncOpenAI (Responses API)
- anthropic: anthropic.AsyncAnthropic (Messages API)
"""

import logging
from functools import lru_cache
from typing import Literal

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from xferlogic.core.conf import settings
from xferlogic.src.llms.anthropic_provider import AnthropicTextProvider
from xferlogic.src.llms.base import BaseTextGenerationProvider
from xferlogic.src.llms.openai_provider import OpenAITextProvider

logger = logging.getLogger(__name__)

TextProviderName = Literal["openai", "anthropic"]


@lru_cache
def get_openai_client() -> AsyncOpenAI:
    """Shared AsyncOpenAI client for text and image calls.

    Retries are disabled: a failed call is reported to the caller as-is.
    """
    kwargs = {
        "api_key": settings.OPENAI_API_KEY,
        "max_retries": 0,
    }

    # Add optional base_url for proxies/emulators
    if settings.OPENAI_BASE_URL:
        kwargs["base_url"] = settings.OPENAI_BASE_URL

    logger.info("Creating OpenAI client")
    return AsyncOpenAI(**kwargs)


@lru_cache
def get_anthropic_client() -> AsyncAnthropic:
    """Shared AsyncAnthropic client, retries disabled."""
    logger.info("Creating Anthropic client")
    return AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY, max_retries=0)


def _create_openai_provider() -> BaseTextGenerationProvider:
    logger.info(f"Creating OpenAI text provider: model={settings.OPENAI_MODEL}")
    return OpenAITextProvider(
        client=get_openai_client(),
        model=settings.OPENAI_MODEL,
        cost_per_token=settings.OPENAI_COST_PER_TOKEN,
    )


def _create_anthropic_provider() -> BaseTextGenerationProvider:
    logger.info(f"Creating Anthropic text provider: model={settings.ANTHROPIC_MODEL}")
    return AnthropicTextProvider(
        client=get_anthropic_client(),
        model=settings.ANTHROPIC_MODEL,
        max_tokens=settings.ANTHROPIC_MAX_TOKENS,
        cost_per_token=settings.ANTHROPIC_COST_PER_TOKEN,
        placeholder_tokens=settings.ANTHROPIC_PLACEHOLDER_TOKENS,
    )


_PROVIDER_FACTORIES = {
    "openai": _create_openai_provider,
    "anthropic": _create_anthropic_provider,
}


def resolve_provider_name(model: str | None) -> TextProviderName:
    """Map the request's model choice to a provider: "openai" or, for anything else, "anthropic"."""
    return "openai" if model == "openai" else "anthropic"


@lru_cache
def get_text_provider(name: TextProviderName) -> BaseTextGenerationProvider:
    """Get (and cache) the text provider instance for ``name``."""
    return _PROVIDER_FACTORIES[name]()
