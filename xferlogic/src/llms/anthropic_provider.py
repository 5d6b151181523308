import logging

from anthropic import AsyncAnthropic

from xferlogic.src.llms.base import BaseTextGenerationProvider, TextGenerationResult

logger = logging.getLogger(__name__)


class AnthropicTextProvider(BaseTextGenerationProvider):
    """Anthropic Messages API implementation.

    Token count is input + output tokens when the response reports usage,
    otherwise a fixed placeholder count.
    """

    name = "anthropic"

    def __init__(
        self,
        client: AsyncAnthropic,
        model: str,
        max_tokens: int,
        cost_per_token: float,
        placeholder_tokens: int,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.cost_per_token = cost_per_token
        self.placeholder_tokens = placeholder_tokens

    async def generate(self, prompt: str) -> TextGenerationResult:
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )

        usage = getattr(message, "usage", None)
        if usage is not None:
            token_count = (usage.input_tokens or 0) + (usage.output_tokens or 0)
        else:
            logger.debug(f"No usage reported by {self.model}, using placeholder count")
            token_count = self.placeholder_tokens

        return TextGenerationResult(
            text=text,
            token_count=token_count,
            estimated_cost=token_count * self.cost_per_token,
        )
