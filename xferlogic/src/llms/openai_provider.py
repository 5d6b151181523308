
from openai import AsyncOpenAI

from xferlogic.src.llms.base import BaseTextGenerationProvider, TextGenerationResult


class OpenAITextProvider(BaseTextGenerationProvider):
    """OpenAI Responses API implementation.

    Token count comes from the usage block the API returns.
    """

    name = "openai"

    def __init__(self, client: AsyncOpenAI, model: str, cost_per_token: float):
        self.client = client
        self.model = model
        self.cost_per_token = cost_per_token

    async def generate(self, prompt: str) -> TextGenerationResult:
        response = await self.client.responses.create(
            model=self.model,
            input=prompt,
        )
        text = response.output_text or ""
        usage = response.usage
        token_count = usage.total_tokens if usage else 0

        return TextGenerationResult(
            text=text,
            token_count=token_count,
            estimated_cost=token_count * self.cost_per_token,
        )
