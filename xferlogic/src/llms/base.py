from abc import ABC, abstractmethod

from pydantic import BaseModel


class TextGenerationResult(BaseModel):
    """Provider-independent result of a text generation call."""

    text: str
    token_count: int
    estimated_cost: float


class BaseTextGenerationProvider(ABC):
    """Base interface for text generation providers."""

    name: str

    @abstractmethod
    async def generate(self, prompt: str) -> TextGenerationResult:
        """Send the prompt upstream and normalise the response.

        Implementations let SDK exceptions propagate; the gateway wraps them.
        """
        pass
