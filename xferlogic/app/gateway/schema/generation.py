from pydantic import BaseModel, Field


class TextGenerationParam(BaseModel):
    """Text generation request. ``model`` == "openai" selects OpenAI, anything else Anthropic."""

    prompt: str = Field(default='', description='Prompt forwarded to the provider')
    model: str | None = Field(default=None, description='Provider choice')


class ImageGenerationParam(BaseModel):
    prompt: str = Field(default='', description='Image prompt')


class TextGenerationResponse(BaseModel):
    result: str


class ImageGenerationResponse(BaseModel):
    image: str
