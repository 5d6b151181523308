from typing import Any

from pydantic import BaseModel, Field


class TextDocumentParam(BaseModel):
    """Body for the PDF and DOCX endpoints."""

    text: str = Field(default='', description='Plain text to lay out')


class SpreadsheetParam(BaseModel):
    """Body for the Excel endpoint. Each row is an ordered list of cell values."""

    rows: list[list[Any]] = Field(default_factory=list, description='Rows in output order')


class SvgParam(BaseModel):
    svg: str = Field(description='SVG markup, returned unchanged')
