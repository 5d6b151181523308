"""Document conversion service.

Runs the synchronous renderers in a worker thread and maps rendering
failures caused by the input to ``ValidationError``.
"""

import asyncio
import logging
from typing import Any

from openpyxl.utils.exceptions import IllegalCharacterError

from xferlogic.common.exception import errors
from xferlogic.src.services import documents

logger = logging.getLogger(__name__)


async def create_pdf(text: str) -> bytes:
    return await asyncio.to_thread(documents.render_pdf, text)


async def create_docx(text: str) -> bytes:
    """Build a Word document from text.

    Raises:
        ValidationError: If the text holds characters XML cannot carry (NUL, control characters)
    """
    try:
        return await asyncio.to_thread(documents.render_docx, text)
    except ValueError as e:
        logger.info(f"Rejected document text: {e}")
        raise errors.ValidationError(message=f"Invalid text: {e}", code="INVALID_TEXT")


async def create_xlsx(rows: list[list[Any]]) -> bytes:
    """Build a workbook from rows.

    Raises:
        ValidationError: If a cell value cannot be stored in a worksheet
    """
    try:
        return await asyncio.to_thread(documents.render_xlsx, rows)
    except (ValueError, TypeError, IllegalCharacterError) as e:
        logger.info(f"Rejected spreadsheet rows: {e}")
        raise errors.ValidationError(message=f"Invalid cell value: {e}", code="INVALID_ROWS")


async def create_svg(svg: str) -> bytes:
    return documents.render_svg(svg)
