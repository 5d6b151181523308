"""Office document rendering (DOCX via python-docx, XLSX via openpyxl)."""

import io
import logging
from collections.abc import Sequence
from typing import Any

from docx import Document
from openpyxl import Workbook

logger = logging.getLogger(__name__)


def render_docx(text: str) -> bytes:
    """Render text into a Word document holding a single paragraph.

    Raises:
        ValueError: If the text holds NUL or control characters
    """
    document = Document()
    document.add_paragraph(text)

    output = io.BytesIO()
    document.save(output)
    data = output.getvalue()
    logger.info(f"Rendered DOCX: bytes={len(data)}")
    return data


def render_xlsx(rows: Sequence[Sequence[Any]]) -> bytes:
    """Render rows into a workbook with one worksheet.

    Rows are appended in input order. There is no header inference; cell
    values are written as openpyxl converts them.

    Raises:
        ValueError: If openpyxl cannot store a cell value
        IllegalCharacterError: If a string holds control characters
        TypeError: If a row is not an appendable sequence
    """
    workbook = Workbook()
    worksheet = workbook.active

    for row in rows:
        worksheet.append(list(row))

    output = io.BytesIO()
    workbook.save(output)
    data = output.getvalue()
    logger.info(f"Rendered XLSX: rows={len(rows)}, bytes={len(data)}")
    return data
