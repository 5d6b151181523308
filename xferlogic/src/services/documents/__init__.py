"""Document rendering services.

Every renderer is a synchronous library call returning the complete
document as an in-memory byte string.
"""

from .office_service import render_docx, render_xlsx
from .pdf_service import render_pdf
from .svg_service import render_svg

MEDIA_TYPE_PDF = 'application/pdf'
MEDIA_TYPE_DOCX = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
MEDIA_TYPE_XLSX = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
MEDIA_TYPE_SVG = 'image/svg+xml'

__all__ = [
    'render_pdf',
    'render_docx',
    'render_xlsx',
    'render_svg',
    'MEDIA_TYPE_PDF',
    'MEDIA_TYPE_DOCX',
    'MEDIA_TYPE_XLSX',
    'MEDIA_TYPE_SVG',
]
