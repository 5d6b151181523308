"""PDF rendering for plain text.

Uses matplotlib's PDF backend to lay wrapped text out on Letter pages,
top to bottom, in a monospaced font. Long text flows onto extra pages.
"""

import io
import logging
import textwrap

import matplotlib

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

# Letter, in inches
PAGE_WIDTH = 8.5
PAGE_HEIGHT = 11.0
MARGIN = 0.75

FONT_SIZE = 10
WRAP_WIDTH = 90
LINES_PER_PAGE = 60


def wrap_text(text: str, width: int = WRAP_WIDTH) -> list[str]:
    """Split text into display lines, keeping blank lines between paragraphs."""
    lines: list[str] = []
    for paragraph in text.splitlines():
        lines.extend(textwrap.wrap(paragraph, width) or [''])
    return lines


def paginate(lines: list[str], lines_per_page: int = LINES_PER_PAGE) -> list[list[str]]:
    """Group lines into pages. Always returns at least one (possibly empty) page."""
    pages = [lines[i:i + lines_per_page] for i in range(0, len(lines), lines_per_page)]
    return pages or [[]]


def _draw_page(lines: list[str]) -> Figure:
    fig = Figure(figsize=(PAGE_WIDTH, PAGE_HEIGHT))
    left = MARGIN / PAGE_WIDTH
    top = 1 - MARGIN / PAGE_HEIGHT
    line_height = (1 - 2 * MARGIN / PAGE_HEIGHT) / LINES_PER_PAGE

    for index, line in enumerate(lines):
        fig.text(
            left,
            top - index * line_height,
            line,
            fontsize=FONT_SIZE,
            family='monospace',
            ha='left',
            va='top',
            parse_math=False,
        )
    return fig


def render_pdf(text: str) -> bytes:
    """Render text into a PDF document.

    Args:
        text: Plain text; newlines start new lines, long lines are wrapped

    Returns:
        bytes: PDF document as bytes
    """
    pages = paginate(wrap_text(text))

    output = io.BytesIO()
    # Type 42 embeds TrueType glyphs so the text stays selectable
    with matplotlib.rc_context({'pdf.fonttype': 42}):
        with PdfPages(output) as pdf:
            for page_lines in pages:
                pdf.savefig(_draw_page(page_lines))

    data = output.getvalue()
    logger.info(f"Rendered PDF: pages={len(pages)}, bytes={len(data)}")
    return data
