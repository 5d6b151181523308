def render_svg(svg: str) -> bytes:
    """Return SVG markup as UTF-8 bytes. The markup is not validated or sanitized."""
    return svg.encode('utf-8')
