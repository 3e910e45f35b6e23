import io

import pytest
from PIL import Image

from favicon_generator import generator

SAMPLE_SVG = b"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <circle cx="50" cy="50" r="40" fill="#3b82f6"/>
</svg>
"""

WIDE_SVG = b"""<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">
  <rect x="0" y="0" width="200" height="100" fill="#ff0000"/>
</svg>
"""


def _cairo_usable():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_cairo = pytest.mark.skipif(not _cairo_usable(), reason="cairosvg / libcairo not available")


def make_png(size, color=(59, 130, 246, 255)):
    buf = io.BytesIO()
    Image.new('RGBA', (size, size), color).save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def sample_svg(tmp_path):
    path = tmp_path / "test-icon.svg"
    path.write_bytes(SAMPLE_SVG)
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def fake_render(monkeypatch):
    """Replace the cairo renderer with a solid-colour Pillow image.

    Returns the list of (size, background) calls.
    """
    calls = []

    def render_png(svg_bytes, size, background, quality=95, compression_level=9):
        calls.append((size, background))
        fill = background if background[3] else (59, 130, 246, 0)
        return make_png(size, fill)

    monkeypatch.setattr(generator, "render_png", render_png)
    return calls
