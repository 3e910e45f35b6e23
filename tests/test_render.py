import io
import sys

import pytest
from PIL import Image

from conftest import SAMPLE_SVG, WIDE_SVG, requires_cairo
from favicon_generator import render
from favicon_generator.config import Background
from favicon_generator.errors import RenderError
from favicon_generator.render import composite_on_background, rasterize, render_png


def test_composite_flattens_alpha():
    img = Image.new('RGBA', (4, 4), (0, 0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0, 255))
    img.putpixel((1, 0), (0, 0, 0, 128))

    out = composite_on_background(img, Background.WHITE.value)
    assert out.mode == 'RGBA'
    assert out.getpixel((0, 0)) == (255, 0, 0, 255)
    assert out.getpixel((3, 3)) == (255, 255, 255, 255)
    # half-transparent black over white lands in the middle
    r, g, b, a = out.getpixel((1, 0))
    assert a == 255 and 125 <= r <= 129 and r == g == b


def test_render_png_uses_background(monkeypatch):
    monkeypatch.setattr(render, 'rasterize', lambda svg, size: Image.new('RGBA', (size, size), (0, 0, 0, 0)))

    clear = Image.open(io.BytesIO(render_png(b'<svg/>', 8, Background.TRANSPARENT.value)))
    assert clear.convert('RGBA').getpixel((0, 0))[3] == 0

    solid = Image.open(io.BytesIO(render_png(b'<svg/>', 8, Background.WHITE.value, compression_level=0)))
    assert solid.size == (8, 8)
    assert solid.convert('RGBA').getpixel((0, 0)) == (255, 255, 255, 255)


def test_missing_cairosvg_raises_render_error(monkeypatch):
    monkeypatch.setitem(sys.modules, 'cairosvg', None)
    with pytest.raises(RenderError, match='cairosvg'):
        rasterize(SAMPLE_SVG, 16)


@requires_cairo
def test_rasterize_square():
    img = rasterize(SAMPLE_SVG, 48)
    assert img.size == (48, 48)
    assert img.mode == 'RGBA'


@requires_cairo
def test_rasterize_letterboxes_wide_artwork():
    img = rasterize(WIDE_SVG, 32)
    assert img.size == (32, 32)
    assert img.getpixel((16, 0))[3] == 0
    assert img.getpixel((16, 16))[:3] == (255, 0, 0)


@requires_cairo
def test_invalid_svg():
    with pytest.raises(RenderError):
        rasterize(b'this is not svg', 16)
