"""
Rasterise an SVG into a square PNG.

cairosvg does the vector rendering, Pillow fits the result into a
size x size canvas and encodes it, numpy flattens the alpha onto an
opaque background when one is requested.
"""

import io
import logging

import numpy as np
from PIL import Image, ImageOps

from .errors import RenderError

logger = logging.getLogger(__name__)


def composite_on_background(img: Image.Image, bg_color) -> Image.Image:
    """Composite an RGBA image onto a solid colour. Result is fully opaque."""
    arr = np.asarray(img.convert('RGBA'), dtype=np.float32)
    alpha = arr[:, :, 3:4] / 255.0
    bg = np.array(bg_color[:3], dtype=np.float32)

    # result = fg * alpha + bg * (1 - alpha)
    rgb = arr[:, :, :3] * alpha + bg * (1.0 - alpha)
    opaque = np.full(alpha.shape, 255.0, dtype=np.float32)
    out = np.clip(np.rint(np.concatenate([rgb, opaque], axis=2)), 0, 255).astype(np.uint8)
    return Image.fromarray(out)


def rasterize(svg_bytes: bytes, size: int) -> Image.Image:
    """Render the SVG so it fits inside size x size, centred on a transparent canvas."""
    try:
        import cairosvg
    except (ImportError, OSError) as e:
        # cairocffi raises OSError when the native cairo library is missing
        raise RenderError(f"cairosvg is not usable: {e}. Install cairosvg and the cairo library.") from e

    try:
        png = cairosvg.svg2png(bytestring=svg_bytes, output_width=size)
    except Exception as e:
        raise RenderError(f"Could not render SVG at {size}x{size}: {e}") from e

    img = Image.open(io.BytesIO(png)).convert('RGBA')
    if img.size == (size, size):
        return img

    # Non-square artwork: keep the aspect ratio and letterbox it
    fitted = ImageOps.contain(img, (size, size), Image.Resampling.LANCZOS)
    canvas = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    canvas.paste(fitted, ((size - fitted.width) // 2, (size - fitted.height) // 2))
    return canvas


def render_png(svg_bytes: bytes, size: int, background, quality: int = 95,
               compression_level: int = 9) -> bytes:
    """Render svg_bytes to a size x size PNG and return the encoded bytes.

    Args:
        background: RGBA tuple. Alpha 0 keeps transparency, anything else is
            composited to a fully opaque image.
        quality: Accepted for parity with the option surface. PNG is
            lossless, so it does not change the output.
        compression_level: zlib level 0-9 passed to Pillow's PNG writer.
    """
    img = rasterize(svg_bytes, size)
    if background[3]:
        img = composite_on_background(img, background)

    buf = io.BytesIO()
    img.save(buf, format='PNG', compress_level=compression_level)
    data = buf.getvalue()
    logger.debug("rendered %dx%d (quality=%d): %d bytes", size, size, quality, len(data))
    return data
