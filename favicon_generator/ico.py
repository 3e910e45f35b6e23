"""
Pack PNG images into a multi-size ICO container.

Every entry is stored as a complete PNG (Vista+ style), which is what
browsers expect for favicon.ico.

Layout (little-endian):
  ICONDIR       6 bytes   reserved=0, type=1, count
  ICONDIRENTRY  16 bytes  per image, same order as the input
  image data    PNG bytes back to back, no padding
"""

import logging
import struct
from collections import namedtuple

from .errors import EncodingError
from .utils import write_bytes

logger = logging.getLogger(__name__)

HEADER_FORMAT = '<HHH'
ENTRY_FORMAT = '<BBBBHHII'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 6
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)  # 16

ICO_TYPE = 1
MAX_ICO_SIZE = 256

IcoDirectoryEntry = namedtuple(
    'IcoDirectoryEntry',
    ['width', 'height', 'color_count', 'reserved', 'planes', 'bit_count', 'size', 'offset'],
)


def _dimension_byte(size: int) -> int:
    # A single byte can't hold 256, the format stores it as 0
    return size if size < MAX_ICO_SIZE else 0


def encode_ico(images) -> bytes:
    """Build an ICO file from a list of (pixel_size, png_bytes) pairs.

    The PNG payloads are copied verbatim; their content is not inspected.
    Raises EncodingError for an empty list or a size outside 1..256.
    """
    images = list(images)
    if not images:
        raise EncodingError("ICO needs at least one image")

    for size, png_bytes in images:
        if isinstance(size, bool) or not isinstance(size, int):
            raise EncodingError(f"ICO image size must be an integer, got {size!r}")
        if not 1 <= size <= MAX_ICO_SIZE:
            raise EncodingError(f"ICO image size must be between 1 and {MAX_ICO_SIZE}, got {size}")
        if not isinstance(png_bytes, (bytes, bytearray, memoryview)):
            raise EncodingError(f"ICO image data for {size}x{size} must be bytes")

    count = len(images)
    ico_header = struct.pack(HEADER_FORMAT, 0, ICO_TYPE, count)

    # Image data starts right after the directory table
    data_offset = HEADER_SIZE + ENTRY_SIZE * count

    entries = []
    for size, png_bytes in images:
        w = h = _dimension_byte(size)
        # ICONDIRENTRY: width, height, colors=0, reserved=0, planes=1, bpp=32, size, offset
        entries.append(struct.pack(ENTRY_FORMAT, w, h, 0, 0, 1, 32, len(png_bytes), data_offset))
        logger.debug("ico entry %dx%d: %d bytes at offset %d", size, size, len(png_bytes), data_offset)
        data_offset += len(png_bytes)

    return b''.join([ico_header, *entries, *(bytes(png) for _, png in images)])


def write_ico(path, images) -> bytes:
    """Encode images and write the ICO to path. Returns the encoded bytes."""
    data = encode_ico(images)
    write_bytes(path, data)
    return data


def read_ico_directory(data: bytes):
    """Parse the header and directory table of an ICO buffer.

    Returns a list of IcoDirectoryEntry in file order. Width and height are
    the raw bytes, so a 256px entry reads back as 0.
    """
    if len(data) < HEADER_SIZE:
        raise EncodingError("Buffer too short for an ICO header")

    reserved, ico_type, count = struct.unpack_from(HEADER_FORMAT, data, 0)
    if reserved != 0 or ico_type != ICO_TYPE:
        raise EncodingError("Not an ICO file")

    table_end = HEADER_SIZE + ENTRY_SIZE * count
    if len(data) < table_end:
        raise EncodingError(f"ICO directory truncated: expected {count} entries")

    return [
        IcoDirectoryEntry(*struct.unpack_from(ENTRY_FORMAT, data, HEADER_SIZE + i * ENTRY_SIZE))
        for i in range(count)
    ]
