import io
import struct

import pytest
from PIL import Image

from conftest import make_png
from favicon_generator.errors import EncodingError, FileSystemError
from favicon_generator.ico import encode_ico, read_ico_directory, write_ico


def test_header_magic_and_count():
    data = encode_ico([(16, make_png(16)), (32, make_png(32))])
    assert data[:4] == bytes([0, 0, 1, 0])
    assert struct.unpack_from('<H', data, 4)[0] == 2


def test_single_image_layout():
    png = make_png(16)
    data = encode_ico([(16, png)])

    assert len(data) == 6 + 16 + len(png)
    w, h, colors, reserved, planes, bpp, size, offset = struct.unpack_from('<BBBBHHII', data, 6)
    assert (w, h, colors, reserved, planes, bpp) == (16, 16, 0, 0, 1, 32)
    assert size == len(png)
    assert offset == 22
    assert data[22:] == png


def test_256_is_stored_as_zero():
    entries = read_ico_directory(encode_ico([(256, b'x' * 10), (255, b'y' * 5)]))
    assert (entries[0].width, entries[0].height) == (0, 0)
    assert (entries[1].width, entries[1].height) == (255, 255)


def test_offsets_are_running_sum():
    # Payload content is not inspected, so arbitrary bytes work here
    payloads = [b'a' * 7, b'bb' * 50, b'c', b'd' * 1000]
    images = list(zip([16, 32, 48, 64], payloads))
    data = encode_ico(images)

    entries = read_ico_directory(data)
    start = 6 + 16 * len(images)
    for k, entry in enumerate(entries):
        assert entry.offset == start + sum(len(p) for p in payloads[:k])
        assert entry.size == len(payloads[k])
        assert data[entry.offset:entry.offset + entry.size] == payloads[k]

    assert len(data) == start + sum(len(p) for p in payloads)


def test_entries_keep_input_order():
    sizes = [48, 16, 256, 32]
    entries = read_ico_directory(encode_ico([(s, make_png(min(s, 64))) for s in sizes]))
    assert [e.width for e in entries] == [48, 16, 0, 32]
    assert all(e.planes == 1 and e.bit_count == 32 for e in entries)


def test_pillow_reads_generated_ico():
    data = encode_ico([(16, make_png(16)), (32, make_png(32))])
    im = Image.open(io.BytesIO(data))
    assert im.format == 'ICO'
    assert set(im.info['sizes']) == {(16, 16), (32, 32)}


def test_accepts_bytearray_payload():
    data = encode_ico([(16, bytearray(b'abc'))])
    assert data.endswith(b'abc')


@pytest.mark.parametrize('images', [
    [],
    [(0, b'x')],
    [(257, b'x')],
    [(-16, b'x')],
    [(True, b'x')],
    [(16.0, b'x')],
    [(16, 'not bytes')],
])
def test_rejects_bad_input(images):
    with pytest.raises(EncodingError):
        encode_ico(images)


def test_read_directory_rejects_garbage():
    with pytest.raises(EncodingError):
        read_ico_directory(b'\x00\x00')
    with pytest.raises(EncodingError):
        read_ico_directory(b'\x00\x00\x02\x00\x01\x00' + b'\x00' * 16)
    with pytest.raises(EncodingError):
        # claims 3 entries, carries one
        read_ico_directory(b'\x00\x00\x01\x00\x03\x00' + b'\x00' * 16)


def test_write_ico(tmp_path):
    path = tmp_path / 'favicon.ico'
    data = write_ico(path, [(16, make_png(16))])
    assert path.read_bytes() == data


def test_write_ico_missing_directory(tmp_path):
    with pytest.raises(FileSystemError):
        write_ico(tmp_path / 'nope' / 'favicon.ico', [(16, make_png(16))])
