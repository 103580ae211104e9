"""Uncompressed 24-bit BMP encoder."""

import struct
from collections.abc import Sequence

from receiptable.codecs.errors import InvalidDimensions

BMP_MIME_TYPE = "image/bmp"

FILE_HEADER = struct.Struct("<2sIHHI")  # BITMAPFILEHEADER, 14 bytes
INFO_HEADER = struct.Struct("<IiiHHIIiiII")  # BITMAPINFOHEADER, 40 bytes
PIXEL_OFFSET = FILE_HEADER.size + INFO_HEADER.size

BI_RGB = 0
PELS_PER_METER = 2835  # ~72 DPI


def padded_row_size(width: int) -> int:
    """Bytes per stored row: 3 bytes per pixel rounded up to a multiple of 4."""
    return (width * 3 + 3) & ~3


def encode_bmp(rgb: Sequence[int], width: int, height: int) -> bytes:
    """Build a 24-bit uncompressed BMP file from RGB samples.

    Rows are stored bottom-up (positive height), pixels in BGR order, and
    each row is zero padded to a multiple of 4 bytes.

    Args:
        rgb: Row-major samples in R, G, B order, length width*height*3.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The complete BMP file.

    Raises:
        InvalidDimensions: If the buffer length does not match the dimensions.
    """
    if width < 0 or height < 0 or len(rgb) != width * height * 3:
        raise InvalidDimensions(len(rgb), width, height, 3)

    data = bytes(rgb)
    stride = width * 3
    row_size = padded_row_size(width)
    image_size = row_size * height
    file_size = PIXEL_OFFSET + image_size

    out = bytearray(file_size)
    FILE_HEADER.pack_into(out, 0, b"BM", file_size, 0, 0, PIXEL_OFFSET)
    INFO_HEADER.pack_into(
        out,
        FILE_HEADER.size,
        INFO_HEADER.size,
        width,
        height,
        1,  # planes
        24,  # bits per pixel
        BI_RGB,
        image_size,
        PELS_PER_METER,
        PELS_PER_METER,
        0,  # colours used
        0,  # important colours
    )

    dst = PIXEL_OFFSET
    for y in range(height - 1, -1, -1):
        row = data[y * stride : (y + 1) * stride]
        out[dst : dst + stride : 3] = row[2::3]
        out[dst + 1 : dst + stride : 3] = row[1::3]
        out[dst + 2 : dst + stride : 3] = row[0::3]
        dst += row_size

    return bytes(out)
