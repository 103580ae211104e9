"""Monochrome bitmap packing and ESC/POS raster graphics framing.

Images are sent with two GS ( L functions:

    fn 112  store the graphics data in the print buffer (raster format)
            https://download4.epson.biz/sec_pubs/pos/reference_en/escpos/gs_lparen_cl_fn112.html
    fn 50   print the graphics data stored in the print buffer
            https://download4.epson.biz/sec_pubs/pos/reference_en/escpos/gs_lparen_cl_fn50.html
"""

import struct
from collections.abc import Sequence

from receiptable.codecs.errors import InvalidDimensions, ParameterOutOfRange
from receiptable.codecs.hex import bytes_to_hex

# Red samples below this are printed (black)
BLACK_THRESHOLD = 127

MAX_WIDTH = 2047
MAX_HEIGHT = {1: 1662, 2: 831}  # keyed by y_scale
MIN_FRAME_LENGTH = 11
MAX_FRAME_LENGTH = 65535

# GS ( L pL pH m fn a bx by c xL xH yL yH
_STORE_HEADER = struct.Struct("<3BH6B2H")
_GS_PAREN_L = (0x1D, 0x28, 0x4C)
_TONE_MONOCHROME = 0x30  # a
_COLOR_1 = 0x31  # c

PRINT_STORED_GRAPHICS = bytes([0x1D, 0x28, 0x4C, 0x02, 0x00, 0x30, 0x32])


def pack_bitmap(pixels: Sequence[int], width: int, height: int) -> bytes:
    """Pack RGBA pixels into a 1-bit-per-pixel bitmap.

    A pixel is black (bit set) when its red sample is below 127; green,
    blue and alpha are ignored. Bits are packed MSB first and every
    scanline is padded with white (0) bits to a whole number of bytes.

    Args:
        pixels: Row-major RGBA samples, length width*height*4.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Packed bitmap, ceil(width / 8) bytes per scanline.

    Raises:
        InvalidDimensions: If the buffer length does not match the dimensions.
    """
    if width < 0 or height < 0 or len(pixels) != width * height * 4:
        raise InvalidDimensions(len(pixels), width, height, 4)

    bytes_per_row = (width + 7) // 8
    bitmap = bytearray(bytes_per_row * height)

    for y in range(height):
        src = y * width * 4
        dst = y * bytes_per_row
        for x in range(width):
            if pixels[src + x * 4] < BLACK_THRESHOLD:
                bitmap[dst + (x >> 3)] |= 0x80 >> (x & 7)

    return bytes(bitmap)


def _check_range(name: str, value: int, minimum: int, maximum: int) -> None:
    if not minimum <= value <= maximum:
        raise ParameterOutOfRange(name, value, minimum, maximum)


def _store_graphics_header(bitmap: bytes, width: int, height: int, x_scale: int, y_scale: int) -> bytes:
    """Validate the parameters and build the fn 112 header."""
    _check_range("x_scale", x_scale, 1, 2)
    _check_range("y_scale", y_scale, 1, 2)
    _check_range("width", width, 1, MAX_WIDTH)
    _check_range("height", height, 1, MAX_HEIGHT[y_scale])

    p = 10 + len(bitmap)
    _check_range("p", p, MIN_FRAME_LENGTH, MAX_FRAME_LENGTH)

    return _STORE_HEADER.pack(
        *_GS_PAREN_L,
        p,
        0x30,  # m
        0x70,  # fn 112
        _TONE_MONOCHROME,
        x_scale,
        y_scale,
        _COLOR_1,
        width,
        height,
    )


def frame_raster_command(
    bitmap: bytes,
    width: int,
    height: int,
    x_scale: int = 1,
    y_scale: int = 1,
) -> bytes:
    """Wrap a packed bitmap in ESC/POS store and print graphics commands.

    Args:
        bitmap: Packed 1-bpp bitmap (see pack_bitmap).
        width: Image width in dots, 1-2047.
        height: Image height in dots, 1-1662 (1-831 when y_scale is 2).
        x_scale: Horizontal scale, 1 or 2.
        y_scale: Vertical scale, 1 or 2.

    Returns:
        The fn 112 frame with the bitmap payload followed by the fn 50 frame.

    Raises:
        ParameterOutOfRange: If any parameter is outside the protocol bounds.
    """
    bitmap = bytes(bitmap)
    header = _store_graphics_header(bitmap, width, height, x_scale, y_scale)
    return header + bitmap + PRINT_STORED_GRAPHICS


def encode_raster_image(
    pixels: Sequence[int],
    width: int,
    height: int,
    x_scale: int = 1,
    y_scale: int = 1,
) -> bytes:
    """Pack RGBA pixels and frame them as ESC/POS raster graphics."""
    bitmap = pack_bitmap(pixels, width, height)
    return frame_raster_command(bitmap, width, height, x_scale, y_scale)


def raster_command_dump(
    bitmap: bytes,
    width: int,
    height: int,
    x_scale: int = 1,
    y_scale: int = 1,
) -> str:
    """Format the raster command as three lines of space separated hex.

    Lines are the fn 112 header, the bitmap payload and the fn 50 command.
    The dump decodes back to exactly the bytes of frame_raster_command.
    """
    bitmap = bytes(bitmap)
    header = _store_graphics_header(bitmap, width, height, x_scale, y_scale)
    return "\n".join(
        [
            bytes_to_hex(header),
            bytes_to_hex(bitmap),
            bytes_to_hex(PRINT_STORED_GRAPHICS),
        ]
    )
