"""Hex, ESC/POS raster and BMP codecs."""

from receiptable.codecs.bmp import BMP_MIME_TYPE, encode_bmp
from receiptable.codecs.errors import CodecError, InvalidDimensions, MalformedInput, ParameterOutOfRange
from receiptable.codecs.hex import bytes_to_hex, decode_hex
from receiptable.codecs.raster import (
    PRINT_STORED_GRAPHICS,
    encode_raster_image,
    frame_raster_command,
    pack_bitmap,
    raster_command_dump,
)

__all__ = [
    "BMP_MIME_TYPE",
    "PRINT_STORED_GRAPHICS",
    "CodecError",
    "InvalidDimensions",
    "MalformedInput",
    "ParameterOutOfRange",
    "bytes_to_hex",
    "decode_hex",
    "encode_bmp",
    "encode_raster_image",
    "frame_raster_command",
    "pack_bitmap",
    "raster_command_dump",
]
