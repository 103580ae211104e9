"""Tests for monochrome bitmap packing and ESC/POS raster framing."""

import random

import pytest

from receiptable.codecs import (
    PRINT_STORED_GRAPHICS,
    InvalidDimensions,
    ParameterOutOfRange,
    decode_hex,
    encode_raster_image,
    frame_raster_command,
    pack_bitmap,
    raster_command_dump,
)

from tests.helpers import rgba_from_reds


def unpack_bitmap(bitmap: bytes, width: int, height: int) -> list[list[bool]]:
    """Inverse of pack_bitmap: True for black pixels."""
    row_bytes = (width + 7) // 8
    return [[bool(bitmap[y * row_bytes + x // 8] & (0x80 >> (x % 8))) for x in range(width)] for y in range(height)]


class TestPackBitmap:
    """Tests for pack_bitmap."""

    @pytest.mark.parametrize("width", [1, 7, 8, 9, 15, 16, 17, 33])
    def test_row_length(self, width: int):
        """Each scanline packs to ceil(width / 8) bytes."""
        height = 3
        bitmap = pack_bitmap(rgba_from_reds([0] * width * height), width, height)
        assert len(bitmap) == ((width + 7) // 8) * height

    def test_threshold(self):
        """Red below 127 is black, 127 and above is white."""
        bitmap = pack_bitmap(rgba_from_reds([0, 126, 127, 128, 255, 50, 200, 100]), 8, 1)
        assert bitmap == bytes([0b11000101])

    def test_other_channels_ignored(self):
        """Green, blue and alpha do not affect the result."""
        dark_red_bright_rest = bytes([0, 255, 255, 0] * 8)
        bright_red_dark_rest = bytes([255, 0, 0, 255] * 8)
        assert pack_bitmap(dark_red_bright_rest, 8, 1) == b"\xff"
        assert pack_bitmap(bright_red_dark_rest, 8, 1) == b"\x00"

    def test_msb_first(self):
        """The leftmost pixel is the most significant bit."""
        assert pack_bitmap(rgba_from_reds([0] + [255] * 7), 8, 1) == b"\x80"
        assert pack_bitmap(rgba_from_reds([255] * 7 + [0]), 8, 1) == b"\x01"

    def test_padding_is_white(self):
        """Padding bits are zero even next to black pixels."""
        bitmap = pack_bitmap(rgba_from_reds([0] * 20), 10, 2)
        assert bitmap == bytes([0xFF, 0xC0, 0xFF, 0xC0])

    def test_short_row(self):
        """A 3 pixel row packs into the top bits of one byte."""
        assert pack_bitmap(rgba_from_reds([0, 255, 0]), 3, 1) == bytes([0b10100000])

    def test_rows_are_independent(self):
        """Each row starts on a fresh byte."""
        reds = [255] * 9 + [0] + [255] * 8
        assert pack_bitmap(rgba_from_reds(reds), 9, 2) == bytes([0x00, 0x00, 0x80, 0x00])

    def test_matches_threshold_classification(self):
        """Unpacking reproduces the red < 127 classification."""
        rng = random.Random(1234)
        width, height = 21, 7
        reds = [rng.randrange(256) for _ in range(width * height)]
        pixels = bytes(v for red in reds for v in (red, rng.randrange(256), rng.randrange(256), rng.randrange(256)))

        unpacked = unpack_bitmap(pack_bitmap(pixels, width, height), width, height)

        expected = [[reds[y * width + x] < 127 for x in range(width)] for y in range(height)]
        assert unpacked == expected

    def test_accepts_int_sequences(self):
        """Lists of ints work as well as bytes."""
        assert pack_bitmap([0, 0, 0, 255] * 8, 8, 1) == b"\xff"

    def test_length_mismatch(self):
        """A buffer that does not match the dimensions is rejected."""
        with pytest.raises(InvalidDimensions) as exc_info:
            pack_bitmap(rgba_from_reds([0] * 7), 8, 1)
        assert exc_info.value.length == 28
        assert exc_info.value.channels == 4

    def test_negative_dimensions(self):
        """Negative dimensions are rejected."""
        with pytest.raises(InvalidDimensions):
            pack_bitmap(b"", -1, 0)


class TestFrameRasterCommand:
    """Tests for frame_raster_command."""

    def test_single_byte_image(self):
        """An 8x1 image frames to the exact store and print commands."""
        command = frame_raster_command(b"\xff", 8, 1)
        assert command == bytes(
            [0x1D, 0x28, 0x4C, 0x0B, 0x00, 0x30, 0x70, 0x30, 0x01, 0x01, 0x31, 0x08, 0x00, 0x01, 0x00, 0xFF]
            + [0x1D, 0x28, 0x4C, 0x02, 0x00, 0x30, 0x32]
        )

    def test_little_endian_fields(self):
        """Length, width and height are split little-endian."""
        width, height = 300, 2
        bitmap = bytes(38 * height)
        command = frame_raster_command(bitmap, width, height)
        p = 10 + len(bitmap)
        assert command[3:5] == bytes([p & 0xFF, p >> 8])
        assert command[11:13] == bytes([0x2C, 0x01])
        assert command[13:15] == bytes([0x02, 0x00])

    def test_payload_and_trailer(self):
        """The bitmap follows the header and the print command ends the output."""
        bitmap = bytes(range(16))
        command = frame_raster_command(bitmap, 16, 8)
        assert command[15:-7] == bitmap
        assert command[-7:] == PRINT_STORED_GRAPHICS

    def test_scales(self):
        """Scale factors are written as bx and by."""
        command = frame_raster_command(b"\x00", 8, 1, x_scale=2, y_scale=1)
        assert command[8:10] == bytes([2, 1])
        command = frame_raster_command(b"\x00", 8, 1, x_scale=1, y_scale=2)
        assert command[8:10] == bytes([1, 2])

    @pytest.mark.parametrize("width", [0, 2048, -5])
    def test_width_out_of_range(self, width: int):
        """Width must be 1-2047."""
        with pytest.raises(ParameterOutOfRange) as exc_info:
            frame_raster_command(b"\x00", width, 1)
        assert exc_info.value.name == "width"

    def test_max_width(self):
        """Width 2047 is accepted."""
        assert frame_raster_command(bytes(256), 2047, 1)

    def test_height_limit_single_scale(self):
        """Height may be 1662 at y_scale 1 but not 1663."""
        assert frame_raster_command(bytes(1662), 8, 1662)
        with pytest.raises(ParameterOutOfRange) as exc_info:
            frame_raster_command(bytes(1663), 8, 1663)
        assert exc_info.value.name == "height"
        assert exc_info.value.maximum == 1662

    def test_height_limit_double_scale(self):
        """Height may be 831 at y_scale 2 but not 832."""
        assert frame_raster_command(bytes(831), 8, 831, y_scale=2)
        with pytest.raises(ParameterOutOfRange) as exc_info:
            frame_raster_command(bytes(832), 8, 832, y_scale=2)
        assert exc_info.value.maximum == 831

    def test_zero_height(self):
        """Height must be at least 1."""
        with pytest.raises(ParameterOutOfRange):
            frame_raster_command(b"\x00", 8, 0)

    @pytest.mark.parametrize(("x_scale", "y_scale"), [(0, 1), (3, 1), (1, 0), (1, 3)])
    def test_scale_out_of_range(self, x_scale: int, y_scale: int):
        """Scales must be 1 or 2."""
        with pytest.raises(ParameterOutOfRange):
            frame_raster_command(b"\x00", 8, 1, x_scale=x_scale, y_scale=y_scale)

    def test_empty_bitmap(self):
        """An empty payload gives p=10, below the minimum."""
        with pytest.raises(ParameterOutOfRange) as exc_info:
            frame_raster_command(b"", 8, 1)
        assert exc_info.value.name == "p"
        assert exc_info.value.value == 10

    def test_frame_length_limit(self):
        """p may be 65535 but not 65536."""
        command = frame_raster_command(bytes(65525), 8, 1)
        assert command[3:5] == b"\xff\xff"
        with pytest.raises(ParameterOutOfRange) as exc_info:
            frame_raster_command(bytes(65526), 8, 1)
        assert exc_info.value.name == "p"


class TestEncodeRasterImage:
    """Tests for the pack-and-frame helper."""

    def test_matches_manual_pipeline(self):
        """encode_raster_image is pack_bitmap then frame_raster_command."""
        pixels = rgba_from_reds([0, 255] * 10)
        expected = frame_raster_command(pack_bitmap(pixels, 10, 2), 10, 2, 2, 2)
        assert encode_raster_image(pixels, 10, 2, 2, 2) == expected


class TestRasterCommandDump:
    """Tests for the printable hex dump."""

    def test_three_lines(self):
        """The dump has header, payload and print lines."""
        dump = raster_command_dump(b"\xff", 8, 1)
        assert dump.split("\n") == [
            "1d 28 4c 0b 00 30 70 30 01 01 31 08 00 01 00",
            "ff",
            "1d 28 4c 02 00 30 32",
        ]

    def test_decodes_back_to_command(self):
        """Decoding the dump gives exactly the framed command."""
        bitmap = bytes(range(40))
        dump = raster_command_dump(bitmap, 20, 10, x_scale=2, y_scale=2)
        assert decode_hex(dump) == frame_raster_command(bitmap, 20, 10, x_scale=2, y_scale=2)

    def test_validates_parameters(self):
        """The dump applies the same bounds as the binary command."""
        with pytest.raises(ParameterOutOfRange):
            raster_command_dump(b"\x00", 2048, 1)
