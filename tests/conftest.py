"""Pytest configuration and fixtures."""

import pytest
from PIL import Image

from tests.helpers import png_bytes


@pytest.fixture
def first_pixel_black_png() -> bytes:
    """An 8x1 white PNG with a black first pixel."""
    image = Image.new("RGB", (8, 1), color="white")
    image.putpixel((0, 0), (0, 0, 0))
    return png_bytes(image)
