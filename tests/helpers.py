"""Shared builders for test images and pixel buffers."""

import io

from PIL import Image


def rgba_from_reds(reds: list[int], green: int = 255, blue: int = 255, alpha: int = 255) -> bytes:
    """Build an RGBA buffer where only the red sample varies per pixel."""
    return bytes(v for red in reds for v in (red, green, blue, alpha))


def png_bytes(image: Image.Image) -> bytes:
    """Encode a PIL image as PNG file bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
