"""Pillow adapters between image files and the raster and BMP codecs."""

import io

from PIL import Image

from receiptable.codecs.bmp import encode_bmp
from receiptable.codecs.raster import encode_raster_image, pack_bitmap, raster_command_dump

# https://developer.mozilla.org/en-US/docs/Web/Media/Guides/Formats/Image_types
ACCEPTED_IMAGE_TYPES = frozenset(
    {
        "image/apng",
        "image/bmp",
        "image/gif",
        "image/jpeg",
        "image/pjpeg",
        "image/png",
        "image/svg+xml",
        "image/tiff",
        "image/webp",
        "image/x-icon",
    }
)


def is_valid_image_type(content_type: str | None) -> bool:
    """Check if an upload's content type is an accepted image type."""
    if not content_type:
        return False
    return content_type.split(";")[0].strip().lower() in ACCEPTED_IMAGE_TYPES


def format_file_size(size: int) -> str:
    """Format a byte count for display (decimal units)."""
    if size < 1e3:
        return f"{size} bytes"
    if size < 1e6:
        return f"{size / 1e3:.1f} KB"
    return f"{size / 1e6:.1f} MB"


def image_to_rgba(image: Image.Image) -> tuple[bytes, int, int]:
    """Get raw RGBA samples from an image.

    Returns:
        Tuple of (pixels, width, height).
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    width, height = image.size
    return image.tobytes(), width, height


def image_to_escpos(image: Image.Image, x_scale: int = 1, y_scale: int = 1) -> bytes:
    """Convert an image to ESC/POS raster graphics commands."""
    pixels, width, height = image_to_rgba(image)
    return encode_raster_image(pixels, width, height, x_scale, y_scale)


def image_to_escpos_dump(image: Image.Image, x_scale: int = 1, y_scale: int = 1) -> str:
    """Convert an image to a printable hex dump of its raster commands."""
    pixels, width, height = image_to_rgba(image)
    bitmap = pack_bitmap(pixels, width, height)
    return raster_command_dump(bitmap, width, height, x_scale, y_scale)


def image_to_bmp(image: Image.Image) -> bytes:
    """Encode an image as a 24-bit BMP (alpha is dropped)."""
    if image.mode != "RGB":
        image = image.convert("RGB")
    width, height = image.size
    return encode_bmp(image.tobytes(), width, height)


def load_image(data: bytes) -> Image.Image:
    """Open image file bytes with Pillow.

    Raises:
        PIL.UnidentifiedImageError: If the data is not a readable image.
    """
    image = Image.open(io.BytesIO(data))
    image.load()
    return image
