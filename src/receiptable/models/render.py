"""Models for output produced by an ESC/POS renderer."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from receiptable.codecs.bmp import encode_bmp

T = TypeVar("T")


class RenderedImage(BaseModel):
    """A rendered receipt as packed RGB samples."""

    width: int
    height: int
    pixels: bytes

    def to_bmp(self) -> bytes:
        """Encode the image as a 24-bit BMP file."""
        return encode_bmp(self.pixels, self.width, self.height)


class RenderOutput(BaseModel, Generic[T]):
    """Renderer result: zero or more outputs and any render errors."""

    output: list[T] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
