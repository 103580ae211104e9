"""Pydantic models for Receiptable."""

from receiptable.models.options import (
    DEFAULT_DELIMITERS,
    HexDecodeOptions,
    OddNibblePolicy,
    RasterOptions,
)
from receiptable.models.printer import PrinterEndpointConfig
from receiptable.models.render import RenderedImage, RenderOutput

__all__ = [
    "DEFAULT_DELIMITERS",
    "HexDecodeOptions",
    "OddNibblePolicy",
    "PrinterEndpointConfig",
    "RasterOptions",
    "RenderedImage",
    "RenderOutput",
]
