"""Receiptable: ESC/POS hex, raster and BMP codecs with a small print service."""

__version__ = "0.1.0"
