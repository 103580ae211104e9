"""Printer implementations for Receiptable."""

from receiptable.models.printer import PrinterEndpointConfig
from receiptable.printers.base import BasePrinter, PrinterError
from receiptable.printers.http import HTTPPrinter

__all__ = [
    "BasePrinter",
    "HTTPPrinter",
    "PrinterError",
    "create_printer",
]


def create_printer(config: PrinterEndpointConfig) -> BasePrinter:
    """Factory function to create a printer instance from config."""
    return HTTPPrinter(config)
