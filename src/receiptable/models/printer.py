"""Printer endpoint configuration models."""

from pydantic import BaseModel

DEFAULT_PRINT_URL = "http://receipt.local:8000/receipt/escpos"
DEFAULT_CUT_URL = "http://receipt.local:8000/receipt/cut"


class PrinterEndpointConfig(BaseModel):
    """HTTP receipt printer service configuration.

    The service accepts ``{"buffer": <base64>}`` on the print URL and an
    empty POST on the cut URL.
    """

    name: str = "receipt"
    print_url: str = DEFAULT_PRINT_URL
    cut_url: str = DEFAULT_CUT_URL
    token: str | None = None  # Sent as a Bearer token when set
    timeout_seconds: float = 10.0
