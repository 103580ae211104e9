"""Receipt printer reached through an HTTP print service."""

import base64
import json
import logging
from typing import Any

import aiohttp

from receiptable.models.printer import PrinterEndpointConfig
from receiptable.printers.base import BasePrinter, PrinterError

logger = logging.getLogger(__name__)


class HTTPPrinter(BasePrinter):
    """Printer behind a JSON print service.

    Print requests are POSTed as ``{"buffer": <base64 of the bytes>}``;
    cuts are an empty POST to a separate URL.
    """

    def __init__(self, config: PrinterEndpointConfig) -> None:
        super().__init__(config)
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> None:
        """Open the HTTP session."""
        if self._connected:
            return

        headers = {}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        self._session = aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
        )
        self._connected = True

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

        self._connected = False

    async def print_raw(self, data: bytes) -> Any:
        """Send raw ESC/POS bytes to the print service."""
        payload = {"buffer": base64.b64encode(data).decode("ascii")}
        return await self._post(self.config.print_url, payload)

    async def cut(self) -> Any:
        """Ask the print service to cut the paper."""
        return await self._post(self.config.cut_url)

    async def _post(self, url: str, payload: dict[str, Any] | None = None) -> Any:
        """POST to the service and return the decoded response body."""
        if not self._session:
            raise ConnectionError("Printer not connected")

        logger.debug(f"POST {url}")
        try:
            async with self._session.post(url, json=payload) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise PrinterError(f"Response status: {resp.status} - {text}")
        except aiohttp.ClientError as e:
            raise ConnectionError(f"Failed to reach {url}: {e}") from e
        except TimeoutError as e:
            raise ConnectionError(f"Timeout posting to {url}") from e

        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
