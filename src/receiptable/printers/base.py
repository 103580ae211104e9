"""Abstract base class for printer implementations."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from receiptable.models.printer import PrinterEndpointConfig

logger = logging.getLogger(__name__)


class BasePrinter(ABC):
    """Abstract base class for all printer implementations."""

    def __init__(self, config: PrinterEndpointConfig) -> None:
        self.config = config
        self.name = config.name
        self._connected = False
        self._last_printed: datetime | None = None

    @property
    def is_connected(self) -> bool:
        """Check if the printer is currently connected."""
        return self._connected

    @property
    def last_printed(self) -> datetime | None:
        """Get the time of the last successful print."""
        return self._last_printed

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the printer.

        Raises:
            ConnectionError: If connection fails.
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the printer."""
        pass

    @abstractmethod
    async def print_raw(self, data: bytes) -> Any:
        """Send raw ESC/POS data to the printer.

        Args:
            data: Raw printer command bytes.

        Returns:
            The printer's response, if any.

        Raises:
            ConnectionError: If not connected or connection lost.
            PrinterError: If the printer rejects the data.
        """
        pass

    @abstractmethod
    async def cut(self) -> Any:
        """Cut the paper.

        Raises:
            ConnectionError: If not connected or connection lost.
            PrinterError: If the printer rejects the request.
        """
        pass

    async def submit(self, data: bytes) -> bool:
        """Print data, logging the outcome instead of raising.

        Returns:
            True if the printer accepted the data.
        """
        try:
            if not self._connected:
                await self.connect()
            result = await self.print_raw(data)
        except (ConnectionError, PrinterError) as e:
            logger.error(f"Printer {self.name}: print failed - {e}")
            return False

        self._last_printed = datetime.now()
        logger.info(f"Printer {self.name}: printed {len(data)} bytes - {result}")
        return True

    async def submit_cut(self) -> bool:
        """Cut the paper, logging the outcome instead of raising."""
        try:
            if not self._connected:
                await self.connect()
            result = await self.cut()
        except (ConnectionError, PrinterError) as e:
            logger.error(f"Printer {self.name}: cut failed - {e}")
            return False

        logger.info(f"Printer {self.name}: cut - {result}")
        return True

    async def __aenter__(self) -> "BasePrinter":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()


class PrinterError(Exception):
    """Exception raised for printer-related errors."""

    pass
