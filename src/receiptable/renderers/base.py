"""Abstract interface for ESC/POS renderers (emulators)."""

from abc import ABC, abstractmethod

from receiptable.models.render import RenderedImage, RenderOutput


class BaseRenderer(ABC):
    """Abstract base class for ESC/POS renderers.

    A renderer interprets a raw ESC/POS byte stream. Render problems are
    reported in ``RenderOutput.errors`` rather than raised.
    """

    @abstractmethod
    def render_to_html(self, data: bytes) -> RenderOutput[str]:
        """Render a byte stream to HTML documents.

        Args:
            data: Raw ESC/POS bytes.

        Returns:
            HTML documents and human-readable render errors.
        """
        pass

    @abstractmethod
    def render_to_image(self, data: bytes) -> RenderOutput[RenderedImage]:
        """Render a byte stream to RGB images.

        Args:
            data: Raw ESC/POS bytes.

        Returns:
            Rendered images and human-readable render errors.
        """
        pass


class RendererError(Exception):
    """Exception raised when a renderer cannot be loaded or used."""

    pass
