"""ESC/POS renderer interface and loader."""

import importlib
import logging

from receiptable.renderers.base import BaseRenderer, RendererError

__all__ = [
    "BaseRenderer",
    "RendererError",
    "load_renderer",
]

logger = logging.getLogger(__name__)


def load_renderer(path: str) -> BaseRenderer:
    """Import and instantiate a renderer from a "module:ClassName" path.

    Raises:
        RendererError: If the path is malformed, cannot be imported, or does
            not name a BaseRenderer subclass.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise RendererError(f"Renderer path must look like 'module:ClassName', got '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise RendererError(f"Cannot import renderer module '{module_name}': {e}") from e

    renderer_class = getattr(module, attr, None)
    if not isinstance(renderer_class, type) or not issubclass(renderer_class, BaseRenderer):
        raise RendererError(f"'{path}' is not a BaseRenderer subclass")

    logger.info(f"Loaded renderer {path}")
    return renderer_class()
