"""FastAPI application factory for Receiptable."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from receiptable import __version__
from receiptable.api import routes as api_routes
from receiptable.config import load_config, settings
from receiptable.printers import BasePrinter, create_printer
from receiptable.renderers import BaseRenderer, RendererError, load_renderer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Loading configuration from {settings.config_file}")
    config = load_config(settings.config_file)

    printer: BasePrinter = create_printer(config.printer)
    logger.info(f"Initialized printer: {printer.name} ({config.printer.print_url})")

    renderer: BaseRenderer | None = None
    if config.renderer:
        try:
            renderer = load_renderer(config.renderer)
        except RendererError as e:
            logger.error(f"Failed to load renderer: {e}")
    else:
        logger.info("No renderer configured, render endpoints are disabled")

    api_routes.set_app_state(config, printer=printer, renderer=renderer)
    logger.info("Receiptable startup complete")

    yield

    logger.info("Receiptable shutting down")
    try:
        await printer.disconnect()
    except Exception as e:
        logger.error(f"Error disconnecting printer {printer.name}: {e}")

    logger.info("Receiptable shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Receiptable",
        description="ESC/POS hex, raster image and BMP conversion with receipt printing",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(
        api_routes.router,
        dependencies=[Depends(api_routes.verify_api_key)],
    )

    return app


# Default app instance for uvicorn
app = create_app()
