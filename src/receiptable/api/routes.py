"""REST API routes for Receiptable."""

import base64
import logging
import secrets
from typing import Annotated, Any, Literal

from fastapi import APIRouter, BackgroundTasks, File, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import PlainTextResponse, Response
from PIL import UnidentifiedImageError
from pydantic import BaseModel, Field

from receiptable.codecs import CodecError, MalformedInput, bytes_to_hex, decode_hex
from receiptable.config import AppConfig
from receiptable.images import (
    format_file_size,
    image_to_escpos,
    image_to_escpos_dump,
    is_valid_image_type,
    load_image,
)
from receiptable.models.options import HexDecodeOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by the app during startup
_app_state: dict[str, Any] = {}


def set_app_state(
    config: AppConfig,
    printer: Any = None,
    renderer: Any = None,
) -> None:
    """Set application state references for the routes."""
    _app_state["config"] = config
    _app_state["printer"] = printer
    _app_state["renderer"] = renderer
    _app_state["api_key"] = config.api_key


async def verify_api_key(request: Request) -> None:
    """Verify API key if configured.

    API key can be provided via:
    - X-API-Key header
    - Authorization: Bearer <key> header
    - api_key query parameter

    If no API key is configured, all requests are allowed.
    """
    configured_key = _app_state.get("api_key")

    # No API key configured = open access
    if not configured_key:
        return

    provided_key = None

    if "X-API-Key" in request.headers:
        provided_key = request.headers["X-API-Key"]
    elif "Authorization" in request.headers:
        auth = request.headers["Authorization"]
        if auth.startswith("Bearer "):
            provided_key = auth[7:]
    # Query parameter (less secure, but convenient for testing)
    elif "api_key" in request.query_params:
        provided_key = request.query_params["api_key"]

    if not provided_key or not secrets.compare_digest(provided_key, configured_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Request/response models


class HexRequest(BaseModel):
    """Hex text request body."""

    text: str
    options: HexDecodeOptions | None = None  # Falls back to the configured defaults


class DecodeResponse(BaseModel):
    """Decoded hex text."""

    hex: str
    base64: str
    length: int


class DecodeError(BaseModel):
    """Structured hex decode error."""

    message: str
    index: int
    found: str | None
    expected: str


class RenderedImageInfo(BaseModel):
    """A rendered receipt image as a BMP file."""

    width: int
    height: int
    bmp_base64: str


class RenderImagesResponse(BaseModel):
    """Images rendered from a byte stream."""

    images: list[RenderedImageInfo] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class RenderHtmlResponse(BaseModel):
    """HTML documents rendered from a byte stream."""

    documents: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class SubmitResponse(BaseModel):
    """Accepted printer request."""

    printer: str
    message: str
    length: int = 0


# Helpers


def _get_config() -> AppConfig:
    config = _app_state.get("config")
    if config is None:
        raise HTTPException(status_code=500, detail="Application not initialized")
    return config


def _decode(request: HexRequest) -> bytes:
    """Decode request text, raising a 400 with structured details on failure."""
    options = request.options or _get_config().hex_input
    try:
        return decode_hex(request.text, options)
    except MalformedInput as e:
        error = DecodeError(message=str(e), index=e.index, found=e.found, expected=e.expected)
        raise HTTPException(status_code=400, detail=error.model_dump()) from e


def _get_printer() -> Any:
    printer = _app_state.get("printer")
    if printer is None:
        raise HTTPException(status_code=503, detail="No printer configured")
    return printer


def _get_renderer() -> Any:
    renderer = _app_state.get("renderer")
    if renderer is None:
        raise HTTPException(status_code=503, detail="No renderer configured")
    return renderer


# Endpoints


@router.post("/hex/decode", response_model=DecodeResponse, responses={400: {"description": "Malformed hex text"}})
async def decode_hex_text(request: HexRequest) -> DecodeResponse:
    """Decode loosely formatted hex text into bytes."""
    data = _decode(request)
    return DecodeResponse(
        hex=bytes_to_hex(data),
        base64=base64.b64encode(data).decode("ascii"),
        length=len(data),
    )


@router.post(
    "/image/escpos",
    responses={
        200: {"description": "Raster commands as a hex dump or binary"},
        400: {"description": "Unreadable image or image outside printer limits"},
        415: {"description": "Unsupported image type"},
    },
)
async def convert_image(
    file: Annotated[UploadFile, File()],
    x_scale: Annotated[int | None, Query(ge=1, le=2)] = None,
    y_scale: Annotated[int | None, Query(ge=1, le=2)] = None,
    format: Literal["dump", "binary"] = "dump",
) -> Response:
    """Convert an uploaded image to ESC/POS raster graphics commands."""
    config = _get_config()

    if not is_valid_image_type(file.content_type):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"File name {file.filename}: Not a valid file type ({file.content_type})",
        )

    content = await file.read()
    try:
        image = load_image(content)
    except UnidentifiedImageError as e:
        raise HTTPException(status_code=400, detail=f"Cannot read image {file.filename}") from e

    x = x_scale or config.raster.x_scale
    y = y_scale or config.raster.y_scale
    logger.debug(
        f"Converting {file.filename} ({format_file_size(len(content))}, {image.width}x{image.height}) at scale {x}x{y}"
    )

    try:
        if format == "binary":
            return Response(content=image_to_escpos(image, x, y), media_type="application/octet-stream")
        return PlainTextResponse(image_to_escpos_dump(image, x, y))
    except CodecError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/render", response_model=RenderImagesResponse)
async def render_images(request: HexRequest) -> RenderImagesResponse:
    """Render hex text through the configured renderer as BMP images.

    Decode errors are reported in ``errors`` like render errors.
    """
    renderer = _get_renderer()
    options = request.options or _get_config().hex_input
    try:
        data = decode_hex(request.text, options)
    except MalformedInput as e:
        return RenderImagesResponse(errors=[f"{e}\n{e.caret_snippet()}"])

    result = renderer.render_to_image(data)
    errors = list(result.errors)
    images = []
    for image in result.output:
        try:
            bmp = image.to_bmp()
        except CodecError as e:
            errors.append(str(e))
            continue
        images.append(
            RenderedImageInfo(
                width=image.width,
                height=image.height,
                bmp_base64=base64.b64encode(bmp).decode("ascii"),
            )
        )
    return RenderImagesResponse(images=images, errors=errors)


@router.post("/render/html", response_model=RenderHtmlResponse)
async def render_html(request: HexRequest) -> RenderHtmlResponse:
    """Render hex text through the configured renderer as HTML documents."""
    renderer = _get_renderer()
    options = request.options or _get_config().hex_input
    try:
        data = decode_hex(request.text, options)
    except MalformedInput as e:
        return RenderHtmlResponse(errors=[f"{e}\n{e.caret_snippet()}"])

    result = renderer.render_to_html(data)
    return RenderHtmlResponse(documents=result.output, errors=result.errors)


@router.post("/print", response_model=SubmitResponse, status_code=status.HTTP_202_ACCEPTED)
async def print_hex(request: HexRequest, background_tasks: BackgroundTasks) -> SubmitResponse:
    """Decode hex text and send it to the printer.

    The request is accepted immediately; the outcome is only logged.
    """
    printer = _get_printer()
    data = _decode(request)
    background_tasks.add_task(printer.submit, data)
    return SubmitResponse(printer=printer.name, message="Submitted for printing", length=len(data))


@router.post("/cut", response_model=SubmitResponse, status_code=status.HTTP_202_ACCEPTED)
async def cut_paper(background_tasks: BackgroundTasks) -> SubmitResponse:
    """Ask the printer to cut the paper."""
    printer = _get_printer()
    background_tasks.add_task(printer.submit_cut)
    return SubmitResponse(printer=printer.name, message="Cut requested")
