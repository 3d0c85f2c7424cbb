"""Router: POST /v1/scan, /v1/convert — turn images into a PDF."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from pdfdesk.config import Settings
from pdfdesk.dependencies import get_library, get_renderer, get_settings
from pdfdesk.errors import RenderError
from pdfdesk.routers.uploads import require_image
from pdfdesk.schemas.common import OutputKind
from pdfdesk.schemas.transforms import OutputFile, TransformResponse
from pdfdesk.services.pdf_builder import images_to_pdf
from pdfdesk.services.renderer import HtmlRenderer
from pdfdesk.storage.local import LibraryDirectory, cached_uploads

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["convert"])


def _images_to_library(
    images: list[UploadFile],
    kind: OutputKind,
    library: LibraryDirectory,
    renderer: HtmlRenderer,
    cfg: Settings,
) -> OutputFile:
    for image in images:
        require_image(image)

    dest = library.output_path(kind)
    with cached_uploads(cfg.cache_dir, images) as paths:
        out = images_to_pdf(paths, dest, renderer)
    return OutputFile.from_path(out)


@router.post("/scan", response_model=TransformResponse)
def save_scan(
    pages: list[UploadFile] = File(..., description="Captured pages, in order"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Save scanned pages as ``scan_<ts>.pdf``, one page per image."""
    try:
        output = _images_to_library(pages, OutputKind.SCAN, library, renderer, cfg)
    except (RenderError, OSError) as exc:
        logger.error("scan_save_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to save PDF.")

    return TransformResponse(
        message=f"PDF saved as {output.name} ({len(pages)} pages)",
        file=output,
    )


@router.post("/convert", response_model=TransformResponse)
def convert_images(
    images: list[UploadFile] = File(..., description="Images to convert, in order"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Convert picked images into ``converted_<ts>.pdf``."""
    try:
        output = _images_to_library(images, OutputKind.CONVERTED, library, renderer, cfg)
    except (RenderError, OSError) as exc:
        logger.error("convert_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to convert images to PDF.")

    return TransformResponse(message=f"PDF saved as {output.name}", file=output)
