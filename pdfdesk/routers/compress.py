"""Router: POST /v1/compress — re-render a PDF at a smaller page box."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from pdfdesk.config import Settings
from pdfdesk.dependencies import get_library, get_renderer, get_settings
from pdfdesk.errors import RenderError
from pdfdesk.routers.uploads import require_pdf
from pdfdesk.schemas.common import CompressionQuality, OutputKind
from pdfdesk.schemas.transforms import CompressResponse, OutputFile
from pdfdesk.services.pdf_compress import compress_pdf
from pdfdesk.services.renderer import HtmlRenderer
from pdfdesk.storage.local import LibraryDirectory, cached_uploads

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["compress"])


@router.post("/compress", response_model=CompressResponse)
def compress_document(
    file: UploadFile = File(..., description="PDF to compress"),
    quality: CompressionQuality = Form(CompressionQuality.MEDIUM),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Write ``compressed_<ts>.pdf`` and report the bytes saved."""
    require_pdf(file)

    dest = library.output_path(OutputKind.COMPRESSED)
    try:
        with cached_uploads(cfg.cache_dir, [file]) as (path,):
            result = compress_pdf(path, quality, dest, renderer)
    except (RenderError, OSError) as exc:
        logger.error("compress_failed", quality=quality.value, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to compress PDF.")

    output = OutputFile.from_path(dest)
    return CompressResponse(
        message=f"Compressed PDF saved as {output.name}.\nSaved {result.saved_percent}%.",
        file=output,
        quality=quality,
        original_size=result.original_size,
        compressed_size=result.compressed_size,
        saved_percent=result.saved_percent,
    )
