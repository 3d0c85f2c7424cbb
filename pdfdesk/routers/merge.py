"""Router: POST /v1/merge — merge picked PDFs in the given order."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from pdfdesk.config import Settings
from pdfdesk.dependencies import get_library, get_renderer, get_settings
from pdfdesk.errors import NotEnoughDocumentsError, RenderError
from pdfdesk.routers.uploads import require_pdf
from pdfdesk.schemas.common import OutputKind
from pdfdesk.schemas.transforms import OutputFile, TransformResponse
from pdfdesk.services.pdf_builder import merge_pdfs
from pdfdesk.services.renderer import HtmlRenderer
from pdfdesk.storage.local import LibraryDirectory, cached_uploads

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["merge"])


@router.post("/merge", response_model=TransformResponse)
def merge_documents(
    files: list[UploadFile] = File(..., description="PDFs to merge, in order"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Merge at least two PDFs into ``merged_<ts>.pdf``."""
    for f in files:
        require_pdf(f)
    if len(files) < 2:
        raise NotEnoughDocumentsError("Please add at least 2 PDF files to merge.")

    dest = library.output_path(OutputKind.MERGED)
    try:
        with cached_uploads(cfg.cache_dir, files) as paths:
            out = merge_pdfs(paths, dest, renderer)
    except (RenderError, OSError) as exc:
        logger.error("merge_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to merge PDFs.")

    output = OutputFile.from_path(out)
    return TransformResponse(message=f"Merged PDF saved as {output.name}", file=output)
