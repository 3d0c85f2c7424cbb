"""Router: POST /v1/split, /v1/extract — split a PDF by ranges or extract pages."""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from pdfdesk.config import Settings
from pdfdesk.dependencies import get_library, get_renderer, get_settings
from pdfdesk.errors import RenderError
from pdfdesk.routers.uploads import require_pdf
from pdfdesk.schemas.common import OutputKind
from pdfdesk.schemas.transforms import (
    ExtractResponse,
    OutputFile,
    PageCountResponse,
    SplitResponse,
)
from pdfdesk.services.page_count import estimate_page_count
from pdfdesk.services.pdf_splitter import (
    extract_pages,
    parse_page_ranges_or_raise,
    select_pages,
    split_by_ranges,
)
from pdfdesk.services.renderer import HtmlRenderer
from pdfdesk.storage.local import LibraryDirectory, cached_uploads

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["split"])


@router.post("/page-count", response_model=PageCountResponse)
def estimate_pages(
    file: UploadFile = File(..., description="PDF to split"),
    cfg: Settings = Depends(get_settings),
):
    """Starting page count for the split screen; the user may adjust it."""
    require_pdf(file)
    with cached_uploads(cfg.cache_dir, [file]) as (path,):
        count = estimate_page_count(path, cfg)

    return PageCountResponse(
        filename=file.filename,
        page_count=count,
        detected=cfg.detect_page_count,
    )


@router.post("/split", response_model=SplitResponse)
def split_document(
    file: UploadFile = File(..., description="PDF to split"),
    ranges: str = Form(..., description="Comma-separated ranges, e.g. '1-3, 5'"),
    page_count: Optional[int] = Form(None, ge=1, description="Known page count"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Write one ``split_<i>_<ts>.pdf`` per valid range.

    Invalid tokens are dropped silently; if none survive, nothing is written.
    """
    require_pdf(file)
    count = page_count or cfg.default_page_count
    parsed = parse_page_ranges_or_raise(ranges, count)

    try:
        with cached_uploads(cfg.cache_dir, [file]) as (path,):
            outputs = split_by_ranges(path, parsed, library, renderer)
    except (RenderError, OSError) as exc:
        logger.error("split_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to split PDF.")

    files = [OutputFile.from_path(p) for p in outputs]
    return SplitResponse(
        message=f"Created {len(files)} split PDF file(s).",
        ranges=parsed,
        files=files,
        total=len(files),
    )


@router.post("/extract", response_model=ExtractResponse)
def extract_document_pages(
    file: UploadFile = File(..., description="PDF to extract pages from"),
    pages: Optional[list[int]] = Form(None, description="Selected 1-based pages"),
    page_count: Optional[int] = Form(None, ge=1, description="Known page count"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    cfg: Settings = Depends(get_settings),
):
    """Write the selected pages, in ascending order, to ``extracted_<ts>.pdf``."""
    require_pdf(file)
    count = page_count or cfg.default_page_count

    dest = library.output_path(OutputKind.EXTRACTED)
    try:
        with cached_uploads(cfg.cache_dir, [file]) as (path,):
            out = extract_pages(path, pages or [], dest, renderer, page_count=count)
    except (RenderError, OSError) as exc:
        logger.error("extract_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to split PDF.")

    output = OutputFile.from_path(out)
    selected = select_pages(pages or [], count)
    return ExtractResponse(
        message=f"Extracted {len(selected)} page(s) to {output.name}.",
        file=output,
        pages=selected,
    )
