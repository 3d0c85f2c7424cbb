"""PDF compression by re-rendering at a smaller page box."""

from __future__ import annotations

from pathlib import Path

import structlog

from pdfdesk.schemas.common import CompressionQuality, CompressionResult, PageBox
from pdfdesk.services import html_templates as templates
from pdfdesk.services.renderer import HtmlRenderer, render_to_file

logger = structlog.get_logger(__name__)

# Target page boxes in points
QUALITY_PRESETS: dict[CompressionQuality, PageBox] = {
    CompressionQuality.HIGH: PageBox(width=612, height=792),
    CompressionQuality.MEDIUM: PageBox(width=540, height=700),
    CompressionQuality.LOW: PageBox(width=460, height=600),
}


def compress_pdf(
    pdf_path: Path | str,
    quality: CompressionQuality | str,
    dest: Path | str,
    renderer: HtmlRenderer,
) -> CompressionResult:
    """Re-render ``pdf_path`` at the page box of ``quality`` into ``dest``.

    The actual size reduction is whatever the renderer produces; the result
    only reports the byte sizes before and after.
    """
    quality = CompressionQuality(quality)
    box = QUALITY_PRESETS[quality]
    src = Path(pdf_path)

    original_size = src.stat().st_size
    html = templates.compress_html(templates.read_base64(src), box)
    out = render_to_file(renderer, html, Path(dest), width=box.width, height=box.height)
    compressed_size = out.stat().st_size

    result = CompressionResult(
        path=str(out),
        original_size=original_size,
        compressed_size=compressed_size,
    )
    logger.info(
        "pdf_compressed",
        quality=quality.value,
        original_size=original_size,
        compressed_size=compressed_size,
        saved_percent=result.saved_percent,
    )
    return result
