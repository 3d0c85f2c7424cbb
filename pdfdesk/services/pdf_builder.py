"""PDF builder — images to PDF, merging and signing via the HTML renderer."""

from __future__ import annotations

from pathlib import Path

import structlog

from pdfdesk.errors import NoImagesError, NotEnoughDocumentsError
from pdfdesk.services import html_templates as templates
from pdfdesk.services.renderer import HtmlRenderer, render_to_file

logger = structlog.get_logger(__name__)


def create_pdf_from_html(renderer: HtmlRenderer, html: str, dest: Path | str) -> Path:
    """Render an HTML document into ``dest``."""
    return render_to_file(renderer, html, Path(dest))


def images_to_pdf(
    images: list[Path | str],
    dest: Path | str,
    renderer: HtmlRenderer,
) -> Path:
    """Create a PDF with one page per image, in input order.

    Args:
        images: Paths of the source images.
        dest: Output path inside the library.
        renderer: HTML-to-PDF engine.

    Returns:
        The path of the written PDF.
    """
    if not images:
        raise NoImagesError("Please select at least one image.")

    uris = [templates.image_data_uri(p) for p in images]
    out = render_to_file(renderer, templates.images_html(uris), Path(dest))

    logger.info("images_converted", pages=len(images), path=str(out))
    return out


def merge_pdfs(
    pdf_paths: list[Path | str],
    dest: Path | str,
    renderer: HtmlRenderer,
) -> Path:
    """Merge PDFs by embedding each source on its own wrapper page.

    This is not an object-level merge: every source is embedded whole and
    the renderer decides how much of it appears.
    """
    if len(pdf_paths) < 2:
        raise NotEnoughDocumentsError("Please add at least 2 PDF files to merge.")

    encoded = [templates.read_base64(p) for p in pdf_paths]
    out = render_to_file(renderer, templates.merge_html(encoded), Path(dest))

    logger.info("pdf_merged", sources=len(pdf_paths), path=str(out))
    return out


def sign_pdf(
    original_name: str,
    signature_data: str,
    dest: Path | str,
    renderer: HtmlRenderer,
) -> Path:
    """Render the signed-document page for ``original_name``."""
    html = templates.signed_html(original_name, signature_data)
    out = create_pdf_from_html(renderer, html, dest)

    logger.info("pdf_signed", original=original_name, path=str(out))
    return out
