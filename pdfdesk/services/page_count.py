"""Page count of a picked PDF: an assumed default unless detection is enabled."""

from __future__ import annotations

from pathlib import Path

import structlog
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdfdesk.config import Settings

logger = structlog.get_logger(__name__)


def get_page_count(pdf_path: Path | str) -> int:
    """Return the total number of pages in a PDF."""
    reader = PdfReader(str(pdf_path))
    return len(reader.pages)


def estimate_page_count(pdf_path: Path | str, settings: Settings) -> int:
    """Page count to offer the user as a starting value.

    Without ``detect_page_count`` this is ``default_page_count`` whatever the
    file holds; the user adjusts it by hand. With detection enabled the real
    count is read, falling back to the default for unreadable files.
    """
    if not settings.detect_page_count:
        return settings.default_page_count

    try:
        count = get_page_count(pdf_path)
    except (PdfReadError, OSError, ValueError) as exc:
        logger.warning("page_count_failed", path=str(pdf_path), error=str(exc))
        return settings.default_page_count

    logger.debug("page_count_detected", path=str(pdf_path), pages=count)
    return max(count, 1)
