"""PDF splitter — page-range parsing, split by ranges and page extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import structlog

from pdfdesk.errors import NoPagesSelectedError, NoValidRangesError
from pdfdesk.schemas.common import PageRange
from pdfdesk.services import html_templates as templates
from pdfdesk.services.renderer import HtmlRenderer, render_to_file
from pdfdesk.storage.local import LibraryDirectory, epoch_millis

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Range parsing
# ---------------------------------------------------------------------------

def _parse_int(token: str) -> Optional[int]:
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        return None
    return int(token)


def parse_page_ranges(text: str, page_count: int) -> list[PageRange]:
    """Parse ``"1-3, 5, 8-9"`` into page ranges.

    Tokens are either ``N`` or ``A-B``. A token is dropped when it is not
    made of integers, or when ``start < 1``, ``end < start`` or
    ``end > page_count``. Dropped tokens are not reported.
    """
    ranges: list[PageRange] = []

    for part in text.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            start_str, _, end_str = part.partition("-")
            start, end = _parse_int(start_str), _parse_int(end_str)
        else:
            start = end = _parse_int(part)

        if start is None or end is None:
            continue
        if start < 1 or end < start or end > page_count:
            continue
        ranges.append(PageRange(start=start, end=end))

    return ranges


def parse_page_ranges_or_raise(text: str, page_count: int) -> list[PageRange]:
    ranges = parse_page_ranges(text, page_count)
    if not ranges:
        raise NoValidRangesError("Please enter valid page ranges (e.g. 1-3, 4-6).")
    return ranges


# ---------------------------------------------------------------------------
# Split / extract
# ---------------------------------------------------------------------------

def split_by_ranges(
    pdf_path: Path | str,
    ranges: list[PageRange],
    library: LibraryDirectory,
    renderer: HtmlRenderer,
) -> list[Path]:
    """Write one PDF per range into the library.

    Outputs are named ``split_<i>_<timestamp>.pdf`` with a 1-based ``i`` and
    one timestamp shared by the whole call. If any part fails to render, the
    parts already written are removed again.

    Raises:
        NoValidRangesError: ``ranges`` is empty; nothing is written.
    """
    if not ranges:
        raise NoValidRangesError("Please enter valid page ranges (e.g. 1-3, 4-6).")

    encoded = templates.read_base64(pdf_path)
    timestamp = epoch_millis()
    results: list[Path] = []

    for i, page_range in enumerate(ranges, start=1):
        dest = library.split_output_path(i, timestamp)
        try:
            render_to_file(renderer, templates.range_html(encoded, page_range), dest)
        except Exception:
            # a failed call leaves none of its parts behind
            for written in results:
                library.delete_file(written)
            raise
        results.append(dest)

        logger.info(
            "pdf_split",
            index=i,
            pages=f"{page_range.start}-{page_range.end}",
            path=str(dest),
        )

    logger.info("pdf_split_complete", total_documents=len(results))
    return results


def select_pages(pages: Iterable[int], page_count: Optional[int] = None) -> list[int]:
    """Usable pages of a selection: ascending, without repeats, within ``1..page_count``."""
    return sorted({p for p in pages if p >= 1 and (page_count is None or p <= page_count)})


def extract_pages(
    pdf_path: Path | str,
    pages: list[int],
    dest: Path | str,
    renderer: HtmlRenderer,
    page_count: Optional[int] = None,
) -> Path:
    """Write the selected pages, ascending and without repeats, to ``dest``.

    When ``page_count`` is given, pages outside ``1..page_count`` are ignored.

    Raises:
        NoPagesSelectedError: no usable page was selected; nothing is written.
    """
    selected = select_pages(pages, page_count)
    if not selected:
        raise NoPagesSelectedError("Please select at least one page to extract.")

    encoded = templates.read_base64(pdf_path)
    out = render_to_file(renderer, templates.extract_html(encoded, selected), Path(dest))

    logger.info("pages_extracted", pages=selected, path=str(out))
    return out
