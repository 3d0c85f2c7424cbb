"""HTML-to-PDF rendering, the external engine every transform goes through."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

import structlog

from pdfdesk.errors import RenderError

logger = structlog.get_logger(__name__)

POINTS_PER_INCH = 72

# US Letter, in points
DEFAULT_PAGE_WIDTH = 612
DEFAULT_PAGE_HEIGHT = 792


class HtmlRenderer(Protocol):
    """Renders one HTML document to one PDF file."""

    def render(
        self,
        html: str,
        output_path: Path,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None: ...


class PlaywrightRenderer:
    """Prints HTML to PDF with headless Chromium."""

    def __init__(self, timeout_ms: int = 30000):
        self.timeout_ms = timeout_ms

    def render(
        self,
        html: str,
        output_path: Path,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        from playwright.sync_api import Error as PlaywrightError
        from playwright.sync_api import sync_playwright

        w_in = (width or DEFAULT_PAGE_WIDTH) / POINTS_PER_INCH
        h_in = (height or DEFAULT_PAGE_HEIGHT) / POINTS_PER_INCH

        try:
            with sync_playwright() as pw:
                browser = pw.chromium.launch(headless=True)
                try:
                    page = browser.new_page()
                    page.set_content(html, wait_until="load", timeout=self.timeout_ms)
                    page.pdf(
                        path=str(output_path),
                        width=f"{w_in:.4f}in",
                        height=f"{h_in:.4f}in",
                        margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
                        print_background=True,
                    )
                finally:
                    browser.close()
        except PlaywrightError as exc:
            raise RenderError(f"Rendering failed: {exc}") from exc


def render_to_file(
    renderer: HtmlRenderer,
    html: str,
    dest: Path,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Path:
    """Render ``html`` and move the result to ``dest``.

    The renderer writes into a hidden ``.part`` file beside ``dest`` which is
    renamed into place only once complete, so a listing never shows a partial
    document. On failure the temp file is removed and ``dest`` is untouched.
    """
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=f".{dest.stem}.", suffix=".part")
    os.close(fd)
    tmp = Path(tmp_name)

    try:
        renderer.render(html, tmp, width=width, height=height)
        if not tmp.exists() or tmp.stat().st_size == 0:
            raise RenderError("Renderer produced no output")
        os.replace(tmp, dest)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    logger.debug("pdf_rendered", path=str(dest), size_bytes=dest.stat().st_size)
    return dest
