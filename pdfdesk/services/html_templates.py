"""HTML wrappers handed to the renderer.

Source PDFs are embedded whole as base64 ``<embed>`` objects; how many of
their pages survive printing depends entirely on the renderer.
"""

from __future__ import annotations

import base64
import mimetypes
from html import escape
from pathlib import Path

from pdfdesk.schemas.common import PageBox, PageRange

TEXT_PRIMARY = "#1E293B"
TEXT_SECONDARY = "#64748B"
BORDER = "#E2E8F0"
BACKGROUND = "#F8FAFC"

EMBED_HEIGHT_PX = 800

_WRAPPER_STYLE = f"""
      body {{ margin: 0; padding: 0; }}
      .page {{ page-break-after: always; padding: 20px; }}
      .page:last-child {{ page-break-after: auto; }}
      .page-info {{ font-family: Arial, sans-serif; color: {TEXT_SECONDARY}; font-size: 12px; }}
      object, embed {{ width: 100%; min-height: {EMBED_HEIGHT_PX}px; }}
"""


# ---------------------------------------------------------------------------
# Encoding helpers
# ---------------------------------------------------------------------------

def read_base64(path: Path | str) -> str:
    """Return the file content as base64 text."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def image_data_uri(path: Path | str) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    if not mime or not mime.startswith("image/"):
        mime = "image/jpeg"
    return f"data:{mime};base64,{read_base64(path)}"


def _document(style: str, body: str) -> str:
    return (
        "<html>\n"
        f"  <head>\n    <style>{style}    </style>\n  </head>\n"
        f"  <body>{body}</body>\n"
        "</html>\n"
    )


def _pdf_embed(pdf_base64: str, width: str = "100%", height: str = f"{EMBED_HEIGHT_PX}px") -> str:
    return (
        f'<embed src="data:application/pdf;base64,{pdf_base64}" '
        f'type="application/pdf" width="{width}" height="{height}" />'
    )


def _wrapper_page(caption: str, pdf_base64: str) -> str:
    return (
        '\n    <div class="page">'
        f'\n      <p class="page-info">{escape(caption)}</p>'
        f"\n      {_pdf_embed(pdf_base64)}"
        "\n    </div>"
    )


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def images_html(image_uris: list[str]) -> str:
    """One full-width image per page, in order."""
    tags = "".join(
        f'<img src="{escape(uri, quote=True)}" '
        'style="width:100%;page-break-after:always;display:block;margin:0 auto;" />'
        for uri in image_uris
    )
    style = """
      body { margin: 0; padding: 0; }
      img { max-width: 100%; height: auto; }
      img:last-child { page-break-after: auto !important; }
"""
    return _document(style, tags)


def merge_html(pdfs_base64: list[str]) -> str:
    total = len(pdfs_base64)
    pages = "".join(
        _wrapper_page(f"Document {i} of {total}", b64)
        for i, b64 in enumerate(pdfs_base64, start=1)
    )
    return _document(_WRAPPER_STYLE, pages)


def range_html(pdf_base64: str, page_range: PageRange) -> str:
    # en dash between the bounds
    caption = f"Pages {page_range.start}–{page_range.end}"
    return _document(_WRAPPER_STYLE, _wrapper_page(caption, pdf_base64))


def extract_html(pdf_base64: str, pages: list[int]) -> str:
    body = "".join(_wrapper_page(f"Page {n}", pdf_base64) for n in pages)
    return _document(_WRAPPER_STYLE, body)


def compress_html(pdf_base64: str, box: PageBox) -> str:
    style = f"""
      body {{ margin: 0; padding: 0; }}
      embed {{ width: 100%; min-height: {box.height}px; }}
"""
    body = "\n    " + _pdf_embed(pdf_base64, width=f"{box.width}px", height=f"{box.height}px") + "\n  "
    return _document(style, body)


def signed_html(original_name: str, signature_data: str) -> str:
    """A page naming the signed document and showing the signature image."""
    body = (
        f'<div style="margin:0;padding:20px;background:{BACKGROUND};">'
        f'<h3 style="color:{TEXT_PRIMARY};">Signed Document</h3>'
        f'<p style="color:{TEXT_SECONDARY};">Original: {escape(original_name)}</p>'
        f'<hr style="border-color:{BORDER};"/>'
        f'<p style="color:{TEXT_SECONDARY};">Signature:</p>'
        f'<img src="{escape(signature_data, quote=True)}" '
        f'style="max-width:300px;border:2px solid {BORDER};border-radius:12px;" />'
        "</div>"
    )
    return _document("\n      body { margin: 0; padding: 0; }\n", body)
