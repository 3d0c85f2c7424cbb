"""Pure helpers for sizes, percentages and file names."""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')
_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


def format_size(num_bytes: int) -> str:
    """Return a human-readable size: ``"512 B"``, ``"1.5 KB"``, ``"2.0 MB"``."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{_one_decimal(num_bytes, 1024)} KB"
    return f"{_one_decimal(num_bytes, 1024 * 1024)} MB"


def _one_decimal(num_bytes: int, unit: int) -> Decimal:
    # exact quotient, ties round up: 1280 B is 1.3 KB
    return (Decimal(num_bytes) / unit).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def saved_percent(original_size: int, compressed_size: int) -> int:
    """Percentage of bytes saved by a compression, never negative."""
    if original_size <= 0:
        return 0
    # half-up rounding, 12.5 -> 13
    ratio = (original_size - compressed_size) / original_size * 100
    return max(0, math.floor(ratio + 0.5))


def sanitize_file_name(name: str) -> str:
    """Strip characters unsafe in a file name and surrounding whitespace.

    A trailing ``.pdf`` typed by the user is dropped so that the caller can
    append the extension exactly once. The result may be empty.
    """
    cleaned = _UNSAFE_CHARS.sub("", name).strip()
    cleaned = _PDF_SUFFIX.sub("", cleaned).strip()
    # "." and ".." are not names
    if cleaned.strip(".") == "":
        return ""
    return cleaned
