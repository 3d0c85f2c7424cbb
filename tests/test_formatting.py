"""Tests for size formatting, saved percentage and file-name sanitizing."""

import pytest

from pdfdesk.schemas.common import CompressionResult
from pdfdesk.services.formatting import format_size, sanitize_file_name, saved_percent


class TestFormatSize:
    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.0 MB"
        assert format_size(5 * 1024 * 1024 + 512 * 1024) == "5.5 MB"

    @pytest.mark.parametrize(
        "num_bytes, expected",
        [
            (1280, "1.3 KB"),
            (2304, "2.3 KB"),
            (1310720, "1.3 MB"),
            (1331, "1.3 KB"),
        ],
    )
    def test_ties_round_up(self, num_bytes, expected):
        assert format_size(num_bytes) == expected


class TestSavedPercent:
    def test_basic(self):
        assert saved_percent(1000, 400) == 60

    def test_zero_original(self):
        assert saved_percent(0, 0) == 0
        assert saved_percent(0, 500) == 0

    def test_never_negative(self):
        assert saved_percent(1000, 1500) == 0

    def test_rounds_half_up(self):
        assert saved_percent(1000, 875) == 13  # 12.5

    def test_compression_result_property(self):
        result = CompressionResult(path="x.pdf", original_size=1000, compressed_size=400)
        assert result.saved_percent == 60


class TestSanitizeFileName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("report", "report"),
            ("  report  ", "report"),
            ('a/b\\c:d*e?f"g<h>i|j', "abcdefghij"),
            ("invoice.pdf", "invoice"),
            ("Invoice.PDF", "Invoice"),
            ("my notes 2024", "my notes 2024"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_file_name(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "///", "..", ".pdf", "\x00\x01"])
    def test_sanitizes_to_empty(self, raw):
        assert sanitize_file_name(raw) == ""
