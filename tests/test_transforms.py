"""Tests for the document transforms, run against a fake renderer."""

import base64
import os
from pathlib import Path

import pytest

from conftest import PDF_BYTES, FailingRenderer, FakeRenderer
from pdfdesk.errors import (
    NoImagesError,
    NoPagesSelectedError,
    NotEnoughDocumentsError,
    NoValidRangesError,
    RenderError,
)
from pdfdesk.schemas.common import CompressionQuality, OutputKind, PageRange
from pdfdesk.services.pdf_builder import images_to_pdf, merge_pdfs, sign_pdf
from pdfdesk.services.pdf_compress import QUALITY_PRESETS, compress_pdf
from pdfdesk.services.pdf_splitter import extract_pages, select_pages, split_by_ranges
from pdfdesk.services.renderer import render_to_file
from pdfdesk.storage.local import LibraryDirectory


def _library_entries(library: LibraryDirectory) -> list[str]:
    return sorted(p.name for p in library.root.iterdir())


class TestRenderToFile:
    def test_moves_into_place(self, library: LibraryDirectory, renderer: FakeRenderer):
        dest = library.output_path(OutputKind.CONVERTED)
        out = render_to_file(renderer, "<html></html>", dest)

        assert out == dest
        assert dest.read_bytes() == renderer.output
        assert renderer.calls[0]["path"] != dest
        assert _library_entries(library) == [dest.name]

    def test_failure_leaves_nothing(self, library: LibraryDirectory):
        dest = library.output_path(OutputKind.CONVERTED)

        with pytest.raises(RenderError):
            render_to_file(FailingRenderer(), "<html></html>", dest)

        assert _library_entries(library) == []

    def test_empty_output_is_a_failure(self, library: LibraryDirectory):
        dest = library.output_path(OutputKind.CONVERTED)

        with pytest.raises(RenderError):
            render_to_file(FakeRenderer(output=b""), "<html></html>", dest)

        assert _library_entries(library) == []


class TestImagesToPdf:
    def test_one_image_per_page_in_order(self, library, renderer, images):
        dest = library.output_path(OutputKind.CONVERTED)
        images_to_pdf(images, dest, renderer)

        (call,) = renderer.calls
        html = call["html"]
        encoded = [base64.b64encode(p.read_bytes()).decode() for p in images]
        positions = [html.index(e) for e in encoded]
        assert positions == sorted(positions)
        assert html.count("<img ") == 3
        assert html.count("page-break-after:always") == 3
        assert "data:image/png;base64," in html

    def test_no_images(self, library, renderer):
        with pytest.raises(NoImagesError):
            images_to_pdf([], library.output_path(OutputKind.SCAN), renderer)
        assert renderer.calls == []

    def test_end_to_end_convert_list_delete(self, library, renderer, images):
        older = library.root / "older.pdf"
        library.ensure_directory()
        older.write_bytes(PDF_BYTES)
        os.utime(older, (1_000, 1_000))

        out = images_to_pdf(images, library.output_path(OutputKind.CONVERTED), renderer)

        listed = library.list_files()
        assert listed[0].name == out.name
        assert len(listed) == 2

        library.delete_file(listed[0].path)
        assert [f.name for f in library.list_files()] == ["older.pdf"]


class TestMergePdfs:
    def test_one_wrapper_per_source_in_order(self, tmp_path, library, renderer):
        sources = []
        for i in range(3):
            p = tmp_path / f"src{i}.pdf"
            p.write_bytes(b"%PDF-1.4 source " + str(i).encode())
            sources.append(p)

        merge_pdfs(sources, library.output_path(OutputKind.MERGED), renderer)

        html = renderer.calls[0]["html"]
        assert html.count('type="application/pdf"') == 3
        assert "Document 1 of 3" in html and "Document 3 of 3" in html
        encoded = [base64.b64encode(p.read_bytes()).decode() for p in sources]
        positions = [html.index(e) for e in encoded]
        assert positions == sorted(positions)

    def test_needs_two_sources(self, library, renderer, source_pdf):
        with pytest.raises(NotEnoughDocumentsError):
            merge_pdfs([source_pdf], library.output_path(OutputKind.MERGED), renderer)
        assert _library_entries(library) == []

    def test_missing_source_raises_os_error(self, tmp_path, library, renderer, source_pdf):
        with pytest.raises(FileNotFoundError):
            merge_pdfs([source_pdf, tmp_path / "gone.pdf"], library.output_path(OutputKind.MERGED), renderer)
        assert _library_entries(library) == []


class TestSignPdf:
    def test_signed_page(self, library, renderer):
        dest = library.output_path(OutputKind.SIGNED)
        sign_pdf("<contract>.pdf", "data:image/png;base64,SIG", dest, renderer)

        html = renderer.calls[0]["html"]
        assert "Signed Document" in html
        assert "Original: &lt;contract&gt;.pdf" in html
        assert 'src="data:image/png;base64,SIG"' in html
        assert dest.exists()


class TestSplitByRanges:
    def test_one_file_per_range(self, library, renderer, source_pdf):
        ranges = [PageRange(start=1, end=3), PageRange(start=5, end=5)]
        outputs = split_by_ranges(source_pdf, ranges, library, renderer)

        assert len(outputs) == 2
        assert all(p.exists() for p in outputs)
        assert outputs[0].name.startswith("split_1_")
        assert outputs[1].name.startswith("split_2_")
        stamps = {p.name.split("_", 2)[2] for p in outputs}
        assert len(stamps) == 1
        assert "Pages 1–3" in renderer.calls[0]["html"]
        assert "Pages 5–5" in renderer.calls[1]["html"]

    def test_no_ranges_writes_nothing(self, library, renderer, source_pdf):
        with pytest.raises(NoValidRangesError):
            split_by_ranges(source_pdf, [], library, renderer)
        assert renderer.calls == []
        assert _library_entries(library) == []

    def test_failure_removes_earlier_parts(self, library, source_pdf):
        ranges = [PageRange(start=1, end=1), PageRange(start=2, end=2), PageRange(start=3, end=3)]

        with pytest.raises(RenderError):
            split_by_ranges(source_pdf, ranges, library, FailingRenderer(fail_on_call=2))

        assert library.list_files() == []
        assert _library_entries(library) == []


class TestExtractPages:
    def test_sorted_and_deduplicated(self, library, renderer, source_pdf):
        dest = library.output_path(OutputKind.EXTRACTED)
        extract_pages(source_pdf, [4, 2, 4, 1], dest, renderer)

        html = renderer.calls[0]["html"]
        captions = [line.strip() for line in html.splitlines() if "page-info" in line and "<p" in line]
        assert captions == [
            '<p class="page-info">Page 1</p>',
            '<p class="page-info">Page 2</p>',
            '<p class="page-info">Page 4</p>',
        ]

    def test_empty_selection(self, library, renderer, source_pdf):
        with pytest.raises(NoPagesSelectedError):
            extract_pages(source_pdf, [], library.output_path(OutputKind.EXTRACTED), renderer)
        assert _library_entries(library) == []

    def test_out_of_range_pages_dropped(self, library, renderer, source_pdf):
        with pytest.raises(NoPagesSelectedError):
            extract_pages(source_pdf, [0, 9], library.output_path(OutputKind.EXTRACTED), renderer, page_count=5)

    def test_select_pages(self):
        assert select_pages([4, 2, 4, 0, 9]) == [2, 4, 9]
        assert select_pages([4, 2, 4, 0, 9], page_count=5) == [2, 4]
        assert select_pages([]) == []


class TestCompressPdf:
    @pytest.mark.parametrize(
        "quality, box",
        [("high", (612, 792)), ("medium", (540, 700)), ("low", (460, 600))],
    )
    def test_presets(self, library, renderer, source_pdf, quality, box):
        compress_pdf(source_pdf, quality, library.output_path(OutputKind.COMPRESSED), renderer)

        call = renderer.calls[0]
        assert (call["width"], call["height"]) == box
        assert f'width="{box[0]}px" height="{box[1]}px"' in call["html"]

    def test_reports_sizes(self, library, source_pdf):
        renderer = FakeRenderer(output=b"%PDF" + b"1" * 396)
        result = compress_pdf(
            source_pdf, CompressionQuality.LOW, library.output_path(OutputKind.COMPRESSED), renderer
        )

        assert result.original_size == source_pdf.stat().st_size
        assert result.compressed_size == 400
        assert Path(result.path).exists()
        assert result.saved_percent == round((result.original_size - 400) / result.original_size * 100)

    def test_unknown_quality(self, library, renderer, source_pdf):
        with pytest.raises(ValueError):
            compress_pdf(source_pdf, "ultra", library.output_path(OutputKind.COMPRESSED), renderer)

    def test_presets_cover_every_quality(self):
        assert set(QUALITY_PRESETS) == set(CompressionQuality)
