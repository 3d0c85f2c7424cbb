"""Shared fixtures: a temp library, an in-memory signature store and a fake renderer."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import pytest

from pdfdesk.config import Settings
from pdfdesk.errors import RenderError
from pdfdesk.storage.kv import MemoryBackend
from pdfdesk.storage.local import LibraryDirectory
from pdfdesk.storage.signature_store import SignatureStore

PDF_BYTES = b"%PDF-1.4\n%fake\n" + b"0" * 1000 + b"\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeRenderer:
    """Writes a small fixed PDF and records every call."""

    def __init__(self, output: bytes = b"%PDF-1.4\nrendered\n%%EOF\n"):
        self.output = output
        self.calls: list[dict] = []

    def render(self, html: str, output_path: Path, *, width: Optional[int] = None, height: Optional[int] = None) -> None:
        self.calls.append({"html": html, "path": Path(output_path), "width": width, "height": height})
        Path(output_path).write_bytes(self.output)


class FailingRenderer:
    """Writes part of a file, then fails."""

    def __init__(self, fail_on_call: int = 1):
        self.fail_on_call = fail_on_call
        self.calls = 0

    def render(self, html: str, output_path: Path, *, width: Optional[int] = None, height: Optional[int] = None) -> None:
        self.calls += 1
        Path(output_path).write_bytes(b"%PDF-1.4\npartial")
        if self.calls >= self.fail_on_call:
            raise RenderError("engine crashed")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage_base_path=str(tmp_path / "data"), signature_backend="memory")


@pytest.fixture
def library(settings: Settings) -> LibraryDirectory:
    return LibraryDirectory(settings.pdf_dir)


@pytest.fixture
def store() -> SignatureStore:
    return SignatureStore(MemoryBackend())


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def source_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "source.pdf"
    path.write_bytes(PDF_BYTES)
    return path


@pytest.fixture
def images(tmp_path: Path) -> list[Path]:
    paths = []
    for i in range(3):
        p = tmp_path / f"page{i + 1}.png"
        p.write_bytes(PNG_BYTES + bytes([i]))
        paths.append(p)
    return paths


def write_pdf(directory: Path, name: str, mtime: float, content: bytes = PDF_BYTES) -> Path:
    """Create a file with a fixed modification time."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_bytes(content)
    os.utime(path, (mtime, mtime))
    return path
