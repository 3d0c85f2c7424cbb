"""Schemas for the document transform endpoints."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from pdfdesk.schemas.common import CompressionQuality, PageRange
from pdfdesk.services.formatting import format_size


class OutputFile(BaseModel):
    """A document written into the library."""
    name: str
    path: str
    size: int
    size_label: str

    @classmethod
    def from_path(cls, path: Path) -> "OutputFile":
        size = path.stat().st_size
        return cls(name=path.name, path=str(path), size=size, size_label=format_size(size))


class TransformResponse(BaseModel):
    message: str
    file: OutputFile


class SignResponse(TransformResponse):
    saved_signature_id: Optional[str] = Field(None, description="Id of the signature stored by this call")


class SplitResponse(BaseModel):
    message: str
    ranges: list[PageRange]
    files: list[OutputFile]
    total: int


class ExtractResponse(TransformResponse):
    pages: list[int]


class CompressResponse(TransformResponse):
    quality: CompressionQuality
    original_size: int
    compressed_size: int
    saved_percent: int


class PageCountResponse(BaseModel):
    filename: str
    page_count: int
    detected: bool = Field(..., description="False when the count is the assumed default")
