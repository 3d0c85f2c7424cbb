"""Shared schema types used across the application."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from pdfdesk.services.formatting import saved_percent


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CompressionQuality(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class OutputKind(str, enum.Enum):
    """File-name prefix of every document written into the library."""
    SCAN = "scan"
    CONVERTED = "converted"
    SIGNED = "signed"
    MERGED = "merged"
    SPLIT = "split"
    EXTRACTED = "extracted"
    COMPRESSED = "compressed"


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class ManagedFile(BaseModel):
    """One PDF entry of the managed library directory."""
    name: str = Field(..., description="Base name including the .pdf extension")
    path: str = Field(..., description="Absolute location; identifies the entry")
    size: int = Field(..., ge=0, description="Size in bytes")
    modification_time: float = Field(..., description="Seconds since epoch")

    @property
    def modification_time_ms(self) -> int:
        return int(self.modification_time * 1000)


class SavedSignature(BaseModel):
    """A reusable signature image."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    data: str = Field(..., description="Image data URI")
    created_at: int = Field(..., alias="createdAt", description="Milliseconds since epoch")


class PageRange(BaseModel):
    """An inclusive, 1-based page interval."""
    start: int = Field(..., description="1-based start page (inclusive)")
    end: int = Field(..., description="1-based end page (inclusive)")


class PageBox(BaseModel):
    """Rendered page size in points."""
    width: int
    height: int


class CompressionResult(BaseModel):
    """Byte sizes before and after re-rendering a PDF."""
    path: str
    original_size: int
    compressed_size: int

    @property
    def saved_percent(self) -> int:
        return saved_percent(self.original_size, self.compressed_size)
