"""Schemas for library file endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pdfdesk.schemas.common import ManagedFile
from pdfdesk.services.formatting import format_size


class FileEntry(BaseModel):
    """A library file as shown in the file list."""
    name: str
    path: str
    size: int = Field(..., description="File size in bytes")
    size_label: str = Field(..., description="Human-readable size")
    modification_time: float = Field(..., description="Seconds since epoch")
    modification_time_ms: int = Field(..., description="Milliseconds since epoch")

    @classmethod
    def from_managed(cls, f: ManagedFile) -> "FileEntry":
        return cls(
            name=f.name,
            path=f.path,
            size=f.size,
            size_label=format_size(f.size),
            modification_time=f.modification_time,
            modification_time_ms=f.modification_time_ms,
        )


class FileListResponse(BaseModel):
    files: list[FileEntry]
    total: int


class RenameRequest(BaseModel):
    new_name: str = Field(..., description="New base name, without extension")


class RenameResponse(BaseModel):
    name: str
    path: str
