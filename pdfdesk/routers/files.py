"""Router: /v1/files — list, view, rename and delete library PDFs."""

from __future__ import annotations

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from pdfdesk.dependencies import get_library
from pdfdesk.schemas.files import FileEntry, FileListResponse, RenameRequest, RenameResponse
from pdfdesk.storage.local import LibraryDirectory

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["files"])


@router.get("/files", response_model=FileListResponse)
async def list_files(library: LibraryDirectory = Depends(get_library)):
    """List library PDFs, most recently modified first."""
    try:
        files = library.list_files()
    except OSError as exc:
        logger.error("list_files_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to load files.")

    entries = [FileEntry.from_managed(f) for f in files]
    return FileListResponse(files=entries, total=len(entries))


@router.get("/files/{name}")
async def view_file(name: str, library: LibraryDirectory = Depends(get_library)):
    """Serve a library PDF inline (viewer / share)."""
    path = library.resolve(name)
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"File not found: {name}")

    return FileResponse(
        path=str(path),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{path.name}"'},
    )


@router.delete("/files/{name}", status_code=204)
async def delete_file(name: str, library: LibraryDirectory = Depends(get_library)):
    """Delete a library PDF. Deleting a missing file succeeds."""
    path = library.resolve(name)
    try:
        library.delete_file(path)
    except OSError as exc:
        logger.error("delete_file_failed", name=name, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to delete file.")


@router.patch("/files/{name}", response_model=RenameResponse)
async def rename_file(
    name: str,
    req: RenameRequest,
    library: LibraryDirectory = Depends(get_library),
):
    """Rename a library PDF; the .pdf extension is appended."""
    path = library.resolve(name)
    try:
        new_path = library.rename_file(path, req.new_name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"File not found: {name}")
    except OSError as exc:
        logger.error("rename_file_failed", name=name, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to rename file.")

    return RenameResponse(name=Path(new_path).name, path=new_path)
