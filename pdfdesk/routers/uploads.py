"""Checks shared by the routers that accept picked files."""

from __future__ import annotations

from pathlib import Path

from fastapi import HTTPException, UploadFile

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".heic"}


def require_pdf(upload: UploadFile) -> UploadFile:
    if not upload.filename or not upload.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")
    return upload


def require_image(upload: UploadFile) -> UploadFile:
    suffix = Path(upload.filename or "").suffix.lower()
    content_type = upload.content_type or ""
    if suffix not in IMAGE_EXTENSIONS and not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are accepted")
    return upload
