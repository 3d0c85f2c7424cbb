"""Schemas for saved signature endpoints."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field

from pdfdesk.schemas.common import SavedSignature

IMAGE_DATA_URI_PREFIX = "data:image/"


def check_image_data_uri(value: str) -> str:
    if not value.startswith(IMAGE_DATA_URI_PREFIX):
        raise ValueError("signature data must be an image data URI")
    return value


ImageDataUri = Annotated[str, AfterValidator(check_image_data_uri)]


class SignatureCreate(BaseModel):
    """Request body to save a signature."""
    name: Optional[str] = Field(None, description="Display name; defaults to 'Signature N'")
    data: ImageDataUri = Field(..., description="Signature image as a data URI")


class SignatureListResponse(BaseModel):
    signatures: list[SavedSignature]
    total: int
