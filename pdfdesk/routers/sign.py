"""Router: POST /v1/sign — sign a PDF with a drawn or saved signature."""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from pdfdesk.dependencies import get_library, get_renderer, get_signature_store
from pdfdesk.errors import RenderError, SignatureNotFound
from pdfdesk.routers.uploads import require_pdf
from pdfdesk.schemas.common import OutputKind
from pdfdesk.schemas.signatures import IMAGE_DATA_URI_PREFIX
from pdfdesk.schemas.transforms import OutputFile, SignResponse
from pdfdesk.services.pdf_builder import sign_pdf
from pdfdesk.services.renderer import HtmlRenderer
from pdfdesk.storage.local import LibraryDirectory
from pdfdesk.storage.signature_store import SignatureStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["sign"])


@router.post("/sign", response_model=SignResponse)
def sign_document(
    file: UploadFile = File(..., description="PDF to sign"),
    signature_data: Optional[str] = Form(None, description="Drawn signature as an image data URI"),
    signature_id: Optional[str] = Form(None, description="Id of a saved signature"),
    save_signature: bool = Form(False, description="Keep a drawn signature for later use"),
    library: LibraryDirectory = Depends(get_library),
    renderer: HtmlRenderer = Depends(get_renderer),
    store: SignatureStore = Depends(get_signature_store),
):
    """Render ``signed_<ts>.pdf`` for the picked PDF.

    Exactly one of ``signature_data`` (drawn) or ``signature_id`` (saved) is
    required. A drawn signature can be saved as "Signature N" in the same call.
    """
    require_pdf(file)
    if bool(signature_data) == bool(signature_id):
        raise HTTPException(
            status_code=400,
            detail="Please provide either a drawn signature or a saved signature id.",
        )

    if signature_id:
        saved = store.get(signature_id)
        if saved is None:
            raise SignatureNotFound(f"Signature not found: {signature_id}")
        data = saved.data
    else:
        if not signature_data.startswith(IMAGE_DATA_URI_PREFIX):
            raise HTTPException(status_code=400, detail="Signature must be an image data URI")
        data = signature_data

    dest = library.output_path(OutputKind.SIGNED)
    try:
        out = sign_pdf(file.filename, data, dest, renderer)
    except (RenderError, OSError) as exc:
        logger.error("sign_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to save signed PDF.")

    saved_id = None
    if save_signature and signature_data:
        saved_id = store.save(store.next_default_name(), signature_data).id

    output = OutputFile.from_path(out)
    return SignResponse(
        message=f"Signed PDF saved as {output.name}",
        file=output,
        saved_signature_id=saved_id,
    )
