"""Router: /v1/signatures — manage saved signature images."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from pdfdesk.dependencies import get_signature_store
from pdfdesk.schemas.common import SavedSignature
from pdfdesk.schemas.signatures import SignatureCreate, SignatureListResponse
from pdfdesk.storage.signature_store import SignatureStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["signatures"])


@router.get("/signatures", response_model=SignatureListResponse)
async def list_signatures(store: SignatureStore = Depends(get_signature_store)):
    """List saved signatures in the order they were saved."""
    signatures = store.list()
    return SignatureListResponse(signatures=signatures, total=len(signatures))


@router.post("/signatures", response_model=SavedSignature, status_code=201)
async def save_signature(
    req: SignatureCreate,
    store: SignatureStore = Depends(get_signature_store),
):
    """Save a signature for later use. Without a name it becomes "Signature N"."""
    name = (req.name or "").strip() or store.next_default_name()
    try:
        return store.save(name, req.data)
    except OSError as exc:
        logger.error("save_signature_failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to save signature.")


@router.delete("/signatures/{signature_id}", status_code=204)
async def delete_signature(
    signature_id: str,
    store: SignatureStore = Depends(get_signature_store),
):
    """Delete a saved signature. Unknown ids are ignored."""
    try:
        store.delete(signature_id)
    except OSError as exc:
        logger.error("delete_signature_failed", signature_id=signature_id, error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to delete signature.")
