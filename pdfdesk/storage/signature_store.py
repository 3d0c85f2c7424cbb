"""Saved signatures, kept as one JSON array under one key of a key-value backend."""

from __future__ import annotations

import json
import uuid
from typing import Any, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from pdfdesk.schemas.common import SavedSignature
from pdfdesk.storage.kv import KeyValueBackend
from pdfdesk.storage.local import epoch_millis

logger = structlog.get_logger(__name__)

SIGNATURES_KEY = "saved_signatures"

_signature_list = TypeAdapter(list[SavedSignature])


def parse_signatures(raw: Optional[str]) -> list[SavedSignature]:
    """Parse a stored record, or return an empty list.

    A missing record, invalid JSON, or a payload that is not a list of
    signatures all read as "no signatures".
    """
    if not raw:
        return []
    try:
        payload: Any = json.loads(raw)
        return _signature_list.validate_python(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("signature_store_corrupt", error=str(exc).splitlines()[0])
        return []


def dump_signatures(signatures: list[SavedSignature]) -> str:
    return json.dumps([s.model_dump(by_alias=True) for s in signatures], ensure_ascii=False)


class SignatureStore:
    """Named signature images, addressable by id, in insertion order."""

    def __init__(self, backend: KeyValueBackend, key: str = SIGNATURES_KEY):
        self.backend = backend
        self.key = key

    def list(self) -> list[SavedSignature]:
        return parse_signatures(self.backend.get_item(self.key))

    def get(self, signature_id: str) -> Optional[SavedSignature]:
        return next((s for s in self.list() if s.id == signature_id), None)

    def next_default_name(self) -> str:
        return f"Signature {len(self.list()) + 1}"

    def save(self, name: str, data: str) -> SavedSignature:
        """Append a new signature and write the whole collection back."""
        signatures = self.list()
        known_ids = {s.id for s in signatures}

        signature_id = uuid.uuid4().hex
        while signature_id in known_ids:
            signature_id = uuid.uuid4().hex

        created_at = epoch_millis()
        if signatures:
            created_at = max(created_at, signatures[-1].created_at)

        signature = SavedSignature(id=signature_id, name=name, data=data, created_at=created_at)
        signatures.append(signature)
        self.backend.set_item(self.key, dump_signatures(signatures))

        logger.info("signature_saved", signature_id=signature_id, name=name, total=len(signatures))
        return signature

    def delete(self, signature_id: str) -> None:
        """Remove a signature by id; unknown ids are ignored."""
        signatures = self.list()
        remaining = [s for s in signatures if s.id != signature_id]
        self.backend.set_item(self.key, dump_signatures(remaining))
        logger.info(
            "signature_deleted",
            signature_id=signature_id,
            found=len(remaining) != len(signatures),
        )
