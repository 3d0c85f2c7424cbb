"""FastAPI dependency providers for storage, signatures and rendering."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from pdfdesk.config import Settings, settings
from pdfdesk.services.renderer import HtmlRenderer, PlaywrightRenderer
from pdfdesk.storage.kv import KeyValueBackend, build_backend
from pdfdesk.storage.local import LibraryDirectory
from pdfdesk.storage.signature_store import SignatureStore


def get_settings() -> Settings:
    return settings


def get_library(cfg: Settings = Depends(get_settings)) -> LibraryDirectory:
    return LibraryDirectory(cfg.pdf_dir)


@lru_cache(maxsize=1)
def get_kv_backend() -> KeyValueBackend:
    return build_backend(settings)


def get_signature_store(
    backend: KeyValueBackend = Depends(get_kv_backend),
    cfg: Settings = Depends(get_settings),
) -> SignatureStore:
    return SignatureStore(backend, key=cfg.signatures_key)


@lru_cache(maxsize=1)
def get_renderer() -> HtmlRenderer:
    return PlaywrightRenderer(timeout_ms=settings.render_timeout_ms)
