"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdfdesk.config import settings
from pdfdesk.errors import (
    DestinationExists,
    InvalidFileName,
    PdfDeskError,
    RenderError,
    SignatureNotFound,
)

# ---------------------------------------------------------------------------
# Structured logging configuration
# ---------------------------------------------------------------------------

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
)

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="pdfdesk API",
    description=(
        "Local PDF library: scan pages, convert images, sign, merge, split, "
        "extract and compress PDFs, and manage the generated files and saved signatures."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def _status_for(exc: PdfDeskError) -> int:
    if isinstance(exc, DestinationExists):
        return 409
    if isinstance(exc, (SignatureNotFound, InvalidFileName)):
        return 404
    if isinstance(exc, RenderError):
        return 500
    # empty rename, no ranges/pages/images, too few documents
    return 400


@app.exception_handler(PdfDeskError)
async def pdfdesk_error_handler(request: Request, exc: PdfDeskError):
    status = _status_for(exc)
    logger.warning(
        "request_failed",
        path=request.url.path,
        error_kind=type(exc).__name__,
        error=str(exc),
        status=status,
    )
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "error_kind": type(exc).__name__},
    )


# ---------------------------------------------------------------------------
# Mount routers
# ---------------------------------------------------------------------------

from pdfdesk.routers.files import router as files_router
from pdfdesk.routers.signatures import router as signatures_router
from pdfdesk.routers.convert import router as convert_router
from pdfdesk.routers.sign import router as sign_router
from pdfdesk.routers.merge import router as merge_router
from pdfdesk.routers.split import router as split_router
from pdfdesk.routers.compress import router as compress_router

app.include_router(files_router)
app.include_router(signatures_router)
app.include_router(convert_router)
app.include_router(sign_router)
app.include_router(merge_router)
app.include_router(split_router)
app.include_router(compress_router)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "pdfdesk API",
        "version": "1.0.0",
    }


def serve() -> None:
    """Run the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    serve()
