"""
DocSentinel error types and FastAPI exception handlers.

Two kinds of failure exist in the analysis core:
- infrastructure failures (the document bytes cannot be read) abort the call
  and surface as an AnalysisError subclass;
- document properties (no QR code, undecodable image, no clauses) are never
  raised, they are recorded in the result.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = 500
    error_type: str = "analysis_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DocumentReadError(AnalysisError):
    """The raw document bytes could not be read, so no fingerprint exists."""

    status_code = 422
    error_type = "document_read_error"


class UnsupportedDocumentError(AnalysisError):
    """Upload is not a JPEG, PNG or PDF."""

    status_code = 415
    error_type = "unsupported_document"


class DocumentTooLargeError(AnalysisError):
    status_code = 413
    error_type = "document_too_large"


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.error("%s on %s %s: %s", exc.error_type, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.error_type, "detail": exc.message},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register JSON handlers for every AnalysisError subclass."""
    app.add_exception_handler(AnalysisError, analysis_error_handler)
