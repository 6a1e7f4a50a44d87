"""
Exception handlers mapping preview errors to HTTP responses
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from file_preview.core.logging import logger
from file_preview.services.preview.exceptions import AccessDenied, PreviewError


async def preview_error_handler(request: Request, exc: PreviewError) -> PlainTextResponse:
    # 500 for bad parameters is kept for compatibility with existing clients
    if isinstance(exc, AccessDenied):
        logger.info(f"Access denied for {exc.file_id!r}: {exc.reason}")
    return PlainTextResponse(str(exc), status_code=500)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for the application's exception types"""
    app.add_exception_handler(PreviewError, preview_error_handler)
