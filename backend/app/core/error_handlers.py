"""
Global exception handlers: the single path that writes error responses.

Envelope: {"error": {"kind": ..., "message": ...}}
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.errors import (
    CatRegistryError,
    StoreFailure,
    ValidationFailed,
    format_validation_errors,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CatRegistryError)
    async def registry_error_handler(request: Request, exc: CatRegistryError):
        if exc.http_status >= 500:
            logger.error(f"{exc.kind.value} on {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{exc.kind.value} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationFailed(format_validation_errors(exc.errors()))
        logger.warning(f"Validation error on {request.url.path}: {error.message}")
        return JSONResponse(status_code=error.http_status, content=error.to_response())

    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Store failure on {request.url.path}: {exc}")
        error = StoreFailure("Database operation failed")
        return JSONResponse(status_code=error.http_status, content=error.to_response())

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"kind": "internal", "message": "An unexpected error occurred"}},
        )
