from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from ..core.exceptions import SleepDiaryError, StoreNotReady, Unauthorized

logger = logging.getLogger(__name__)


async def domain_exception_handler(request: Request, exc: SleepDiaryError):
    """Map domain failures to their status with an {"error": ...} body"""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.message} - {request.url.path}")
    else:
        logger.warning(f"HTTP {exc.status_code}: {exc.message} - {request.url.path}")

    headers = None
    if isinstance(exc, Unauthorized):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, StoreNotReady):
        headers = {"Retry-After": "1"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions raised by the framework (404, 405, ...)"""
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - {request.url.path}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed body fields are a plain 400"""
    logger.warning(f"Validation error: {exc.errors()} - {request.url.path}")

    return JSONResponse(
        status_code=400,
        content={"error": "Missing or invalid fields."}
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - {request.url.path}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error."}
    )
