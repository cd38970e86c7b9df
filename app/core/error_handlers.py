# app/core/error_handlers.py
"""
Exception handlers that turn domain and validation errors into JSON responses.
"""
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import BookingEngineError

logger = logging.getLogger(__name__)


async def booking_error_handler(request: Request, exc: BookingEngineError) -> JSONResponse:
    """Render a domain error as ``{"detail", "code"}`` with its own status."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}",
        extra={"code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are client errors: 400, not 422."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"errors": errors, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Request validation failed",
            "code": "ValidationError",
            "errors": errors,
        },
    )
