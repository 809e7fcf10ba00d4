"""
Error rendering for the Catalog API.

Every error reaching a client has the same shape: ``{"message": "..."}``.
Details of unexpected failures are logged, never returned.
"""

import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR_MESSAGE = "Internal server error"


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render ``HTTPException`` details as ``{"message": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body or parameters could not be parsed."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"message": "Invalid request", "errors": errors}),
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates out of a route as a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_SERVER_ERROR_MESSAGE},
        )
