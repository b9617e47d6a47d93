#!/usr/bin/env python3
"""
Error handlers for the web application.

Every error leaves the API as ``{"success": false, "error": ..., "type": ...}``.
Service exceptions from core.errors are mapped to status codes by class;
anything unexpected becomes a 500 without leaking details.
"""

import logging
from typing import Any, Tuple, Type

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.errors import NotFoundError, PreconditionError, TalentScoutError, ValidationError

logger = logging.getLogger(__name__)

# First matching class wins
STATUS_BY_ERROR: Tuple[Tuple[Type[TalentScoutError], int], ...] = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (PreconditionError, 409),
)


def status_for(exc: TalentScoutError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    return 500


def error_response(status_code: int, error: Any, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type}
    )


async def service_exception_handler(request: Request, exc: TalentScoutError) -> JSONResponse:
    """Client errors are logged at info level, adapter and persistence failures with a traceback."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {type(exc).__name__}: {exc}")
    return error_response(status_code, str(exc), type(exc).__name__)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error in {request.method} {request.url.path}")
    return error_response(500, "Internal server error", "InternalError")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TalentScoutError, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
