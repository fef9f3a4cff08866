# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error translation for the HTTP edge.

Every AppError becomes {"error", "code", "message", "details"?} with the
status pinned by its class. Request body validation failures become 400
VALIDATION_ERROR naming the first offending field, and anything else
becomes 500 INTERNAL_ERROR without leaking the exception text.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.errors import AppError, DatabaseError

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate a tagged application error."""
    if exc.status_code >= 500:
        cause = exc.original_error if isinstance(exc, DatabaseError) else None
        logger.error(
            "Request failed: kind=%s path=%s message=%s cause=%s",
            exc.kind,
            request.url.path,
            exc.message,
            cause,
        )
    elif exc.kind == "validation":
        logger.info(
            "Validation failed: path=%s field=%s message=%s",
            request.url.path,
            exc.details.get("field"),
            exc.message,
        )
    else:
        logger.info("Request rejected: kind=%s path=%s", exc.kind, request.url.path)

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Translate pydantic request validation into a 400."""
    errors = exc.errors()
    field = None
    message = "invalid request"
    if errors:
        first = errors[0]
        location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or None
        message = first.get("msg", message)

    logger.info("Request validation failed: path=%s field=%s", request.url.path, field)

    body: dict = {"error": "validation", "code": "VALIDATION_ERROR", "message": message}
    if field:
        body["details"] = {"field": field}
    return JSONResponse(status_code=400, content=body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal",
            "code": "INTERNAL_ERROR",
            "message": "internal server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
