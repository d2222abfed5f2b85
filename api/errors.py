"""
Exception handlers.

Every error response is ``{"message": ...}`` with the matching status code;
validation failures additionally carry ``errors: [{field, message}]``.
Internal details are logged, never returned.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.errors import AppError, InternalError, ValidationError
from utils.validators import FieldError

logger = logging.getLogger(__name__)


def _body(message: str, errors: Iterable[FieldError] = ()) -> dict:
    body = {"message": message}
    errors = list(errors)
    if errors:
        body["errors"] = [{"field": e.field, "message": e.message} for e in errors]
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy (and framework/library errors) onto JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s — %s", request.method, request.url.path, exc.message)
        errors = exc.errors if isinstance(exc, ValidationError) else ()
        return JSONResponse(status_code=exc.status_code, content=_body(exc.message, errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            errors.append(FieldError(".".join(loc) or "body", err.get("msg", "Invalid value")))
        message = f"Invalid value for {errors[0].field}" if errors else "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_body(message, errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "API endpoint not found"
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"message": message})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": InternalError.default_message},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": InternalError.default_message},
        )
