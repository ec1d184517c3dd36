"""JSON envelope shared by every endpoint: ``{"success": ..., "data" | "error": ...}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Messages drivers use when a table or column is missing from the schema
MISSING_RELATION_MARKERS = (
    "no such table",
    "no such column",
    "undefinedtable",
    "undefinedcolumn",
    "relation",
    "does not exist",
)


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def is_missing_relation_error(error: DBAPIError) -> bool:
    message = f"{type(error.orig).__name__} {error.orig}".lower()
    return any(marker in message for marker in MISSING_RELATION_MARKERS)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = {"success": False, **exc.detail}
    else:
        content = ErrorResponse(error=str(exc.detail)).model_dump()
    return JSONResponse(content, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = _format_validation_error(errors[0]) if errors else "Invalid request"
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
    return JSONResponse(ErrorResponse(error="Internal server error").model_dump(), status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
