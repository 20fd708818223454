"""Error Handlers — map task/tag failures onto HTTP responses.

Invariants:
    - TaskControllerError → its own http_status and to_response() envelope
    - SQLAlchemyError that escaped a store → mapped like any store failure (409/503)
    - RequestValidationError → 400 with one entry per offending field, named as sent
    - Anything else → 500 without internal details

Design Decisions:
    - Client mistakes (4xx) logged at warning, store/transaction failures at error
    - Log records carry task_id / tag_id so the JSON formatter surfaces them
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from task_controller.core.errors import (
    ErrorCategory, ErrorSeverity, TaskControllerError,
)
from task_controller.infrastructure.database import map_db_error

logger = logging.getLogger(__name__)

_RESOURCE_LOG_KEYS = {"Task": "task_id", "Tag": "tag_id"}
_REQUEST_PARTS = ("body", "query", "path")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TaskControllerError, _handle_domain_error)
    app.add_exception_handler(SQLAlchemyError, _handle_unmapped_db_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_domain_error(request: Request, exc: TaskControllerError):
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra=_log_extra(request, exc),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_unmapped_db_error(request: Request, exc: SQLAlchemyError):
    return await _handle_domain_error(
        request, map_db_error(exc, f"{request.method} {request.url.path}"),
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [_field_error(e) for e in exc.errors()]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _log_extra(request: Request, exc: TaskControllerError) -> dict:
    extra = {"error_code": exc.code, "path": request.url.path}
    ctx = exc.context
    if ctx.operation:
        extra["operation"] = ctx.operation
    key = _RESOURCE_LOG_KEYS.get(ctx.resource_type or "")
    if key and ctx.resource_id:
        extra[key] = ctx.resource_id
    return extra


def _field_error(error: dict) -> dict:
    """One validation failure, located by the name the client used ("tagIds.0")."""
    loc = list(error["loc"])
    if loc and loc[0] in _REQUEST_PARTS:
        loc = loc[1:]
    return {
        "field": ".".join(str(part) for part in loc) or "request",
        "message": error["msg"],
        "type": error["type"],
    }
