"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that turn reorder
engine failures, request validation errors and unexpected exceptions into
application/problem+json responses.
"""

from __future__ import annotations

from typing import Dict, Type
import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sample_order.logic.errors import (
    InvariantViolationError,
    OutOfRangeError,
    ReorderError,
    UnknownCodeError,
)

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)

# Single source of truth for mapping engine errors to HTTP statuses
REORDER_ERROR_MAP: Dict[Type[ReorderError], Dict[str, object]] = {
    OutOfRangeError: {"status": 422, "title": "Unprocessable Entity"},
    UnknownCodeError: {"status": 404, "title": "Not Found"},
    InvariantViolationError: {"status": 409, "title": "Conflict"},
}


def problem_for_reorder_error(exc: ReorderError) -> Dict[str, object]:
    mapping = REORDER_ERROR_MAP.get(type(exc), {"status": 400, "title": "Bad Request"})
    problem: Dict[str, object] = {
        "title": mapping["title"],
        "status": mapping["status"],
        "detail": exc.message,
        "code": exc.code,
    }
    for key, value in exc.detail.items():
        problem.setdefault(key, value)
    return problem


async def handle_reorder_error(request: Request, exc: ReorderError) -> JSONResponse:  # noqa: D401
    problem = problem_for_reorder_error(exc)
    logger.info(
        "error_handler.handle code=%s status=%s path=%s",
        problem["code"],
        problem["status"],
        request.url.path,
    )
    return JSONResponse(problem, status_code=int(problem["status"]), media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status_code = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"title": "Error", "status": status_code, "detail": str(exc.detail or "")}
    return JSONResponse(
        detail,
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "code": "REQUEST_VALIDATION_FAILED",
        "errors": [
            {"loc": list(e.get("loc", ())), "msg": str(e.get("msg", "")), "type": str(e.get("type", ""))}
            for e in exc.errors()
        ],
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "REORDER_ERROR_MAP",
    "problem_for_reorder_error",
    "handle_reorder_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
