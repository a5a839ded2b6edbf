"""
Global Exception Handlers for the page CMS

Translates lifecycle errors into one JSON error envelope.

Error Response Format:
{
    "error": {
        "status_code": 409,
        "error_code": "DUPLICATE_URL",
        "message": "Content with url '/about' already exists",
        "type": "Conflict",
        "details": {"resource_type": "Content", "field": "url", "value": "/about"},
        "path": "/api/v1/cms/landing-pages"
    }
}

``error_code`` names the lifecycle rule that failed, so editors can show a
specific message for a taken URL, a missing revision and so on.
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pagecms.exceptions import CMSException

logger = logging.getLogger(__name__)

ERROR_TYPES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
}


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, "Error")


def create_error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """Build the ``{"error": {...}}`` body; empty ``details`` and ``path`` are left out."""
    body: dict[str, Any] = {
        "status_code": status_code,
        "error_code": error_code,
        "message": message,
        "type": get_error_type(status_code),
    }
    if details:
        body["details"] = details
    if path:
        body["path"] = path
    return JSONResponse(status_code=status_code, content={"error": body})


async def cms_exception_handler(request: Request, exc: CMSException) -> JSONResponse:
    # Storage failures are ours, everything else is a rejected request
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    return create_error_response(exc.status_code, exc.error_code, exc.message, exc.details, request.url.path)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")

    return create_error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail), path=request.url.path)


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Report each invalid field of a request body or query."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Rejected {request.method} {request.url.path}: {len(errors)} invalid field(s)")

    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "REQUEST_VALIDATION",
        "Validation error",
        {"validation_errors": errors},
        request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    # Internal details stay in the log
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred. Please try again later.",
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(CMSException, cms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
