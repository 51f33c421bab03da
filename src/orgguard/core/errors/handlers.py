"""RFC 7807 Problem Details responses.

Every error leaves the API as ``application/problem+json``. Domain errors
keep their message verbatim in ``detail`` and their ``error_code`` as the
last segment of ``type``, so clients can branch on either.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from orgguard.config import settings
from orgguard.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()

PROBLEM_JSON = "application/problem+json"

HTTP_UNPROCESSABLE = 422


class FieldError(BaseModel):
    """One invalid field in a request body, path or query."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details body.

    Extension members (``required_permissions``, ``slug``, ...) come from
    the exception's ``details`` and are added at the top level.
    """

    model_config = {"extra": "allow"}

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None


def problem_response(
    request: Request,
    status_code: int,
    error_code: str,
    detail: str,
    extensions: dict[str, Any] | None = None,
    errors: list[FieldError] | None = None,
) -> JSONResponse:
    """Render a Problem Details response for ``request``."""
    problem = ProblemDetail(
        type=f"{settings.api_docs_base_url}/errors/{error_code}",
        title=error_code.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        # Set by RequestIdMiddleware
        trace_id=getattr(request.state, "trace_id", None),
    )
    content = problem.model_dump(exclude_none=True)
    for key, value in (extensions or {}).items():
        content.setdefault(key, value)
    return JSONResponse(status_code=status_code, content=content, media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    )
    return problem_response(
        request,
        exc.status_code,
        exc.error_code,
        exc.message,
        extensions=exc.details,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report each invalid field, without the ``body`` location prefix."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body")
            or "unknown",
            message=error.get("msg", "Invalid value"),
            type=error.get("type"),
        )
        for error in exc.errors()
    ]
    logger.info("request_invalid", path=request.url.path, fields=[e.field for e in errors])
    return problem_response(
        request,
        HTTP_UNPROCESSABLE,
        "validation_error",
        "Request validation failed",
        errors=errors,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes and unsupported methods, in the same shape as domain errors."""
    error_code = {
        status.HTTP_404_NOT_FOUND: "not_found",
        status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    }.get(exc.status_code, "http_error")
    response = problem_response(request, exc.status_code, error_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure; the client only learns that something went wrong."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the Problem Details handlers on ``app``."""
    handlers: dict[type[Exception], Any] = {
        AppException: app_exception_handler,
        RequestValidationError: validation_exception_handler,
        StarletteHTTPException: http_exception_handler,
        Exception: unhandled_exception_handler,
    }
    for exc_class, handler in handlers.items():
        app.add_exception_handler(exc_class, cast("ExceptionHandler", handler))
