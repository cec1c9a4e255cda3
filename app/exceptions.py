# =============================================================================
# app/exceptions.py - Error Classification and Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error leaves the API with the same body:
#   { "code": <ErrorCode>, "message": <str>, "requestId": <str> }
#
# Classification, most specific first:
# 1. ApiError (raised by us, carries a code)      -> code_to_status(code)
# 2. HTTPException (framework, status + detail)   -> status_to_code(status)
# 3. Anything else                                -> INTERNAL_SERVER_ERROR / 500
# Request validation failures skip 1-3 and become BAD_REQUEST / 400.
# Requests matching no route become ApiError(NOT_FOUND) and go through 1.
# =============================================================================

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.context import RequestContext
from core.models.errors import (
    ErrorCode,
    ErrorResponse,
    code_to_status,
    status_to_code,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "something unexpected happened"

# Location prefixes FastAPI puts in front of validation error paths
VALIDATION_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


class ApiError(StarletteHTTPException):
    """
    Error raised by our own code.

    The status is always derived from the code, so handlers never have to
    guess it.

    Example:
        raise ApiError(ErrorCode.NOT_UNIQUE, "A workspace with this slug already exists")
    """

    def __init__(self, code: ErrorCode | str, message: str):
        self.code = ErrorCode(code)
        self.message = message
        super().__init__(status_code=code_to_status(self.code), detail=message)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


# =============================================================================
# Validation Message Extraction
# =============================================================================

def format_validation_issue(issue: dict[str, Any]) -> str:
    """
    Format one validation issue as "<path>: <message>".

    The leading location segment FastAPI adds ("body", "query", ...) is
    dropped, so a body field "email" reads as "email", not "body.email".
    """
    loc = list(issue["loc"])
    if len(loc) > 1 and loc[0] in VALIDATION_LOCATIONS:
        loc = loc[1:]
    path = ".".join(str(part) for part in loc)
    return f"{path}: {issue['msg']}"


def parse_validation_error_message(exc: RequestValidationError) -> str:
    """First validation issue as "<path>: <message>", or the raw error text."""
    try:
        return format_validation_issue(exc.errors()[0])
    except (IndexError, KeyError, TypeError):
        return str(exc)


def format_http_detail(detail: Any) -> str:
    """HTTPException detail as message text; dicts and lists become JSON."""
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, default=str)


# =============================================================================
# Classifier
# =============================================================================

def _log_server_error(exc: Exception, context: RequestContext, status: int) -> None:
    logger.error(
        f"Request {context.request_id or '-'} {context.method} {context.path} "
        f"failed with {status}: {exc!r}",
        exc_info=exc,
    )


def classify(exc: Exception, context: RequestContext) -> tuple[int, ErrorResponse]:
    """
    Map any exception to an HTTP status and an ErrorResponse body.

    Args:
        exc: The raised exception
        context: The request context; its request_id goes into the body

    Returns:
        (status, body). Errors with status >= 500 are also logged.
    """
    if isinstance(exc, RequestValidationError):
        return 400, ErrorResponse(
            code=ErrorCode.BAD_REQUEST,
            message=parse_validation_error_message(exc),
            request_id=context.request_id,
        )

    if isinstance(exc, ApiError):
        status = exc.status_code
        body = ErrorResponse(code=exc.code, message=exc.message, request_id=context.request_id)

    elif isinstance(exc, StarletteHTTPException):
        status = exc.status_code
        body = ErrorResponse(
            code=status_to_code(status),
            message=format_http_detail(exc.detail),
            request_id=context.request_id,
        )

    else:
        status = 500
        body = ErrorResponse(
            code=ErrorCode.INTERNAL_SERVER_ERROR,
            message=str(exc) or DEFAULT_ERROR_MESSAGE,
            request_id=context.request_id,
        )

    if status >= 500:
        _log_server_error(exc, context, status)

    return status, body


def not_found_error(path: str) -> ApiError:
    """Error for a request that matched no route."""
    return ApiError(ErrorCode.NOT_FOUND, f"The requested resource {path} was not found")


def error_response(context: RequestContext, code: ErrorCode | str, message: str) -> JSONResponse:
    """Build an error response for `code` without raising."""
    body = ErrorResponse(code=ErrorCode(code), message=message, request_id=context.request_id)
    return JSONResponse(status_code=code_to_status(code), content=body.to_dict())


def build_error_response(exc: Exception, context: RequestContext) -> JSONResponse:
    """Classify `exc` and render it as a JSONResponse."""
    status, body = classify(exc, context)
    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(status_code=status, content=body.to_dict(), headers=headers)


# =============================================================================
# Exception Handlers
# =============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle ApiError and framework HTTPExceptions.

    A 404 raised by the router itself (no route matched, so no endpoint in the
    scope) is turned into our NOT_FOUND error first.
    """
    if (
        exc.status_code == 404
        and not isinstance(exc, ApiError)
        and "endpoint" not in request.scope
    ):
        exc = not_found_error(request.url.path)

    return build_error_response(exc, RequestContext.from_request(request))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request schema validation failures (always 400 BAD_REQUEST)."""
    return build_error_response(exc, RequestContext.from_request(request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything no other handler caught."""
    return build_error_response(exc, RequestContext.from_request(request))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
