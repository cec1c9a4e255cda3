# =============================================================================
# core/models/errors.py - Error Contract
# =============================================================================
# The error codes and the single JSON shape every error response uses:
#
#   { "code": "NOT_FOUND", "message": "...", "requestId": "req_1234" }
#
# Each code has exactly one canonical HTTP status (see CODE_TO_STATUS).
# The reverse direction is lossy: six codes share 403, so a bare status can
# only be approximated back to a code (see STATUS_TO_CODE).
# =============================================================================

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, create_model


class ErrorCode(str, Enum):
    """Machine-readable error codes (closed set)."""
    BAD_REQUEST = "BAD_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    USAGE_EXCEEDED = "USAGE_EXCEEDED"
    DISABLED = "DISABLED"
    NOT_FOUND = "NOT_FOUND"
    NOT_UNIQUE = "NOT_UNIQUE"
    RATE_LIMITED = "RATE_LIMITED"
    UNAUTHORIZED = "UNAUTHORIZED"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    EXPIRED = "EXPIRED"
    DELETE_PROTECTED = "DELETE_PROTECTED"


# Canonical status for every code
CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.DISABLED: 403,
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.INSUFFICIENT_PERMISSIONS: 403,
    ErrorCode.USAGE_EXCEEDED: 403,
    ErrorCode.EXPIRED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.NOT_UNIQUE: 409,
    ErrorCode.DELETE_PROTECTED: 412,
    ErrorCode.PRECONDITION_FAILED: 412,
    ErrorCode.RATE_LIMITED: 429,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
}

# Partial reverse mapping, only used for framework errors that carry a bare status
STATUS_TO_CODE: dict[int, ErrorCode] = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


def code_to_status(code: ErrorCode | str) -> int:
    """
    Canonical HTTP status for an error code.

    Total: unknown codes (including raw strings outside the enum) map to 500.
    """
    try:
        return CODE_TO_STATUS.get(ErrorCode(code), 500)
    except ValueError:
        return 500


def status_to_code(status: int) -> ErrorCode:
    """Approximate an error code from a bare HTTP status."""
    return STATUS_TO_CODE.get(status, ErrorCode.INTERNAL_SERVER_ERROR)


# =============================================================================
# Response Schema
# =============================================================================

class ErrorResponse(BaseModel):
    """
    Body of every error response.

    Example:
        {
            "code": "RATE_LIMITED",
            "message": "too many requests",
            "requestId": "req_1234"
        }
    """
    code: ErrorCode = Field(
        ...,
        description="A machine readable error code.",
        examples=["INTERNAL_SERVER_ERROR"],
    )
    message: str = Field(
        ...,
        description="A human readable explanation of what went wrong",
    )
    request_id: str = Field(
        default="",
        alias="requestId",
        description="Please always include the requestId in your error report",
        examples=["req_1234"],
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        """Serialize with the wire field names."""
        return self.model_dump(mode="json", by_alias=True)


@lru_cache
def error_schema_for(*codes: ErrorCode) -> type[BaseModel]:
    """
    Build an ErrorResponse variant whose `code` is limited to `codes`.

    Identical code sets return the same class, so the model is only
    emitted once in the OpenAPI document.

    Used to document the errors a route can actually return:

        @router.get("/x", responses={404: {"model": error_schema_for(ErrorCode.NOT_FOUND)}})
    """
    if not codes:
        raise ValueError("error_schema_for() needs at least one code")

    values = tuple(ErrorCode(c).value for c in codes)
    name = "Error" + "".join(v.title().replace("_", "") for v in values)

    return create_model(
        name,
        __config__=ConfigDict(populate_by_name=True),
        code=(
            Literal[values],
            Field(..., description="A machine readable error code.", examples=[values[0]]),
        ),
        message=(str, Field(..., description="A human readable explanation of what went wrong")),
        request_id=(
            str,
            Field(
                default="",
                alias="requestId",
                description="Please always include the requestId in your error report",
                examples=["req_1234"],
            ),
        ),
    )
