# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - errors.py: Error codes, status tables and the ErrorResponse body
# - common.py: Pagination and list query helpers
# - files.py: File validation responses
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import PaginationQuery, split_comma_list
from .errors import (
    CODE_TO_STATUS,
    STATUS_TO_CODE,
    ErrorCode,
    ErrorResponse,
    code_to_status,
    error_schema_for,
    status_to_code,
)
from .files import AcceptedFile, FileValidationResponse, MimeTypeList

__all__ = [
    # Errors
    "CODE_TO_STATUS",
    "STATUS_TO_CODE",
    "ErrorCode",
    "ErrorResponse",
    "code_to_status",
    "error_schema_for",
    "status_to_code",
    # Common
    "PaginationQuery",
    "split_comma_list",
    # Files
    "AcceptedFile",
    "FileValidationResponse",
    "MimeTypeList",
]
