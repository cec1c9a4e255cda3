# =============================================================================
# app/routers/files.py - File Validation Endpoints
# =============================================================================
# Checks uploads against the asset / processed file rules without storing
# anything, and lists the MIME types each rule accepts.
#
# Rule violations are raised as request validation errors, so they come back
# exactly like schema failures:
#   400 {"code": "BAD_REQUEST", "message": "files.0: File type is not allowed", ...}
# =============================================================================

import logging
import os
from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.exceptions import RequestValidationError

from core.models.common import PaginationQuery, split_comma_list
from core.models.errors import ErrorCode, error_schema_for
from core.models.files import AcceptedFile, FileValidationResponse, MimeTypeList
from core.services.file_rules import (
    ASSET_FILE_RULE,
    FILE_RULES,
    PROCESSED_FILE_RULE,
    FileInfo,
    FileRule,
    allowed_mime_types,
    check_files,
)

logger = logging.getLogger(__name__)

router = APIRouter()

BAD_REQUEST_RESPONSE = {400: {"model": error_schema_for(ErrorCode.BAD_REQUEST)}}


# =============================================================================
# Helper Functions
# =============================================================================

def _upload_size(upload: UploadFile) -> int:
    """Size in bytes, measured from the spooled file when the client sent none."""
    if upload.size is not None:
        return upload.size
    current = upload.file.tell()
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(current)
    return size


def _validate_uploads(uploads: list[UploadFile], rule: FileRule) -> FileValidationResponse:
    infos = [
        FileInfo(
            filename=upload.filename or "upload",
            content_type=upload.content_type,
            size=_upload_size(upload),
        )
        for upload in uploads
    ]

    issues = check_files(infos, rule)
    if issues:
        logger.info(f"Rejected {len(infos)} {rule.name} file(s): {issues[0]['msg']}")
        raise RequestValidationError(issues)

    return FileValidationResponse(
        rule=rule.name,
        files=[
            AcceptedFile(filename=i.filename, content_type=i.content_type or "", size=i.size)
            for i in infos
        ],
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/mime-types", response_model=MimeTypeList, responses=BAD_REQUEST_RESPONSE)
async def list_mime_types(
    kind: Annotated[
        list[str] | None,
        Query(description="Rule names, comma-separated or repeated (asset, processed)"),
    ] = None,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    per_page: Annotated[int, Query(alias="perPage", ge=1, le=100, description="Items per page")] = 10,
    filter: Annotated[str | None, Query(description="Substring to filter MIME types by")] = None,
):
    """
    List the MIME types accepted by one or more upload rules.

    Without `kind`, every rule is included.
    """
    kinds = split_comma_list(kind) or list(FILE_RULES)
    unknown = [k for k in kinds if k not in FILE_RULES]
    if unknown:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("query", "kind"),
            "msg": f"Unknown file kind '{unknown[0]}', expected one of: {', '.join(FILE_RULES)}",
            "input": kind,
        }])

    query = PaginationQuery(page=page, per_page=per_page, filter=filter)
    matching = [mime for mime in allowed_mime_types(kinds) if query.matches(mime)]

    return MimeTypeList(
        data=query.paginate(matching),
        page=query.page,
        per_page=query.per_page,
        total=len(matching),
    )


@router.post("/assets", response_model=FileValidationResponse, responses=BAD_REQUEST_RESPONSE)
async def validate_asset_files(
    files: Annotated[list[UploadFile], File(description="1-10 asset files (max 5GB each)")],
):
    """Validate media/document uploads against the asset rule."""
    return _validate_uploads(files, ASSET_FILE_RULE)


@router.post("/processed", response_model=FileValidationResponse, responses=BAD_REQUEST_RESPONSE)
async def validate_processed_files(
    files: Annotated[list[UploadFile], File(description="1-10 documents (max 10MB each)")],
):
    """Validate documents meant for text extraction against the processed rule."""
    return _validate_uploads(files, PROCESSED_FILE_RULE)
