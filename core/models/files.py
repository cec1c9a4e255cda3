# =============================================================================
# core/models/files.py - File Endpoint Schemas
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AcceptedFile(_CamelModel):
    """One uploaded file that passed validation."""
    filename: str = Field(..., examples=["report.pdf"])
    content_type: str = Field(..., examples=["application/pdf"])
    size: int = Field(..., ge=0, description="Size in bytes", examples=[48213])


class FileValidationResponse(_CamelModel):
    """Response for POST /files/assets and POST /files/processed."""
    rule: str = Field(..., examples=["asset"])
    files: list[AcceptedFile]


class MimeTypeList(_CamelModel):
    """Paginated list of allowed MIME types."""
    data: list[str]
    page: int
    per_page: int
    total: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "data": ["application/pdf", "text/plain"],
                "page": 1,
                "perPage": 10,
                "total": 2,
            }
        },
    )
