# =============================================================================
# core/models/common.py - Shared Query Schemas
# =============================================================================
# Query-string helpers reused by list endpoints:
# - PaginationQuery: page / perPage / filter with defaults
# - split_comma_list: "a,b" or ["a", "b,c"] -> ["a", "b", "c"]
# =============================================================================

from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def split_comma_list(value: Any) -> Any:
    """
    Normalize a list-like query value.

    Strings are split on commas (empty parts dropped), lists have each item
    split the same way, and anything else (e.g. None) is returned unchanged.
    """
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [part for item in value for part in split_comma_list(str(item))]
    return value


class PaginationQuery(BaseModel):
    """
    Pagination and filtering for list endpoints.

    Example:
        ?page=2&perPage=20&filter=pdf
    """
    page: int = Field(default=1, ge=1, description="Page number (1-indexed)", examples=[1])
    per_page: int = Field(
        default=10,
        ge=1,
        le=100,
        alias="perPage",
        description="Items per page",
        examples=[10],
    )
    filter: str | None = Field(default=None, description="Filter by name", examples=["some text"])

    model_config = ConfigDict(populate_by_name=True)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match against the filter (no filter matches all)."""
        if not self.filter:
            return True
        return self.filter.lower() in text.lower()

    def paginate(self, items: Sequence[T]) -> list[T]:
        return list(items[self.offset:self.offset + self.per_page])
