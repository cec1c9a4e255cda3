# =============================================================================
# core/services/file_rules.py - Upload Validation Rules
# =============================================================================
# Static rules for uploaded files and a pure checker that reports every
# violation as a FastAPI-style validation issue:
#
#   {"type": "value_error", "loc": ("body", "files", 0), "msg": "...", "input": "x.exe"}
#
# Routes raise these as a RequestValidationError, so failures come back as
# BAD_REQUEST "files.0: File type is not allowed".
#
# Two rules exist:
# - ASSET_FILE_RULE: media and documents up to 5 GB
# - PROCESSED_FILE_RULE: text documents up to 10 MB
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

GB = 1024 * 1024 * 1024
MB = 1024 * 1024

# Documents we can extract text from
PROCESSED_MIME_TYPES: tuple[str, ...] = (
    "application/pdf",  # .pdf
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",  # .docx
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",  # .pptx
    "application/vnd.oasis.opendocument.text",  # .odt
    "application/vnd.oasis.opendocument.presentation",  # .odp
    "text/html",  # .html
    "text/html;charset=utf-8",
    "text/markdown",  # .md
    "text/plain",  # .txt
    "text/plain;charset=utf-8",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",  # .xlsx
)

ASSET_MIME_TYPES: tuple[str, ...] = PROCESSED_MIME_TYPES + (
    # images
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    "image/avif",
    "image/apng",
    "image/bmp",
    "image/tiff",
    "image/tiff;baseline",
    "image/tiff;subtype=planar",
    "image/tiff;subtype=rgb",
    # video
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/avi",
    "video/mov",
    "video/wmv",
    "video/flv",
    "video/mkv",
    # audio
    "audio/mpeg",
    "audio/wav",
    "audio/ogg",
    "audio/webm",
    # stream
    "application/octet-stream",
)

_PARAM_SEPARATOR = re.compile(r"\s*;\s*")


def normalize_mime_type(value: str | None) -> str:
    """Lower-case and drop whitespace around ';' ("Text/Plain; charset=UTF-8" -> "text/plain;charset=utf-8")."""
    if not value:
        return ""
    return _PARAM_SEPARATOR.sub(";", value.strip().lower())


@dataclass(frozen=True)
class FileInfo:
    """What the rules look at for one upload."""
    filename: str
    content_type: str | None
    size: int


@dataclass(frozen=True)
class FileRule:
    """Size, type and count limits for one kind of upload."""
    name: str
    max_size: int
    max_size_label: str
    allowed_mime_types: tuple[str, ...]
    min_count: int = 1
    max_count: int = 10
    _allowed: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_allowed", frozenset(normalize_mime_type(m) for m in self.allowed_mime_types)
        )

    def allows_type(self, content_type: str | None) -> bool:
        return normalize_mime_type(content_type) in self._allowed


ASSET_FILE_RULE = FileRule(
    name="asset",
    max_size=5 * GB,
    max_size_label="5GB",
    allowed_mime_types=ASSET_MIME_TYPES,
)

PROCESSED_FILE_RULE = FileRule(
    name="processed",
    max_size=10 * MB,
    max_size_label="10MB",
    allowed_mime_types=PROCESSED_MIME_TYPES,
)

FILE_RULES: dict[str, FileRule] = {
    ASSET_FILE_RULE.name: ASSET_FILE_RULE,
    PROCESSED_FILE_RULE.name: PROCESSED_FILE_RULE,
}


def _issue(loc: tuple[Any, ...], msg: str, value: Any) -> dict[str, Any]:
    return {"type": "value_error", "loc": loc, "msg": msg, "input": value}


def check_files(
    files: Iterable[FileInfo],
    rule: FileRule,
    field_name: str = "files",
) -> list[dict[str, Any]]:
    """
    Check uploads against a rule.

    Count problems are reported first, then per-file size and type problems
    in upload order. An empty list means every file passed.
    """
    files = list(files)
    base = ("body", field_name)
    issues: list[dict[str, Any]] = []

    if len(files) < rule.min_count:
        issues.append(_issue(base, f"Min file count is {rule.min_count}", len(files)))
    if len(files) > rule.max_count:
        issues.append(_issue(base, f"Max file count is {rule.max_count}", len(files)))

    for index, info in enumerate(files):
        if info.size > rule.max_size:
            issues.append(
                _issue(base + (index,), f"File size is bigger than {rule.max_size_label}", info.filename)
            )
        if not rule.allows_type(info.content_type):
            issues.append(_issue(base + (index,), "File type is not allowed", info.filename))

    return issues


def allowed_mime_types(kinds: Iterable[str]) -> list[str]:
    """Distinct MIME types allowed by the named rules, in declaration order."""
    seen: dict[str, None] = {}
    for kind in kinds:
        for mime in FILE_RULES[kind].allowed_mime_types:
            seen.setdefault(mime, None)
    return list(seen)
