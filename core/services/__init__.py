# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .file_rules import (
    ASSET_FILE_RULE,
    FILE_RULES,
    PROCESSED_FILE_RULE,
    FileInfo,
    FileRule,
    allowed_mime_types,
    check_files,
)

__all__ = [
    "ASSET_FILE_RULE",
    "FILE_RULES",
    "PROCESSED_FILE_RULE",
    "FileInfo",
    "FileRule",
    "allowed_mime_types",
    "check_files",
]
