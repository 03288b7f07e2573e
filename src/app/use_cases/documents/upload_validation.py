"""
Upload checks: size ceiling and per-category content type allow-lists.
"""

import os
from typing import FrozenSet, Optional

from src.libs.result import Error

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

PDF = "application/pdf"
DOC = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EMPLOYEE_DOCUMENT_TYPES: FrozenSet[str] = frozenset(
    {PDF, DOC, DOCX, "image/jpeg", "image/jpg", "image/png"}
)
POLICY_TYPES: FrozenSet[str] = frozenset({PDF, DOC, DOCX, "text/plain"})
RESUME_TYPES: FrozenSet[str] = frozenset({PDF, DOC, DOCX})


def normalize_content_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def safe_filename(filename: Optional[str], default: str = "upload") -> str:
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    name = name.replace('"', "").replace("\r", "").replace("\n", "")
    return name[:255] or default


def validate_upload(
    size: int,
    content_type: str,
    allowed: FrozenSet[str],
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> Optional[Error]:
    """None when the upload is acceptable, otherwise the validation error"""
    if size == 0:
        return Error("EMPTY_FILE", "Uploaded file is empty")
    if size > max_bytes:
        return Error(
            "FILE_TOO_LARGE",
            f"File size must be at most {max_bytes // (1024 * 1024)}MB",
        )
    if normalize_content_type(content_type) not in allowed:
        return Error("INVALID_FILE_TYPE", "File type is not allowed")
    return None
