"""
Tagged metadata attached to stored files, one variant per document category.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .enums import PolicyFileType


class PolicyMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: Literal["policy"] = "policy"
    file_type: PolicyFileType
    original_name: str
    text_length: Optional[int] = None
    word_count: Optional[int] = None
    extraction_method: Optional[str] = None


class EmployeeDocumentMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: Literal["employee_document"] = "employee_document"
    document_type: str
    original_name: str


class ResumeMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: Literal["resume"] = "resume"
    applicant_name: str
    applicant_email: str
    position: str
    phone: Optional[str] = None
    cover_letter: Optional[str] = None
    notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None


FileMetadata = Annotated[
    Union[PolicyMetadata, EmployeeDocumentMetadata, ResumeMetadata],
    Field(discriminator="category"),
]

_file_metadata_adapter = TypeAdapter(FileMetadata)


def parse_file_metadata(raw: dict) -> FileMetadata:
    """Validate a raw metadata dict; raises pydantic.ValidationError on unknown shapes"""
    return _file_metadata_adapter.validate_python(raw)
