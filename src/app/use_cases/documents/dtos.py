"""
Document Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.onboarding.dtos import DocumentResponse
from src.domain.entities import ResumeMetadata, StoredFile


# ============================================================================
# Command DTOs
# ============================================================================


class UploadedFile(BaseModel):
    """A file received from a client, already read into memory"""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class ResumeSubmission(BaseModel):
    """Applicant details sent along with a resume"""

    name: str
    email: str
    position: str
    phone: Optional[str] = None
    cover_letter: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class FileDownload(BaseModel):
    filename: str
    content_type: str
    data: bytes


class SubmitDocumentResponse(BaseModel):
    message: str
    document: DocumentResponse
    onboarding_status: str


class CompanyDocumentResponse(DocumentResponse):
    """Document row in the HR review queue"""

    employee_id: str
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None


class ReviewDocumentResponse(BaseModel):
    document: DocumentResponse
    onboarding_status: str


class DeleteFileResponse(BaseModel):
    status: str
    deleted_ids: List[str] = []


class PolicyUploadResponse(BaseModel):
    policy_file_id: str
    text_file_id: Optional[str] = None
    filename: str
    text_extracted: bool
    text_length: int = 0
    word_count: int = 0
    extraction_method: Optional[str] = None
    warnings: List[str] = []


class PolicyFileResponse(BaseModel):
    id: str
    filename: str
    content_type: str
    size: int
    upload_date: str
    text_file_id: Optional[str] = None
    text_length: Optional[int] = None
    word_count: Optional[int] = None


class PolicyListResponse(BaseModel):
    files: List[PolicyFileResponse]
    total: int


class PolicyTextResponse(BaseModel):
    file_id: str
    text: str


class ResumeResponse(BaseModel):
    id: str
    filename: str
    content_type: str
    size: int
    status: str
    upload_date: str
    applicant_name: str
    applicant_email: str
    position: str
    phone: Optional[str] = None
    cover_letter: Optional[str] = None
    notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[str] = None

    @classmethod
    def from_entity(cls, stored_file: StoredFile) -> "ResumeResponse":
        metadata = stored_file.metadata_model
        if not isinstance(metadata, ResumeMetadata):
            raise ValueError(f"File {stored_file.id} is not a resume")
        return cls(
            id=str(stored_file.id),
            filename=stored_file.filename,
            content_type=stored_file.content_type,
            size=stored_file.size,
            status=stored_file.status or "pending",
            upload_date=stored_file.upload_date.isoformat(),
            applicant_name=metadata.applicant_name,
            applicant_email=metadata.applicant_email,
            position=metadata.position,
            phone=metadata.phone,
            cover_letter=metadata.cover_letter,
            notes=metadata.notes,
            reviewed_by=metadata.reviewed_by,
            reviewed_at=metadata.reviewed_at.isoformat() if metadata.reviewed_at else None,
        )
