"""
OnboardingDocument Entity

A verification document submitted by an employee, pointing at a stored file.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import DocumentStatus


class OnboardingDocument(SQLModel, table=True):
    """
    OnboardingDocument entity.

    Business Rules:
    - One document per type per record; resubmission replaces it
    - company_id and employee_id are copied from the record for tenant filters
    - Owner may delete only while not verified
    - Reject requires a reason
    """

    __tablename__ = "onboarding_documents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    record_id: UUID = Field(foreign_key="onboarding_records.id", nullable=False, index=True)
    company_id: UUID = Field(foreign_key="companies.id", nullable=False, index=True)
    employee_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    file_id: UUID = Field(foreign_key="stored_files.id", nullable=False)

    document_type: str = Field(max_length=100)
    filename: str = Field(max_length=255)
    content_type: str = Field(max_length=100)
    size: int

    status: DocumentStatus = Field(default=DocumentStatus.pending)
    verified_by: Optional[str] = Field(default=None, max_length=255)
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejection_reason: Optional[str] = None

    uploaded_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        UniqueConstraint("record_id", "document_type", name="uq_onboarding_document_type"),
        Index("idx_onboarding_document_company_status", "company_id", "status"),
    )
