"""
OnboardingRecord Entity

Per-employee checklist and document-approval state.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import OnboardingStatus


class OnboardingRecord(SQLModel, table=True):
    """
    OnboardingRecord entity - one per (employee, company).

    Business Rules:
    - Created lazily on first document upload or accepted invitation
    - not_started -> in_progress sets started_at
    - -> completed sets completed_at and never reverts
    - Tasks, policy acknowledgments and documents hang off the record
    """

    __tablename__ = "onboarding_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    employee_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    company_id: UUID = Field(foreign_key="companies.id", nullable=False, index=True)

    status: OnboardingStatus = Field(default=OnboardingStatus.not_started)

    feedback: Optional[str] = None
    satisfaction_score: Optional[int] = None

    # Timestamps
    started_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "company_id", name="uq_onboarding_employee_company"),
        Index("idx_onboarding_company_status", "company_id", "status"),
    )
