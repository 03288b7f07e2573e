"""
Invitation Entity

Time-bounded offer of company membership with a pre-assigned role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import InvitationStatus, UserRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity.

    Business Rules:
    - Created by an HR-capable user of the company
    - Expires after INVITATION_TTL_DAYS (7 by default)
    - At most one pending invitation per (email, company), enforced by a
      partial unique index
    - Flipped to accepted exactly once, by the user whose email matches
    - Generated mailbox password is stored only as a bcrypt hash
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    company_id: UUID = Field(foreign_key="companies.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)
    name: Optional[str] = Field(default=None, max_length=255)

    role: UserRole = Field(default=UserRole.employee)
    department: Optional[str] = Field(default=None, max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)
    invited_by: UUID = Field(foreign_key="users.id", nullable=False)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Generated mailbox credentials
    generated_email: Optional[str] = Field(default=None, max_length=255)
    temporary_password_hash: Optional[str] = Field(default=None, max_length=60)
    email_credentials_generated: bool = Field(default=False)

    # Timestamps
    invited_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_invitation_pending_email_company",
            "email",
            "company_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_invitation_company_status", "company_id", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
