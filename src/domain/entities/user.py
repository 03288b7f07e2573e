"""
User Entity

A person who signed in with Google, optionally affiliated with one company.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email is unique and stored lowercase
    - Created on first OAuth sign-in as an unaffiliated employee
    - A user without company_id must be routed to onboarding
    - company_id, role, department and position are set when an invitation
      is accepted or a company is created
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = None

    company_id: Optional[UUID] = Field(default=None, foreign_key="companies.id", index=True)
    role: UserRole = Field(default=UserRole.employee)
    department: Optional[str] = Field(default=None, max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_company_role", "company_id", "role"),)
