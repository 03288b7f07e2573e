"""
PolicyAcknowledgment Entity

Whether an employee has read one company policy.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, SQLModel


class PolicyAcknowledgment(SQLModel, table=True):
    """
    PolicyAcknowledgment entity.

    Business Rules:
    - policy_name is unique within a record
    - Acknowledging twice keeps the first acknowledged_at
    """

    __tablename__ = "policy_acknowledgments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    record_id: UUID = Field(foreign_key="onboarding_records.id", nullable=False, index=True)

    policy_name: str = Field(max_length=255)
    policy_url: Optional[str] = None
    required: bool = Field(default=True)
    position: int = Field(default=0)

    acknowledged: bool = Field(default=False)
    acknowledged_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("record_id", "policy_name", name="uq_policy_ack_record_policy"),
    )
