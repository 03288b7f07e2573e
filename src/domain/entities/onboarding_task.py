"""
OnboardingTask Entity

A checklist item copied from the company template into a record.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import TaskCategory, TaskStatus


class OnboardingTask(SQLModel, table=True):
    """
    OnboardingTask entity.

    Business Rules:
    - task_id is the template id, unique within a record
    - Ordered by position
    - Completing an already completed task is a no-op
    """

    __tablename__ = "onboarding_tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    record_id: UUID = Field(foreign_key="onboarding_records.id", nullable=False, index=True)

    task_id: str = Field(max_length=100)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    required: bool = Field(default=True)
    position: int = Field(default=0)

    status: TaskStatus = Field(default=TaskStatus.pending)
    notes: Optional[str] = None
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("record_id", "task_id", name="uq_onboarding_task_record_task"),
    )
