"""
Company Entity

A tenant: the isolation boundary for all business data.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from .enums import SubscriptionPlan, SubscriptionStatus, TaskCategory


class TaskTemplate(BaseModel):
    """Checklist task every new employee of the company receives"""

    id: str
    title: str
    description: Optional[str] = None
    required: bool = True
    order: int = 0
    category: TaskCategory = TaskCategory.documentation


class PolicyTemplate(BaseModel):
    """Policy every new employee of the company must read"""

    name: str
    url: Optional[str] = None
    file_id: Optional[str] = None
    required: bool = True


class Company(SQLModel, table=True):
    """
    Company entity - a tenant.

    Business Rules:
    - Domain is unique across companies
    - Never physically deleted; is_active is the soft-delete flag
    - Inactive companies are hidden from search and reject resume uploads
    - onboarding_tasks / onboarding_policies seed new onboarding records
    """

    __tablename__ = "companies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    domain: str = Field(unique=True, index=True, max_length=255)

    # Contact
    contact_email: str = Field(max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    industry: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    website: Optional[str] = Field(default=None, max_length=255)

    is_active: bool = Field(default=True)

    # Subscription
    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.free)
    subscription_status: SubscriptionStatus = Field(default=SubscriptionStatus.active)
    subscription_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Settings
    allow_self_registration: bool = Field(default=False)
    require_email_verification: bool = Field(default=True)
    custom_domain: Optional[str] = Field(default=None, max_length=255)

    # Onboarding template
    welcome_message: Optional[str] = None
    onboarding_tasks: Optional[list] = Field(default=None, sa_column=Column(JSON))
    onboarding_policies: Optional[list] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_company_active_name", "is_active", "name"),)

    def task_templates(self) -> List[TaskTemplate]:
        tasks = [TaskTemplate.model_validate(t) for t in self.onboarding_tasks or []]
        return sorted(tasks, key=lambda t: t.order)

    def policy_templates(self) -> List[PolicyTemplate]:
        return [PolicyTemplate.model_validate(p) for p in self.onboarding_policies or []]
