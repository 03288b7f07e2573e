"""
Onboarding Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel

from src.app.services.onboarding_progress import ProgressSummary, summarize
from src.domain.entities import (
    OnboardingDocument,
    OnboardingRecord,
    OnboardingTask,
    PolicyAcknowledgment,
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _enum(value) -> Optional[str]:
    return getattr(value, "value", value)


class TaskResponse(BaseModel):
    task_id: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    required: bool
    status: str
    completed_at: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_entity(cls, task: OnboardingTask) -> "TaskResponse":
        return cls(
            task_id=task.task_id,
            title=task.title,
            description=task.description,
            category=_enum(task.category),
            required=task.required,
            status=_enum(task.status),
            completed_at=_iso(task.completed_at),
            notes=task.notes,
        )


class PolicyResponse(BaseModel):
    policy_name: str
    policy_url: Optional[str] = None
    required: bool
    acknowledged: bool
    acknowledged_at: Optional[str] = None

    @classmethod
    def from_entity(cls, policy: PolicyAcknowledgment) -> "PolicyResponse":
        return cls(
            policy_name=policy.policy_name,
            policy_url=policy.policy_url,
            required=policy.required,
            acknowledged=policy.acknowledged,
            acknowledged_at=_iso(policy.acknowledged_at),
        )


class DocumentResponse(BaseModel):
    id: str
    document_type: str
    filename: str
    content_type: str
    size: int
    status: str
    uploaded_at: str
    verified_by: Optional[str] = None
    verified_at: Optional[str] = None
    rejection_reason: Optional[str] = None

    @classmethod
    def from_entity(cls, document: OnboardingDocument) -> "DocumentResponse":
        return cls(
            id=str(document.id),
            document_type=document.document_type,
            filename=document.filename,
            content_type=document.content_type,
            size=document.size,
            status=_enum(document.status),
            uploaded_at=document.uploaded_at.isoformat(),
            verified_by=document.verified_by,
            verified_at=_iso(document.verified_at),
            rejection_reason=document.rejection_reason,
        )


class OnboardingProgressResponse(BaseModel):
    """One employee's full checklist"""

    id: str
    employee_id: str
    company_id: str
    status: str
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    feedback: Optional[str] = None
    tasks: List[TaskResponse]
    policies: List[PolicyResponse]
    documents: List[DocumentResponse]
    progress: ProgressSummary

    @classmethod
    def build(
        cls,
        record: OnboardingRecord,
        tasks: Sequence[OnboardingTask],
        policies: Sequence[PolicyAcknowledgment],
        documents: Sequence[OnboardingDocument],
    ) -> "OnboardingProgressResponse":
        return cls(
            id=str(record.id),
            employee_id=str(record.employee_id),
            company_id=str(record.company_id),
            status=_enum(record.status),
            started_at=_iso(record.started_at),
            completed_at=_iso(record.completed_at),
            feedback=record.feedback,
            tasks=[TaskResponse.from_entity(t) for t in tasks],
            policies=[PolicyResponse.from_entity(p) for p in policies],
            documents=[DocumentResponse.from_entity(d) for d in documents],
            progress=summarize(record, tasks, policies),
        )


class EmployeeOnboardingSummary(BaseModel):
    """Row of the HR onboarding overview"""

    record_id: str
    employee_id: str
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    status: str
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    feedback: Optional[str] = None
    pending_documents: int
    progress: ProgressSummary


class FeedbackResponse(BaseModel):
    record_id: str
    feedback: str
    satisfaction_score: Optional[int] = None


class DashboardStatsResponse(BaseModel):
    total_employees: int
    active_onboarding: int
    completed_onboarding: int
    pending_tasks: int
