"""
Onboarding progress rules shared by every use case that mutates a record.

The completion predicate is chosen by configuration; whichever is chosen is
evaluated after each mutation through ``apply_completion`` and nowhere else.
"""

import logging
from datetime import datetime
from typing import List, Sequence, Tuple

from pydantic import BaseModel

from src.domain.entities import (
    Company,
    CompletionPolicy,
    DocumentStatus,
    OnboardingDocument,
    OnboardingRecord,
    OnboardingStatus,
    OnboardingTask,
    PolicyAcknowledgment,
    TaskStatus,
)

logger = logging.getLogger(__name__)


class ProgressSummary(BaseModel):
    total_tasks: int
    completed_tasks: int
    total_policies: int
    acknowledged_policies: int
    is_complete: bool


def resolve_completion_policy(value) -> CompletionPolicy:
    """Parse a configured policy name; unknown values raise ValueError"""
    if isinstance(value, CompletionPolicy):
        return value
    return CompletionPolicy(str(value).strip().lower())


def summarize(
    record: OnboardingRecord,
    tasks: Sequence[OnboardingTask],
    policies: Sequence[PolicyAcknowledgment],
) -> ProgressSummary:
    return ProgressSummary(
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.completed),
        total_policies=len(policies),
        acknowledged_policies=sum(1 for p in policies if p.acknowledged),
        is_complete=record.status == OnboardingStatus.completed,
    )


def completion_holds(
    policy: CompletionPolicy,
    tasks: Sequence[OnboardingTask],
    policies: Sequence[PolicyAcknowledgment],
    documents: Sequence[OnboardingDocument],
) -> bool:
    if policy == CompletionPolicy.single_approved_document:
        return any(d.status == DocumentStatus.verified for d in documents)
    tasks_done = all(t.status == TaskStatus.completed for t in tasks if t.required)
    policies_done = all(p.acknowledged for p in policies if p.required)
    return tasks_done and policies_done


def start_record(record: OnboardingRecord, now: datetime) -> bool:
    """not_started -> in_progress; returns True when the record changed"""
    if record.status != OnboardingStatus.not_started:
        return False
    record.status = OnboardingStatus.in_progress
    record.started_at = now
    record.updated_at = now
    return True


def apply_completion(
    record: OnboardingRecord,
    policy: CompletionPolicy,
    tasks: Sequence[OnboardingTask],
    policies: Sequence[PolicyAcknowledgment],
    documents: Sequence[OnboardingDocument],
    now: datetime,
) -> bool:
    """Complete the record when the predicate holds. Completion is monotonic."""
    if record.status == OnboardingStatus.completed:
        return False
    if not completion_holds(policy, tasks, policies, documents):
        return False
    if record.started_at is None:
        record.started_at = now
    record.status = OnboardingStatus.completed
    record.completed_at = now
    record.updated_at = now
    logger.info(
        f"Onboarding completed for employee {record.employee_id} "
        f"in company {record.company_id} ({policy.value})"
    )
    return True


def seed_checklist(
    record: OnboardingRecord, company: Company
) -> Tuple[List[OnboardingTask], List[PolicyAcknowledgment]]:
    """Copy the company template into new checklist rows for a record"""
    tasks = [
        OnboardingTask(
            record_id=record.id,
            task_id=template.id,
            title=template.title,
            description=template.description,
            category=template.category,
            required=template.required,
            position=position,
        )
        for position, template in enumerate(company.task_templates())
    ]
    policies = [
        PolicyAcknowledgment(
            record_id=record.id,
            policy_name=template.name,
            policy_url=template.url,
            required=template.required,
            position=position,
        )
        for position, template in enumerate(company.policy_templates())
    ]
    return tasks, policies


async def open_record(uow, employee_id, company: Company, now: datetime) -> OnboardingRecord:
    """Get or lazily create the employee's record and move it to in_progress.

    Runs inside the caller's unit of work; nothing is committed here.
    """
    record = await uow.onboarding.get_record(employee_id, company.id)
    if record is None:
        record = OnboardingRecord(employee_id=employee_id, company_id=company.id)
        start_record(record, now)
        record = await uow.onboarding.create_record(record)
        tasks, policies = seed_checklist(record, company)
        if tasks or policies:
            await uow.onboarding.add_checklist(tasks, policies)
        logger.info(f"Onboarding started for employee {employee_id} in company {company.id}")
        return record

    if start_record(record, now):
        record = await uow.onboarding.update_record(record)
    return record
