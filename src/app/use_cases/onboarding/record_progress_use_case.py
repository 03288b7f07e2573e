"""
Record Progress Use Cases

Employees tick off checklist tasks and acknowledge policies.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.onboarding_progress import apply_completion
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_company
from src.domain.entities import CompletionPolicy, OnboardingRecord, TaskStatus

from .dtos import OnboardingProgressResponse

logger = logging.getLogger(__name__)


async def _finish(
    uow: UnitOfWork, record: OnboardingRecord, policy: CompletionPolicy, now: datetime
) -> OnboardingProgressResponse:
    tasks = await uow.onboarding.list_tasks(record.id)
    policies = await uow.onboarding.list_policies(record.id)
    documents = await uow.onboarding.list_documents(record.id)

    if apply_completion(record, policy, tasks, policies, documents, now):
        record = await uow.onboarding.update_record(record)

    await uow.commit()
    return OnboardingProgressResponse.build(record, tasks, policies, documents)


class RecordTaskCompletionUseCase:
    """
    Business Rules:
    - Completing an already completed task is a no-op, not an error
    - Unknown task IDs are not found
    - Completion policy is evaluated afterwards
    """

    def __init__(
        self,
        uow: UnitOfWork,
        completion_policy: CompletionPolicy = CompletionPolicy.single_approved_document,
    ):
        self.uow = uow
        self.completion_policy = completion_policy

    async def execute(self, identity: Identity, task_id: str) -> Result[OnboardingProgressResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        now = datetime.utcnow()

        async with self.uow:
            record = await self.uow.onboarding.get_record(identity.user_id, identity.company_id)
            if record is None:
                return Return.err(Error("ONBOARDING_NOT_FOUND", "Onboarding record not found"))

            tasks = await self.uow.onboarding.list_tasks(record.id)
            task = next((t for t in tasks if t.task_id == task_id), None)
            if task is None:
                return Return.err(Error("TASK_NOT_FOUND", "Task not found"))

            if task.status != TaskStatus.completed:
                task.status = TaskStatus.completed
                task.completed_at = now
                await self.uow.onboarding.update_task(task)

            return Return.ok(await _finish(self.uow, record, self.completion_policy, now))


class RecordPolicyAcknowledgmentUseCase:
    """
    Business Rules:
    - Acknowledging twice keeps the first timestamp
    - Unknown policy names are not found
    - Completion policy is evaluated afterwards
    """

    def __init__(
        self,
        uow: UnitOfWork,
        completion_policy: CompletionPolicy = CompletionPolicy.single_approved_document,
    ):
        self.uow = uow
        self.completion_policy = completion_policy

    async def execute(
        self, identity: Identity, policy_name: str
    ) -> Result[OnboardingProgressResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        now = datetime.utcnow()

        async with self.uow:
            record = await self.uow.onboarding.get_record(identity.user_id, identity.company_id)
            if record is None:
                return Return.err(Error("ONBOARDING_NOT_FOUND", "Onboarding record not found"))

            policies = await self.uow.onboarding.list_policies(record.id)
            policy = next((p for p in policies if p.policy_name == policy_name), None)
            if policy is None:
                return Return.err(Error("POLICY_NOT_FOUND", "Policy not found"))

            if not policy.acknowledged:
                policy.acknowledged = True
                policy.acknowledged_at = now
                await self.uow.onboarding.update_policy(policy)

            return Return.ok(await _finish(self.uow, record, self.completion_policy, now))
