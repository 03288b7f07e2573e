"""
HR onboarding overview and feedback.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.onboarding_progress import summarize
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability
from src.domain.entities import DocumentStatus

from .dtos import EmployeeOnboardingSummary, FeedbackResponse

logger = logging.getLogger(__name__)


class ListOnboardingRecordsUseCase:
    """HR sees every onboarding record of the company with progress counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[List[EmployeeOnboardingSummary]]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            records = await self.uow.onboarding.list_records_by_company(identity.company_id)
            employees = {
                u.id: u
                for u in await self.uow.users.get_by_ids([r.employee_id for r in records])
            }

            summaries = []
            for record in records:
                tasks = await self.uow.onboarding.list_tasks(record.id)
                policies = await self.uow.onboarding.list_policies(record.id)
                documents = await self.uow.onboarding.list_documents(record.id)
                employee = employees.get(record.employee_id)
                summaries.append(
                    EmployeeOnboardingSummary(
                        record_id=str(record.id),
                        employee_id=str(record.employee_id),
                        employee_name=employee.name if employee else None,
                        employee_email=employee.email if employee else None,
                        department=employee.department if employee else None,
                        position=employee.position if employee else None,
                        status=record.status.value,
                        started_at=record.started_at.isoformat() if record.started_at else None,
                        completed_at=(
                            record.completed_at.isoformat() if record.completed_at else None
                        ),
                        feedback=record.feedback,
                        pending_documents=sum(
                            1 for d in documents if d.status == DocumentStatus.pending
                        ),
                        progress=summarize(record, tasks, policies),
                    )
                )
            return Return.ok(summaries)


class ProvideFeedbackUseCase:
    """HR leaves feedback on an employee's onboarding"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        identity: Identity,
        employee_id: UUID,
        feedback: str,
        satisfaction_score: Optional[int] = None,
    ) -> Result[FeedbackResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        if not feedback or not feedback.strip():
            return Return.err(Error("VALIDATION_ERROR", "Feedback is required"))

        async with self.uow:
            record = await self.uow.onboarding.get_record(employee_id, identity.company_id)
            if record is None:
                return Return.err(Error("ONBOARDING_NOT_FOUND", "Onboarding record not found"))

            record.feedback = feedback.strip()
            if satisfaction_score is not None:
                record.satisfaction_score = satisfaction_score
            record.updated_at = datetime.utcnow()
            record = await self.uow.onboarding.update_record(record)
            await self.uow.commit()

            logger.info(f"Feedback recorded on onboarding {record.id} by {identity.user_id}")
            return Return.ok(
                FeedbackResponse(
                    record_id=str(record.id),
                    feedback=record.feedback,
                    satisfaction_score=record.satisfaction_score,
                )
            )
