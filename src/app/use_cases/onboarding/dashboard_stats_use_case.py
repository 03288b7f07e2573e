from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability
from src.domain.entities import DocumentStatus, OnboardingStatus, UserRole

from .dtos import DashboardStatsResponse


class DashboardStatsUseCase:
    """
    HR dashboard counters.

    pending_tasks counts documents awaiting review plus pending invitations.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[DashboardStatsResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        company_id = identity.company_id
        async with self.uow:
            total_employees = await self.uow.users.count_by_company(
                company_id, role=UserRole.employee
            )
            active = await self.uow.onboarding.count_records_by_status(
                company_id, OnboardingStatus.in_progress
            )
            completed = await self.uow.onboarding.count_records_by_status(
                company_id, OnboardingStatus.completed
            )
            pending_documents = await self.uow.onboarding.count_documents_by_status(
                company_id, DocumentStatus.pending
            )
            pending_invitations = await self.uow.invitations.count_pending_by_company(company_id)

            return Return.ok(
                DashboardStatsResponse(
                    total_employees=total_employees,
                    active_onboarding=active,
                    completed_onboarding=completed,
                    pending_tasks=pending_documents + pending_invitations,
                )
            )
