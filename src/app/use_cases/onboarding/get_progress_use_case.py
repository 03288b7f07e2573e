from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_company

from .dtos import OnboardingProgressResponse


class GetProgressUseCase:
    """The caller's own onboarding checklist"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[OnboardingProgressResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            record = await self.uow.onboarding.get_record(identity.user_id, identity.company_id)
            if record is None:
                return Return.err(Error("ONBOARDING_NOT_FOUND", "Onboarding record not found"))

            tasks = await self.uow.onboarding.list_tasks(record.id)
            policies = await self.uow.onboarding.list_policies(record.id)
            documents = await self.uow.onboarding.list_documents(record.id)
            return Return.ok(OnboardingProgressResponse.build(record, tasks, policies, documents))
