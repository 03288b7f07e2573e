"""
Create Company Use Case
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.domain.entities import Company, UserRole

from .dtos import CompanyProfile, CompanyResponse, CreateCompanyResponse

logger = logging.getLogger(__name__)


def normalize_domain(domain: str) -> str:
    return domain.strip().lower()


class CreateCompanyUseCase:
    """
    Business Rules:
    - Only users without a company may create one
    - Domain is unique across companies
    - The creator becomes company_admin of the new company in the same
      transaction
    - New companies start on the free plan, active
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, profile: CompanyProfile
    ) -> Result[CreateCompanyResponse]:
        if identity.company_id is not None:
            return Return.err(
                Error("ALREADY_IN_COMPANY", "You already belong to a company")
            )

        name = profile.name.strip()
        domain = normalize_domain(profile.domain)
        if not name or not domain or not profile.contact_email.strip():
            return Return.err(
                Error("VALIDATION_ERROR", "Name, domain and contact email are required")
            )

        async with self.uow:
            if await self.uow.companies.get_by_domain(domain) is not None:
                return Return.err(
                    Error("COMPANY_DOMAIN_TAKEN", "A company with this domain already exists")
                )

            user = await self.uow.users.get_by_id(identity.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            company = Company(
                **profile.model_dump(exclude={"name", "domain"}),
                name=name,
                domain=domain,
            )
            try:
                company = await self.uow.companies.create(company)
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(
                    Error("COMPANY_DOMAIN_TAKEN", "A company with this domain already exists")
                )

            user.company_id = company.id
            user.role = UserRole.company_admin
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Company {company.id} created by user {user.id}")
            return Return.ok(
                CreateCompanyResponse(
                    company=CompanyResponse.from_entity(company),
                    role=UserRole.company_admin.value,
                )
            )
