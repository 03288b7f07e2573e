"""
Company Settings Use Cases
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability

from .create_company_use_case import normalize_domain
from .dtos import CompanySettingsResponse, UpdateCompanySettingsCommand

logger = logging.getLogger(__name__)


class GetCompanySettingsUseCase:
    """HR reads the company profile, settings and onboarding template"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[CompanySettingsResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            company = await self.uow.companies.get_by_id(identity.company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))
            return Return.ok(CompanySettingsResponse.from_entity(company))


class UpdateCompanySettingsUseCase:
    """
    Business Rules:
    - Caller must be HR-capable
    - Name, domain and contact email are required
    - Domain stays unique across companies
    - Template changes apply to records created afterwards only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, command: UpdateCompanySettingsCommand
    ) -> Result[CompanySettingsResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        name = command.name.strip()
        domain = normalize_domain(command.domain)
        if not name or not domain or not command.contact_email.strip():
            return Return.err(
                Error("VALIDATION_ERROR", "Name, domain and contact email are required")
            )

        async with self.uow:
            company = await self.uow.companies.get_by_id(identity.company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            if domain != company.domain:
                other = await self.uow.companies.get_by_domain(domain)
                if other is not None and other.id != company.id:
                    return Return.err(
                        Error("COMPANY_DOMAIN_TAKEN", "A company with this domain already exists")
                    )

            company.name = name
            company.domain = domain
            company.contact_email = command.contact_email.strip()
            company.contact_phone = command.contact_phone
            company.address = command.address
            company.industry = command.industry
            company.description = command.description
            company.website = command.website

            if command.settings is not None:
                company.allow_self_registration = command.settings.allow_self_registration
                company.require_email_verification = command.settings.require_email_verification
                company.custom_domain = command.settings.custom_domain

            if command.onboarding is not None:
                company.welcome_message = command.onboarding.welcome_message
                company.onboarding_tasks = [
                    t.model_dump(mode="json") for t in command.onboarding.tasks
                ]
                company.onboarding_policies = [
                    p.model_dump(mode="json") for p in command.onboarding.policies
                ]

            company.updated_at = datetime.utcnow()
            try:
                company = await self.uow.companies.update(company)
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(
                    Error("COMPANY_DOMAIN_TAKEN", "A company with this domain already exists")
                )

            logger.info(f"Company {company.id} settings updated by {identity.user_id}")
            return Return.ok(CompanySettingsResponse.from_entity(company))
