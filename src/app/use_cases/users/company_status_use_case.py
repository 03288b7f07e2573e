from src.libs.result import Result, Return
from src.app.use_cases.auth.dtos import Identity

from .dtos import CompanyStatusResponse


class CompanyStatusUseCase:
    """Reports whether the caller is affiliated; unaffiliated users go to onboarding"""

    async def execute(self, identity: Identity) -> Result[CompanyStatusResponse]:
        has_company = identity.company_id is not None
        return Return.ok(
            CompanyStatusResponse(
                has_company=has_company,
                company_id=str(identity.company_id) if has_company else None,
                role=identity.role,
                needs_onboarding=not has_company,
            )
        )
