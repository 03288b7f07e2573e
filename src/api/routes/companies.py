from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.companies import (
    CompanyProfile,
    CompanySettings,
    CompanySettingsResponse,
    CompanySummary,
    CreateCompanyResponse,
    CreateCompanyUseCase,
    GetCompanySettingsUseCase,
    OnboardingTemplate,
    SearchCompaniesUseCase,
    UpdateCompanySettingsCommand,
    UpdateCompanySettingsUseCase,
)
from src.depends import get_identity, get_unit_of_work

router = APIRouter(tags=["Companies"])


class CompanyProfileRequest(BaseModel):
    """Company profile HTTP payload"""

    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field(..., min_length=1, max_length=255)
    contact_email: EmailStr
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None

    def to_profile(self) -> CompanyProfile:
        return CompanyProfile(**self.model_dump())


class UpdateCompanySettingsRequest(CompanyProfileRequest):
    settings: Optional[CompanySettings] = None
    onboarding: Optional[OnboardingTemplate] = None

    def to_command(self) -> UpdateCompanySettingsCommand:
        return UpdateCompanySettingsCommand(**self.model_dump())


@router.post(
    "/companies",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateCompanyResponse,
)
async def create_company(
    request: CompanyProfileRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a company; the caller becomes its company_admin

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 409 Conflict: ALREADY_IN_COMPANY, COMPANY_DOMAIN_TAKEN
    """
    use_case = CreateCompanyUseCase(uow)
    result = await use_case.execute(identity, request.to_profile())

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/companies/search",
    status_code=status.HTTP_200_OK,
    response_model=List[CompanySummary],
)
async def search_companies(
    q: str = Query("", max_length=100),
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SearchCompaniesUseCase(uow).execute(q)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get(
    "/company/settings",
    status_code=status.HTTP_200_OK,
    response_model=CompanySettingsResponse,
)
async def get_company_settings(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetCompanySettingsUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.put(
    "/company/settings",
    status_code=status.HTTP_200_OK,
    response_model=CompanySettingsResponse,
)
async def update_company_settings(
    request: UpdateCompanySettingsRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update the company profile, settings and onboarding template

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: INSUFFICIENT_ROLE, NO_COMPANY
        - 409 Conflict: COMPANY_DOMAIN_TAKEN
    """
    use_case = UpdateCompanySettingsUseCase(uow)
    result = await use_case.execute(identity, request.to_command())

    if result.is_err():
        raise http_error(result.error)

    return result.value
