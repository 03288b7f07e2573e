"""
Company Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Company, PolicyTemplate, TaskTemplate


# ============================================================================
# Command DTOs
# ============================================================================


class CompanyProfile(BaseModel):
    """Editable company profile fields"""

    name: str
    domain: str
    contact_email: str
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None


class CompanySettings(BaseModel):
    allow_self_registration: bool = False
    require_email_verification: bool = True
    custom_domain: Optional[str] = None


class OnboardingTemplate(BaseModel):
    welcome_message: Optional[str] = None
    tasks: List[TaskTemplate] = []
    policies: List[PolicyTemplate] = []


class UpdateCompanySettingsCommand(CompanyProfile):
    """Command for updating company settings; omitted sections stay unchanged"""

    settings: Optional[CompanySettings] = None
    onboarding: Optional[OnboardingTemplate] = None


# ============================================================================
# Response DTOs
# ============================================================================


class CompanyResponse(CompanyProfile):
    id: str
    is_active: bool
    subscription_plan: str
    subscription_status: str

    @classmethod
    def from_entity(cls, company: Company) -> "CompanyResponse":
        return cls(
            id=str(company.id),
            name=company.name,
            domain=company.domain,
            contact_email=company.contact_email,
            contact_phone=company.contact_phone,
            address=company.address,
            industry=company.industry,
            description=company.description,
            website=company.website,
            is_active=company.is_active,
            subscription_plan=getattr(company.subscription_plan, "value", company.subscription_plan),
            subscription_status=getattr(
                company.subscription_status, "value", company.subscription_status
            ),
        )


class CompanySummary(BaseModel):
    """Search result entry"""

    id: str
    name: str
    domain: str
    industry: Optional[str] = None


class CreateCompanyResponse(BaseModel):
    company: CompanyResponse
    role: str


class CompanySettingsResponse(BaseModel):
    company: CompanyResponse
    settings: CompanySettings
    onboarding: OnboardingTemplate

    @classmethod
    def from_entity(cls, company: Company) -> "CompanySettingsResponse":
        return cls(
            company=CompanyResponse.from_entity(company),
            settings=CompanySettings(
                allow_self_registration=company.allow_self_registration,
                require_email_verification=company.require_email_verification,
                custom_domain=company.custom_domain,
            ),
            onboarding=OnboardingTemplate(
                welcome_message=company.welcome_message,
                tasks=company.task_templates(),
                policies=company.policy_templates(),
            ),
        )
