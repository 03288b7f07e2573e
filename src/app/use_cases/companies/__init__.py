"""
Company Use Cases
"""

from .company_settings_use_case import GetCompanySettingsUseCase, UpdateCompanySettingsUseCase
from .create_company_use_case import CreateCompanyUseCase
from .dtos import (
    CompanyProfile,
    CompanyResponse,
    CompanySettings,
    CompanySettingsResponse,
    CompanySummary,
    CreateCompanyResponse,
    OnboardingTemplate,
    UpdateCompanySettingsCommand,
)
from .search_companies_use_case import SearchCompaniesUseCase

__all__ = [
    "CreateCompanyUseCase",
    "SearchCompaniesUseCase",
    "GetCompanySettingsUseCase",
    "UpdateCompanySettingsUseCase",
    "CompanyProfile",
    "CompanyResponse",
    "CompanySettings",
    "CompanySettingsResponse",
    "CompanySummary",
    "CreateCompanyResponse",
    "OnboardingTemplate",
    "UpdateCompanySettingsCommand",
]
