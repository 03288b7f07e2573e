"""
User Management Use Cases
"""

from .change_role_use_case import ChangeRoleUseCase
from .company_status_use_case import CompanyStatusUseCase
from .dtos import ChangeRoleResponse, CompanyStatusResponse, SetRoleResponse
from .set_role_use_case import SetRoleUseCase

__all__ = [
    "CompanyStatusUseCase",
    "SetRoleUseCase",
    "ChangeRoleUseCase",
    "CompanyStatusResponse",
    "SetRoleResponse",
    "ChangeRoleResponse",
]
