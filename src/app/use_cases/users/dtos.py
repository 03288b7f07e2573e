"""
User Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.invitations.dtos import AcceptInvitationResponse


class CompanyStatusResponse(BaseModel):
    """Where the caller stands in the sign-up funnel"""

    has_company: bool
    company_id: Optional[str] = None
    role: str
    needs_onboarding: bool


class SetRoleResponse(BaseModel):
    """Response for set role use case"""

    role: str
    invitation: Optional[AcceptInvitationResponse] = None


class ChangeRoleResponse(BaseModel):
    """Response for change role use case"""

    user_id: str
    role: str
