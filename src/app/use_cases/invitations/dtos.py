"""
Invitation Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the invitation workflow.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Invitation


# ============================================================================
# Command DTOs
# ============================================================================


class IssueInvitationCommand(BaseModel):
    """Command for issuing an invitation"""

    name: str
    email: str
    role: str = "employee"
    department: Optional[str] = None
    position: Optional[str] = None
    generate_credentials: bool = False


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationResponse(BaseModel):
    """Invitation as returned to HR and to the invited user"""

    id: str
    email: str
    name: Optional[str] = None
    role: str
    department: Optional[str] = None
    position: Optional[str] = None
    status: str
    company_id: str
    company_name: Optional[str] = None
    invited_by: str
    invited_at: str
    expires_at: str
    accepted_at: Optional[str] = None
    generated_email: Optional[str] = None
    email_credentials_generated: bool = False

    @classmethod
    def from_entity(
        cls, invitation: Invitation, company_name: Optional[str] = None
    ) -> "InvitationResponse":
        return cls(
            id=str(invitation.id),
            email=invitation.email,
            name=invitation.name,
            role=getattr(invitation.role, "value", invitation.role),
            department=invitation.department,
            position=invitation.position,
            status=getattr(invitation.status, "value", invitation.status),
            company_id=str(invitation.company_id),
            company_name=company_name,
            invited_by=str(invitation.invited_by),
            invited_at=invitation.invited_at.isoformat(),
            expires_at=invitation.expires_at.isoformat(),
            accepted_at=invitation.accepted_at.isoformat() if invitation.accepted_at else None,
            generated_email=invitation.generated_email,
            email_credentials_generated=invitation.email_credentials_generated,
        )


class IssueInvitationResponse(BaseModel):
    """Response for issue invitation use case"""

    invitation: InvitationResponse
    email_sent: bool = False


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    invitation_id: str
    company_id: str
    company_name: str
    role: str
    department: Optional[str] = None
    position: Optional[str] = None
    onboarding_status: str


class DeleteInvitationResponse(BaseModel):
    """Response for delete invitation use case"""

    status: str


class InvitationStatusResponse(BaseModel):
    """Whether a live invitation is waiting for the caller"""

    has_invitation: bool
    invitation: Optional[InvitationResponse] = None
