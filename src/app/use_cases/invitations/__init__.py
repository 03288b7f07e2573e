"""
Invitation Workflow Use Cases
"""

from .accept_invitation_use_case import (
    AcceptInvitationUseCase,
    CheckAndAcceptInvitationUseCase,
    materialize_membership,
)
from .dtos import (
    AcceptInvitationResponse,
    DeleteInvitationResponse,
    InvitationResponse,
    IssueInvitationCommand,
    IssueInvitationResponse,
    InvitationStatusResponse,
)
from .issue_invitation_use_case import IssueInvitationUseCase
from .manage_invitations_use_case import (
    DeleteInvitationUseCase,
    GetInvitationUseCase,
    ListInvitationsUseCase,
)
from .verify_invitation_use_case import InvitationStatusUseCase, VerifyInvitationUseCase

__all__ = [
    "IssueInvitationUseCase",
    "VerifyInvitationUseCase",
    "InvitationStatusUseCase",
    "AcceptInvitationUseCase",
    "CheckAndAcceptInvitationUseCase",
    "ListInvitationsUseCase",
    "GetInvitationUseCase",
    "DeleteInvitationUseCase",
    "materialize_membership",
    "IssueInvitationCommand",
    "IssueInvitationResponse",
    "InvitationResponse",
    "AcceptInvitationResponse",
    "DeleteInvitationResponse",
    "InvitationStatusResponse",
]
