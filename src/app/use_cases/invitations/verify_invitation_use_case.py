"""
Verify Invitation Use Case
"""

from datetime import datetime
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity

from .dtos import InvitationResponse, InvitationStatusResponse


class VerifyInvitationUseCase:
    """
    Use case for checking that a live invitation exists.

    Business Rules:
    - Only the invited person may look up their invitation
    - Returned only while pending and unexpired; anything else is not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, email: str, company_id: UUID
    ) -> Result[InvitationResponse]:
        email = email.strip().lower()
        if email != identity.email:
            return Return.err(
                Error("EMAIL_MISMATCH", "You can only verify invitations sent to your email")
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_pending_by_company_and_email(
                company_id, email
            )
            if invitation is None or invitation.is_expired(datetime.utcnow()):
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "No valid invitation found for this email")
                )

            company = await self.uow.companies.get_by_id(company_id)
            return Return.ok(
                InvitationResponse.from_entity(invitation, company.name if company else None)
            )


class InvitationStatusUseCase:
    """
    Use case for telling a signed-in user whether an invitation awaits them.

    Business Rules:
    - Looks at the newest pending invitation for the caller's email
    - An expired invitation counts as none
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[InvitationStatusResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_latest_pending_by_email(identity.email)
            if invitation is None or invitation.is_expired(datetime.utcnow()):
                return Return.ok(InvitationStatusResponse(has_invitation=False))

            company = await self.uow.companies.get_by_id(invitation.company_id)
            return Return.ok(
                InvitationStatusResponse(
                    has_invitation=True,
                    invitation=InvitationResponse.from_entity(
                        invitation, company.name if company else None
                    ),
                )
            )
