"""
Accept Invitation Use Cases

Turns a pending invitation into company membership for the invited user.
"""

import logging
from datetime import datetime
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.onboarding_progress import open_record
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.domain.entities import Invitation, InvitationStatus

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)


async def materialize_membership(
    uow: UnitOfWork, invitation: Invitation, user_id: UUID, now: datetime
) -> Result[AcceptInvitationResponse]:
    """Apply an invitation inside the caller's unit of work.

    The invitation flip is a conditional update on status=pending, so of two
    concurrent calls for the same invitation exactly one succeeds. The user
    update and the onboarding record are written in the same transaction;
    the caller commits.
    """
    if invitation.status == InvitationStatus.accepted:
        return Return.err(
            Error("INVITATION_ALREADY_ACCEPTED", "This invitation has already been accepted")
        )

    if invitation.status == InvitationStatus.expired or invitation.is_expired(now):
        if invitation.status == InvitationStatus.pending:
            invitation.status = InvitationStatus.expired
            await uow.invitations.update(invitation)
            await uow.commit()
        return Return.err(Error("INVITATION_EXPIRED", "This invitation has expired"))

    user = await uow.users.get_by_id(user_id)
    if user is None:
        return Return.err(Error("USER_NOT_FOUND", "User not found"))

    if user.company_id is not None and user.company_id != invitation.company_id:
        return Return.err(
            Error("ALREADY_IN_COMPANY", "User already belongs to another company")
        )

    company = await uow.companies.get_by_id(invitation.company_id)
    if company is None or not company.is_active:
        return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

    if not await uow.invitations.mark_accepted(invitation.id, now):
        return Return.err(
            Error("INVITATION_ALREADY_ACCEPTED", "This invitation has already been accepted")
        )

    user.company_id = company.id
    user.role = invitation.role
    user.department = invitation.department
    user.position = invitation.position
    await uow.users.update(user)

    record = await open_record(uow, user.id, company, now)

    logger.info(f"Invitation {invitation.id} accepted by user {user.id}")

    return Return.ok(
        AcceptInvitationResponse(
            invitation_id=str(invitation.id),
            company_id=str(company.id),
            company_name=company.name,
            role=getattr(invitation.role, "value", invitation.role),
            department=invitation.department,
            position=invitation.position,
            onboarding_status=getattr(record.status, "value", record.status),
        )
    )


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation by ID.

    Business Rules:
    - Authenticated email must equal the invitation email
    - Already accepted invitations are a conflict
    - Expired invitations are rejected and marked expired
    - Role, department, position and company are copied onto the user and
      the onboarding record is started, atomically
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, invitation_id: UUID, identity: Identity
    ) -> Result[AcceptInvitationResponse]:
        now = datetime.utcnow()

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.email != identity.email:
                return Return.err(
                    Error("EMAIL_MISMATCH", "This invitation was sent to a different email")
                )

            result = await materialize_membership(self.uow, invitation, identity.user_id, now)
            if result.is_err():
                return result

            await self.uow.commit()
            return result


class CheckAndAcceptInvitationUseCase:
    """
    Use case for accepting whatever invitation is waiting for the caller.

    Business Rules:
    - Picks the newest pending invitation addressed to the caller's email
    - Same acceptance rules as AcceptInvitationUseCase
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[AcceptInvitationResponse]:
        now = datetime.utcnow()

        async with self.uow:
            invitation = await self.uow.invitations.get_latest_pending_by_email(identity.email)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "No pending invitation for this email")
                )

            result = await materialize_membership(self.uow, invitation, identity.user_id, now)
            if result.is_err():
                return result

            await self.uow.commit()
            return result
