"""
Invitation management for HR: list, inspect and revoke.
"""

import logging
from typing import List
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability
from src.domain.entities import InvitationStatus

from .dtos import DeleteInvitationResponse, InvitationResponse

logger = logging.getLogger(__name__)


class ListInvitationsUseCase:
    """HR lists the company's invitations, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[List[InvitationResponse]]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            invitations = await self.uow.invitations.list_by_company(identity.company_id)
            return Return.ok([InvitationResponse.from_entity(i) for i in invitations])


class GetInvitationUseCase:
    """HR fetches one invitation of their company"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, invitation_id: UUID) -> Result[InvitationResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.company_id != identity.company_id:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))
            return Return.ok(InvitationResponse.from_entity(invitation))


class DeleteInvitationUseCase:
    """
    HR revokes an invitation.

    Business Rules:
    - Invitations of other companies are reported as not found
    - Accepted invitations cannot be deleted; membership is already granted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, invitation_id: UUID
    ) -> Result[DeleteInvitationResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.company_id != identity.company_id:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_ACCEPTED",
                        "Accepted invitations cannot be deleted",
                    )
                )

            await self.uow.invitations.delete(invitation)
            await self.uow.commit()

            logger.info(f"Invitation {invitation_id} deleted by {identity.user_id}")
            return Return.ok(DeleteInvitationResponse(status="deleted"))
