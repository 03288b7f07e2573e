"""
Issue Invitation Use Case

HR invites a person, by email, to join their company with a preset role.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError

from src.libs.result import Error, Result, Return
from src.app.services.credentials import generate_mailbox_address, generate_temporary_password
from src.app.services.email_sender import IEmailSender, InvitationEmail
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability
from src.domain.entities import Invitation, InvitationStatus, UserRole

from .dtos import InvitationResponse, IssueInvitationCommand, IssueInvitationResponse

logger = logging.getLogger(__name__)

INVITABLE_ROLES = {UserRole.employee, UserRole.hr_manager}


class IssueInvitationUseCase:
    """
    Use case for issuing invitations.

    Business Rules:
    - Caller must be HR-capable and belong to a company
    - Role must be employee or hr_manager
    - One pending invitation per (email, company); a stale pending one is
      expired first, a live one is a conflict
    - The storage layer's partial unique index settles concurrent duplicates
    - Users already in the company cannot be invited
    - Optional generated credentials: only the bcrypt hash is stored
    - Email is sent after commit, off the event loop; delivery failure does
      not undo the invitation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: Optional[IEmailSender] = None,
        ttl_days: int = 7,
        email_strategy: str = "gmail",
        app_url: str = "",
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.ttl_days = ttl_days
        self.email_strategy = email_strategy
        self.app_url = app_url.rstrip("/")

    async def execute(
        self, identity: Identity, command: IssueInvitationCommand
    ) -> Result[IssueInvitationResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        try:
            role = UserRole(command.role)
        except ValueError:
            role = None
        if role not in INVITABLE_ROLES:
            return Return.err(
                Error("INVALID_ROLE", "Role must be one of: employee, hr_manager")
            )

        email = command.email.strip().lower()
        if not command.name.strip() or not email:
            return Return.err(Error("VALIDATION_ERROR", "Name and email are required"))

        now = datetime.utcnow()
        temporary_password = None

        async with self.uow:
            company = await self.uow.companies.get_by_id(identity.company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user and existing_user.company_id == company.id:
                return Return.err(
                    Error("ALREADY_MEMBER", "User is already a member of this company")
                )

            pending = await self.uow.invitations.get_pending_by_company_and_email(
                company.id, email
            )
            if pending is not None:
                if not pending.is_expired(now):
                    return Return.err(
                        Error(
                            "INVITATION_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )
                pending.status = InvitationStatus.expired
                await self.uow.invitations.update(pending)

            invitation = Invitation(
                company_id=company.id,
                email=email,
                name=command.name.strip(),
                role=role,
                department=command.department,
                position=command.position,
                invited_by=identity.user_id,
                status=InvitationStatus.pending,
                invited_at=now,
                expires_at=now + timedelta(days=self.ttl_days),
            )

            if command.generate_credentials:
                temporary_password = generate_temporary_password()
                invitation.generated_email = generate_mailbox_address(
                    command.name, company.name, self.email_strategy, company.domain
                )
                invitation.temporary_password_hash = bcrypt.hashpw(
                    temporary_password.encode("utf-8"), bcrypt.gensalt(rounds=12)
                ).decode("utf-8")
                invitation.email_credentials_generated = True

            try:
                invitation = await self.uow.invitations.create(invitation)
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            logger.info(f"Invitation {invitation.id} issued for company {company.id}")

            response = IssueInvitationResponse(
                invitation=InvitationResponse.from_entity(invitation, company.name)
            )
            message = InvitationEmail(
                to=email,
                invitee_name=invitation.name,
                company_name=company.name,
                role=role.value,
                accept_url=f"{self.app_url}/invitations/{invitation.id}",
                expires_at=response.invitation.expires_at,
                generated_email=invitation.generated_email,
                temporary_password=temporary_password,
            )

        if self.email_sender is not None:
            response.email_sent = await asyncio.to_thread(
                self.email_sender.send_invitation, message
            )

        return Return.ok(response)
