"""
Set Role Use Case

Role selection for users who have not joined a company yet.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.invitations.accept_invitation_use_case import materialize_membership
from src.domain.entities import UserRole

from .dtos import SetRoleResponse

logger = logging.getLogger(__name__)

SELECTABLE_ROLES = {UserRole.employee, UserRole.hr_manager}


class SetRoleUseCase:
    """
    Business Rules:
    - Only unaffiliated users choose their own role
    - Selectable roles: employee, hr_manager (hr_manager then creates a company)
    - Choosing employee with a pending invitation accepts it in the same
      transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, role: str) -> Result[SetRoleResponse]:
        if identity.company_id is not None:
            return Return.err(
                Error("ALREADY_IN_COMPANY", "Role is managed by your company administrator")
            )

        try:
            selected = UserRole(role)
        except ValueError:
            selected = None
        if selected not in SELECTABLE_ROLES:
            return Return.err(Error("INVALID_ROLE", "Role must be one of: employee, hr_manager"))

        now = datetime.utcnow()

        async with self.uow:
            user = await self.uow.users.get_by_id(identity.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if selected == UserRole.employee:
                invitation = await self.uow.invitations.get_latest_pending_by_email(user.email)
                if invitation is not None and not invitation.is_expired(now):
                    result = await materialize_membership(self.uow, invitation, user.id, now)
                    if result.is_err():
                        return result
                    await self.uow.commit()
                    return Return.ok(
                        SetRoleResponse(role=result.value.role, invitation=result.value)
                    )

            user.role = selected
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"User {user.id} selected role {selected.value}")
            return Return.ok(SetRoleResponse(role=selected.value))
