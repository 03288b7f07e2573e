"""
Change Role Use Case

Company administrators change the role of another member.
"""

import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability, has_access
from src.domain.entities import UserRole

from .dtos import ChangeRoleResponse

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Business Rules:
    - Caller must be admin-capable
    - Target must belong to the caller's company (otherwise not found)
    - Callers cannot change their own role
    - Only super_admin may grant super_admin
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, target_user_id: UUID, new_role: str
    ) -> Result[ChangeRoleResponse]:
        denied = require_capability(identity, Capability.admin)
        if denied:
            return Return.err(denied)

        try:
            role = UserRole(new_role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    "Role must be one of: super_admin, company_admin, hr_manager, employee",
                )
            )

        if role == UserRole.super_admin and not has_access(identity.role, Capability.super_admin):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only super admins can grant super_admin")
            )

        if target_user_id == identity.user_id:
            return Return.err(Error("CANNOT_CHANGE_OWN_ROLE", "You cannot change your own role"))

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None or target.company_id != identity.company_id:
                return Return.err(Error("USER_NOT_FOUND", "User not found in your company"))

            target.role = role
            await self.uow.users.update(target)
            await self.uow.commit()

            logger.info(f"User {target.id} role changed to {role.value} by {identity.user_id}")
            return Return.ok(ChangeRoleResponse(user_id=str(target.id), role=role.value))
