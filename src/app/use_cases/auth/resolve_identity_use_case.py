"""
Resolve Identity Use Case

Maps a verified session subject to the user's current role and company.
"""

from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import Identity


class ResolveIdentityUseCase:
    """
    Business Rules:
    - Role and company are read from the user record on every request, so
      changes take effect without re-signing in
    - Unknown or deactivated users are unauthenticated
    - Read-only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[Identity]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not user.is_active:
                return Return.err(Error("UNAUTHENTICATED", "Session user not found or inactive"))

            return Return.ok(
                Identity(
                    user_id=user.id,
                    email=user.email,
                    name=user.name,
                    image=user.image,
                    role=getattr(user.role, "value", user.role),
                    company_id=user.company_id,
                    department=user.department,
                    position=user.position,
                )
            )
