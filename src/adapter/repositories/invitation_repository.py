from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_company_and_email(
        self, company_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by company and email"""
        stmt = select(Invitation).where(
            Invitation.company_id == company_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_latest_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Most recent pending invitation for an email"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.email == email,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(col(Invitation.invited_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_company(self, company_id: UUID) -> List[Invitation]:
        """All invitations of a company, newest first"""
        stmt = (
            select(Invitation)
            .where(Invitation.company_id == company_id)
            .order_by(col(Invitation.invited_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_pending_by_company(self, company_id: UUID) -> int:
        """Number of pending invitations of a company"""
        stmt = (
            select(func.count())
            .select_from(Invitation)
            .where(
                Invitation.company_id == company_id,
                Invitation.status == InvitationStatus.pending,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def mark_accepted(self, invitation_id: UUID, accepted_at: datetime) -> bool:
        """Conditional flip pending -> accepted"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.status == InvitationStatus.pending,
            )
            .values(status=InvitationStatus.accepted, accepted_at=accepted_at)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete(self, invitation: Invitation) -> None:
        """Delete an invitation"""
        await self.session.delete(invitation)
        await self.session.flush()
