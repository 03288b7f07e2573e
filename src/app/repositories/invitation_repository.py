from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_by_company_and_email(
        self, company_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by company and email"""
        pass

    @abstractmethod
    async def get_latest_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Most recent pending invitation for an email, across companies"""
        pass

    @abstractmethod
    async def list_by_company(self, company_id: UUID) -> List[Invitation]:
        """All invitations of a company, newest first"""
        pass

    @abstractmethod
    async def count_pending_by_company(self, company_id: UUID) -> int:
        """Number of pending invitations of a company"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def mark_accepted(self, invitation_id: UUID, accepted_at: datetime) -> bool:
        """Flip a pending invitation to accepted; False when it was not pending"""
        pass

    @abstractmethod
    async def delete(self, invitation: Invitation) -> None:
        """Delete an invitation"""
        pass
