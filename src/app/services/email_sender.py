from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class InvitationEmail(BaseModel):
    to: str
    invitee_name: Optional[str] = None
    company_name: str
    role: str
    accept_url: str
    expires_at: str
    generated_email: Optional[str] = None
    temporary_password: Optional[str] = None


class DocumentReviewedEmail(BaseModel):
    to: str
    employee_name: Optional[str] = None
    document_type: str
    approved: bool
    rejection_reason: Optional[str] = None


class IEmailSender(ABC):
    """Outbound notification delivery"""

    @abstractmethod
    def send_invitation(self, message: InvitationEmail) -> bool:
        """Send an invitation; returns False when delivery failed"""
        pass

    @abstractmethod
    def send_document_reviewed(self, message: DocumentReviewedEmail) -> bool:
        """Tell an employee their document was reviewed"""
        pass
