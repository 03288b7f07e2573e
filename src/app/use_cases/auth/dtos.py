"""
Auth Use Case DTOs
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Identity(BaseModel):
    """The caller of a request, resolved from the session"""

    user_id: UUID
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: str
    company_id: Optional[UUID] = None
    department: Optional[str] = None
    position: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.email


class SignInResponse(BaseModel):
    """Response for Google sign-in use case"""

    user_id: str
    email: str
    is_new_user: bool
    needs_onboarding: bool
