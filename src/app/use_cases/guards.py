"""
Access checks shared by use cases.

Each returns None when the caller may proceed, or the Error to return.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Error
from src.domain.access import Capability, has_access

from .auth.dtos import Identity


def require_company(identity: Identity) -> Optional[Error]:
    if identity.company_id is None:
        return Error("NO_COMPANY", "User is not associated with a company")
    return None


def require_capability(identity: Identity, capability: Capability) -> Optional[Error]:
    """Role gate followed by the tenant check"""
    if not has_access(identity.role, capability):
        if capability == Capability.employee:
            return Error("INSUFFICIENT_ROLE", "Only employees can perform this action")
        return Error("INSUFFICIENT_ROLE", "You do not have permission to perform this action")
    return require_company(identity)


def same_company(identity: Identity, company_id: Optional[UUID]) -> bool:
    return identity.company_id is not None and identity.company_id == company_id
