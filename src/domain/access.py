"""
Role Authorization Gate

Pure predicates over the fixed role enumeration. Every function is total:
any string that is not a known role is denied.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from .entities.enums import UserRole


class Capability(str, Enum):
    """Operation category a role may be granted"""

    hr = "hr"
    admin = "admin"
    employee = "employee"
    super_admin = "super_admin"


CAPABILITY_ROLES: Dict[Capability, FrozenSet[str]] = {
    Capability.hr: frozenset(
        {UserRole.hr_manager.value, UserRole.company_admin.value, UserRole.super_admin.value}
    ),
    Capability.admin: frozenset({UserRole.company_admin.value, UserRole.super_admin.value}),
    Capability.employee: frozenset({UserRole.employee.value}),
    Capability.super_admin: frozenset({UserRole.super_admin.value}),
}


def _role_value(role) -> Optional[str]:
    if isinstance(role, Enum):
        return role.value
    if isinstance(role, str):
        return role
    return None


def has_access(role, capability: Capability) -> bool:
    """True when role is granted capability"""
    value = _role_value(role)
    if value is None:
        return False
    return value in CAPABILITY_ROLES.get(capability, frozenset())


def has_hr_access(role) -> bool:
    return has_access(role, Capability.hr)


def has_admin_access(role) -> bool:
    return has_access(role, Capability.admin)
