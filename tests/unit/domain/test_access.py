import pytest

from src.domain.access import Capability, has_access, has_admin_access, has_hr_access
from src.domain.entities import UserRole


@pytest.mark.parametrize(
    "role,expected",
    [
        ("hr_manager", True),
        ("company_admin", True),
        ("super_admin", True),
        ("employee", False),
    ],
)
def test_hr_access_by_role(role, expected):
    assert has_hr_access(role) is expected


@pytest.mark.parametrize(
    "role,expected",
    [
        ("company_admin", True),
        ("super_admin", True),
        ("hr_manager", False),
        ("employee", False),
    ],
)
def test_admin_access_by_role(role, expected):
    assert has_admin_access(role) is expected


@pytest.mark.parametrize("role", ["hr", "HR_MANAGER", "admin", "", "owner", None, 42, object()])
def test_unknown_roles_are_denied(role):
    assert has_hr_access(role) is False
    assert has_admin_access(role) is False
    for capability in Capability:
        assert has_access(role, capability) is False


def test_enum_roles_are_accepted():
    assert has_hr_access(UserRole.hr_manager) is True
    assert has_access(UserRole.employee, Capability.employee) is True
    assert has_access(UserRole.hr_manager, Capability.employee) is False
