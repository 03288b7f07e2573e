from uuid import uuid4

import pytest

from src.app.use_cases.users import ChangeRoleUseCase, CompanyStatusUseCase, SetRoleUseCase
from src.domain.entities import UserRole


@pytest.mark.asyncio
async def test_company_status_for_unaffiliated_user(unaffiliated_identity):
    result = await CompanyStatusUseCase().execute(unaffiliated_identity)

    assert result.is_ok()
    assert result.value.has_company is False
    assert result.value.needs_onboarding is True


@pytest.mark.asyncio
async def test_company_status_for_member(employee_identity, company):
    result = await CompanyStatusUseCase().execute(employee_identity)

    assert result.value.has_company is True
    assert result.value.company_id == str(company.id)
    assert result.value.needs_onboarding is False


@pytest.mark.asyncio
async def test_set_role_hr_manager(mock_uow, unaffiliated_identity, user_factory):
    user = user_factory(id=unaffiliated_identity.user_id)
    mock_uow.users.get_by_id.return_value = user

    result = await SetRoleUseCase(mock_uow).execute(unaffiliated_identity, "hr_manager")

    assert result.is_ok()
    assert result.value.role == "hr_manager"
    assert result.value.invitation is None
    assert user.role == UserRole.hr_manager
    mock_uow.invitations.get_latest_pending_by_email.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_set_role_employee_accepts_pending_invitation(
    mock_uow, company, unaffiliated_identity, user_factory, pending_invitation
):
    user = user_factory(id=unaffiliated_identity.user_id)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.invitations.get_latest_pending_by_email.return_value = pending_invitation
    mock_uow.companies.get_by_id.return_value = company
    mock_uow.onboarding.get_record.return_value = None

    result = await SetRoleUseCase(mock_uow).execute(unaffiliated_identity, "employee")

    assert result.is_ok()
    assert result.value.invitation is not None
    assert result.value.invitation.company_id == str(company.id)
    assert user.company_id == company.id
    mock_uow.invitations.mark_accepted.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_set_role_employee_without_invitation(
    mock_uow, unaffiliated_identity, user_factory
):
    mock_uow.users.get_by_id.return_value = user_factory(id=unaffiliated_identity.user_id)
    mock_uow.invitations.get_latest_pending_by_email.return_value = None

    result = await SetRoleUseCase(mock_uow).execute(unaffiliated_identity, "employee")

    assert result.is_ok()
    assert result.value.role == "employee"
    assert result.value.invitation is None


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["company_admin", "super_admin", "hr", ""])
async def test_set_role_rejects_other_roles(mock_uow, unaffiliated_identity, role):
    result = await SetRoleUseCase(mock_uow).execute(unaffiliated_identity, role)

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_set_role_refused_for_members(mock_uow, employee_identity):
    result = await SetRoleUseCase(mock_uow).execute(employee_identity, "hr_manager")

    assert result.is_err()
    assert result.error.code == "ALREADY_IN_COMPANY"


@pytest.mark.asyncio
async def test_admin_changes_member_role(mock_uow, company, identity_factory, user_factory):
    admin = identity_factory("company_admin", company.id, email="admin@acme.com")
    target = user_factory(email="carol@acme.com", company_id=company.id)
    mock_uow.users.get_by_id.return_value = target

    result = await ChangeRoleUseCase(mock_uow).execute(admin, target.id, "hr_manager")

    assert result.is_ok()
    assert target.role == UserRole.hr_manager
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_hr_manager_cannot_change_roles(mock_uow, hr_identity):
    result = await ChangeRoleUseCase(mock_uow).execute(hr_identity, uuid4(), "employee")

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_only_super_admin_grants_super_admin(mock_uow, company, identity_factory):
    admin = identity_factory("company_admin", company.id)

    result = await ChangeRoleUseCase(mock_uow).execute(admin, uuid4(), "super_admin")

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_cannot_change_own_role(mock_uow, company, identity_factory):
    admin = identity_factory("company_admin", company.id)

    result = await ChangeRoleUseCase(mock_uow).execute(admin, admin.user_id, "employee")

    assert result.is_err()
    assert result.error.code == "CANNOT_CHANGE_OWN_ROLE"


@pytest.mark.asyncio
async def test_users_of_other_companies_are_not_found(
    mock_uow, company, identity_factory, user_factory
):
    admin = identity_factory("company_admin", company.id)
    outsider = user_factory(email="eve@other.com", company_id=uuid4())
    mock_uow.users.get_by_id.return_value = outsider

    result = await ChangeRoleUseCase(mock_uow).execute(admin, outsider.id, "employee")

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
