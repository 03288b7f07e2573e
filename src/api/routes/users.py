from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    CheckAndAcceptInvitationUseCase,
    InvitationStatusResponse,
    InvitationStatusUseCase,
)
from src.app.use_cases.users import (
    ChangeRoleResponse,
    ChangeRoleUseCase,
    CompanyStatusResponse,
    CompanyStatusUseCase,
    SetRoleResponse,
    SetRoleUseCase,
)
from src.depends import get_identity, get_unit_of_work

router = APIRouter(tags=["Users"])


class RoleRequest(BaseModel):
    role: str = Field(..., min_length=1, description="Target role")


@router.get(
    "/user/company-status",
    status_code=status.HTTP_200_OK,
    response_model=CompanyStatusResponse,
)
async def company_status(identity: Identity = Depends(get_identity)):
    """Whether the caller still has to pick a company"""
    result = await CompanyStatusUseCase().execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post(
    "/user/set-role",
    status_code=status.HTTP_200_OK,
    response_model=SetRoleResponse,
)
async def set_role(
    request: RoleRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Pick a role during onboarding

    Choosing employee while an invitation is pending for the caller's email
    accepts that invitation.

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 409 Conflict: ALREADY_IN_COMPANY, INVITATION_ALREADY_ACCEPTED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = SetRoleUseCase(uow)
    result = await use_case.execute(identity, request.role)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/user/invitation-status",
    status_code=status.HTTP_200_OK,
    response_model=InvitationStatusResponse,
)
async def invitation_status(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Whether a pending, unexpired invitation is addressed to the caller"""
    result = await InvitationStatusUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post(
    "/user/check-and-accept-invitation",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def check_and_accept_invitation(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept the newest pending invitation for the caller's email

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: ALREADY_IN_COMPANY, INVITATION_ALREADY_ACCEPTED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = CheckAndAcceptInvitationUseCase(uow)
    result = await use_case.execute(identity)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.put(
    "/users/{user_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRoleResponse,
)
async def change_role(
    user_id: UUID,
    request: RoleRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change another member's role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: INSUFFICIENT_ROLE, CANNOT_CHANGE_OWN_ROLE
        - 404 Not Found: USER_NOT_FOUND (including other companies' users)
    """
    use_case = ChangeRoleUseCase(uow)
    result = await use_case.execute(identity, user_id, request.role)

    if result.is_err():
        raise http_error(result.error)

    return result.value
