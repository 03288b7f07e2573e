from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import http_error
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    DeleteInvitationResponse,
    DeleteInvitationUseCase,
    GetInvitationUseCase,
    InvitationResponse,
    IssueInvitationCommand,
    IssueInvitationResponse,
    IssueInvitationUseCase,
    ListInvitationsUseCase,
    VerifyInvitationUseCase,
)
from src.depends import get_email_sender, get_identity, get_unit_of_work

router = APIRouter(tags=["Invitations"])


class InviteEmployeeRequest(BaseModel):
    """
    Invite employee HTTP request payload

    Validates incoming request before converting to IssueInvitationCommand.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: str = Field("employee", description="employee or hr_manager")
    department: Optional[str] = Field(None, max_length=100)
    position: Optional[str] = Field(None, max_length=100)
    generate_credentials: bool = False


class VerifyInvitationRequest(BaseModel):
    email: EmailStr
    company_id: UUID


@router.post(
    "/hr/invite-employee",
    status_code=status.HTTP_201_CREATED,
    response_model=IssueInvitationResponse,
)
async def invite_employee(
    request: InviteEmployeeRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Issue an invitation to join the caller's company

    The notification is sent after the invitation is committed; a failed
    send is reported as email_sent=false.

    Raises:
        - 400 Bad Request: INVALID_ROLE, VALIDATION_ERROR
        - 403 Forbidden: INSUFFICIENT_ROLE, NO_COMPANY
        - 409 Conflict: ALREADY_MEMBER, INVITATION_ALREADY_EXISTS
    """
    command = IssueInvitationCommand(
        name=request.name,
        email=request.email,
        role=request.role,
        department=request.department,
        position=request.position,
        generate_credentials=request.generate_credentials,
    )

    use_case = IssueInvitationUseCase(
        uow,
        email_sender=email_sender,
        ttl_days=ApplicationConfig.INVITATION_TTL_DAYS,
        email_strategy=ApplicationConfig.EMAIL_STRATEGY,
        app_url=ApplicationConfig.APP_URL,
    )
    result = await use_case.execute(identity, command)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/hr/employee-invitations",
    status_code=status.HTTP_200_OK,
    response_model=List[InvitationResponse],
)
async def list_invitations(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListInvitationsUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get(
    "/hr/employee-invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=InvitationResponse,
)
async def get_invitation(
    invitation_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetInvitationUseCase(uow).execute(identity, invitation_id)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.delete(
    "/hr/employee-invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteInvitationResponse,
)
async def delete_invitation(
    invitation_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete an invitation that has not been accepted

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED
    """
    result = await DeleteInvitationUseCase(uow).execute(identity, invitation_id)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post(
    "/employee/verify-invitation",
    status_code=status.HTTP_200_OK,
    response_model=InvitationResponse,
)
async def verify_invitation(
    request: VerifyInvitationRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Look up the pending invitation for the caller at a company

    Raises:
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND (missing or expired)
    """
    use_case = VerifyInvitationUseCase(uow)
    result = await use_case.execute(identity, request.email, request.company_id)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.post(
    "/invitations/{invitation_id}/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    invitation_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept an invitation addressed to the caller

    Joins the company with the invited role, department and position and
    opens the onboarding record in the same transaction.

    Raises:
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED, ALREADY_IN_COMPANY
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow)
    result = await use_case.execute(invitation_id, identity)

    if result.is_err():
        raise http_error(result.error)

    return result.value
