from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.onboarding import (
    DashboardStatsResponse,
    DashboardStatsUseCase,
    EmployeeOnboardingSummary,
    FeedbackResponse,
    GetProgressUseCase,
    ListOnboardingRecordsUseCase,
    OnboardingProgressResponse,
    ProvideFeedbackUseCase,
    RecordPolicyAcknowledgmentUseCase,
    RecordTaskCompletionUseCase,
)
from src.depends import get_completion_policy, get_identity, get_unit_of_work
from src.domain.entities import CompletionPolicy
from src.libs.result import Error

router = APIRouter(tags=["Onboarding"])


class ProgressActionRequest(BaseModel):
    action: str = Field(..., description="complete_task or acknowledge_policy")
    task_id: Optional[str] = None
    policy_name: Optional[str] = None


class HrOnboardingActionRequest(BaseModel):
    action: str = Field(..., description="provide_feedback")
    employee_id: Optional[UUID] = None
    feedback: Optional[str] = Field(None, max_length=5000)
    satisfaction_score: Optional[int] = None


def _missing(parameter: str) -> ClientError:
    return ClientError(
        Error("MISSING_PARAMETER", f"{parameter} is required"),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def _invalid_action(action: str) -> ClientError:
    return ClientError(
        Error("INVALID_ACTION", f"Unknown action: {action}"),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@router.get(
    "/onboarding/progress",
    status_code=status.HTTP_200_OK,
    response_model=OnboardingProgressResponse,
)
async def get_progress(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetProgressUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post(
    "/onboarding/progress",
    status_code=status.HTTP_200_OK,
    response_model=OnboardingProgressResponse,
)
async def update_progress(
    request: ProgressActionRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    completion_policy: CompletionPolicy = Depends(get_completion_policy),
):
    """
    Record a checklist step for the caller

    Actions:
        - complete_task (task_id)
        - acknowledge_policy (policy_name)

    Both are idempotent. The completion policy is evaluated after each one.

    Raises:
        - 400 Bad Request: INVALID_ACTION, MISSING_PARAMETER
        - 404 Not Found: ONBOARDING_NOT_FOUND, TASK_NOT_FOUND, POLICY_NOT_FOUND
    """
    if request.action == "complete_task":
        if not request.task_id:
            raise _missing("task_id")
        use_case = RecordTaskCompletionUseCase(uow, completion_policy)
        result = await use_case.execute(identity, request.task_id)
    elif request.action == "acknowledge_policy":
        if not request.policy_name:
            raise _missing("policy_name")
        use_case = RecordPolicyAcknowledgmentUseCase(uow, completion_policy)
        result = await use_case.execute(identity, request.policy_name)
    else:
        raise _invalid_action(request.action)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/hr/onboarding",
    status_code=status.HTTP_200_OK,
    response_model=List[EmployeeOnboardingSummary],
)
async def list_onboarding(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListOnboardingRecordsUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post(
    "/hr/onboarding",
    status_code=status.HTTP_200_OK,
    response_model=FeedbackResponse,
)
async def hr_onboarding_action(
    request: HrOnboardingActionRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    HR actions on an employee's onboarding record

    Raises:
        - 400 Bad Request: INVALID_ACTION, MISSING_PARAMETER, VALIDATION_ERROR
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: ONBOARDING_NOT_FOUND
    """
    if request.action != "provide_feedback":
        raise _invalid_action(request.action)
    if request.employee_id is None:
        raise _missing("employee_id")
    if not request.feedback:
        raise _missing("feedback")

    use_case = ProvideFeedbackUseCase(uow)
    result = await use_case.execute(
        identity, request.employee_id, request.feedback, request.satisfaction_score
    )

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/dashboard/stats",
    status_code=status.HTTP_200_OK,
    response_model=DashboardStatsResponse,
)
async def dashboard_stats(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DashboardStatsUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value
