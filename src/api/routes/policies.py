from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status

from config import ApplicationConfig
from src.api.error import http_error
from src.api.utils.files import file_response, read_upload
from src.app.services.text_extractor import ITextExtractor
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.documents import (
    DeleteFileResponse,
    DeletePolicyUseCase,
    DownloadPolicyUseCase,
    GetPolicyTextUseCase,
    ListPoliciesUseCase,
    PolicyListResponse,
    PolicyTextResponse,
    PolicyUploadResponse,
    UploadPolicyUseCase,
)
from src.depends import get_identity, get_text_extractor, get_unit_of_work

router = APIRouter(prefix="/company", tags=["Policies"])


@router.post(
    "/policy-upload",
    status_code=status.HTTP_201_CREATED,
    response_model=PolicyUploadResponse,
)
async def upload_policy(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    text_extractor: ITextExtractor = Depends(get_text_extractor),
):
    """
    Upload a company policy and store its extracted text alongside

    Raises:
        - 400 Bad Request: EMPTY_FILE, FILE_TOO_LARGE, INVALID_FILE_TYPE
        - 403 Forbidden: INSUFFICIENT_ROLE, NO_COMPANY
    """
    upload = await read_upload(file, ApplicationConfig.MAX_UPLOAD_BYTES)

    use_case = UploadPolicyUseCase(
        uow, text_extractor, max_bytes=ApplicationConfig.MAX_UPLOAD_BYTES
    )
    result = await use_case.execute(identity, upload)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get("/policies", status_code=status.HTTP_200_OK, response_model=PolicyListResponse)
async def list_policies(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPoliciesUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get("/policy/{file_id}", status_code=status.HTTP_200_OK)
async def download_policy(
    file_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DownloadPolicyUseCase(uow).execute(identity, file_id)
    if result.is_err():
        raise http_error(result.error)
    return file_response(result.value)


@router.get(
    "/policy/{file_id}/text",
    status_code=status.HTTP_200_OK,
    response_model=PolicyTextResponse,
)
async def get_policy_text(
    file_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPolicyTextUseCase(uow).execute(identity, file_id)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.delete(
    "/policy/{file_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteFileResponse,
)
async def delete_policy(
    file_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete a policy together with its extracted text"""
    result = await DeletePolicyUseCase(uow).execute(identity, file_id)
    if result.is_err():
        raise http_error(result.error)
    return result.value
