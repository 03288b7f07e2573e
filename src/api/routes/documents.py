from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import http_error
from src.api.utils.files import file_response, read_upload
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.documents import (
    CompanyDocumentResponse,
    DeleteDocumentUseCase,
    DeleteFileResponse,
    DownloadDocumentUseCase,
    ListCompanyDocumentsUseCase,
    ListMyDocumentsUseCase,
    ReviewDocumentResponse,
    ReviewDocumentUseCase,
    SubmitDocumentResponse,
    SubmitDocumentUseCase,
)
from src.app.use_cases.onboarding import DocumentResponse
from src.depends import (
    get_completion_policy,
    get_email_sender,
    get_identity,
    get_unit_of_work,
)
from src.domain.entities import CompletionPolicy

router = APIRouter(tags=["Documents"])


class ReviewDocumentRequest(BaseModel):
    action: str = Field(..., description="approve or reject")
    rejection_reason: Optional[str] = Field(None, max_length=1000)


# ============================================================================
# Employee
# ============================================================================


@router.post(
    "/employee/documents/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmitDocumentResponse,
)
async def upload_document(
    file: UploadFile = File(...),
    document_type: str = Form(...),
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Upload a verification document for the caller's onboarding

    A document of the same type replaces the previous one.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, EMPTY_FILE, FILE_TOO_LARGE, INVALID_FILE_TYPE
        - 403 Forbidden: INSUFFICIENT_ROLE (only employees upload)
        - 404 Not Found: COMPANY_NOT_FOUND
    """
    upload = await read_upload(file, ApplicationConfig.MAX_UPLOAD_BYTES)

    use_case = SubmitDocumentUseCase(uow, max_bytes=ApplicationConfig.MAX_UPLOAD_BYTES)
    result = await use_case.execute(identity, document_type, upload)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get(
    "/employee/documents",
    status_code=status.HTTP_200_OK,
    response_model=List[DocumentResponse],
)
async def list_my_documents(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMyDocumentsUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get("/employee/documents/{document_id}", status_code=status.HTTP_200_OK)
async def download_document(
    document_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Stream a document inline

    Raises:
        - 403 Forbidden: FORBIDDEN (neither the owner nor HR)
        - 404 Not Found: DOCUMENT_NOT_FOUND (including other companies' ids)
    """
    result = await DownloadDocumentUseCase(uow).execute(identity, document_id)
    if result.is_err():
        raise http_error(result.error)
    return file_response(result.value)


@router.delete(
    "/employee/documents/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteFileResponse,
)
async def delete_document(
    document_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete one of the caller's documents

    Raises:
        - 403 Forbidden: FORBIDDEN, DOCUMENT_VERIFIED
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    result = await DeleteDocumentUseCase(uow).execute(identity, document_id)
    if result.is_err():
        raise http_error(result.error)
    return result.value


# ============================================================================
# HR review
# ============================================================================


@router.get(
    "/hr/documents",
    status_code=status.HTTP_200_OK,
    response_model=List[CompanyDocumentResponse],
)
async def list_company_documents(
    status_filter: Optional[str] = Query(None, alias="status"),
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListCompanyDocumentsUseCase(uow).execute(identity, status_filter)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.patch(
    "/hr/documents/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=ReviewDocumentResponse,
)
async def review_document(
    document_id: UUID,
    request: ReviewDocumentRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    completion_policy: CompletionPolicy = Depends(get_completion_policy),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Approve or reject an employee document

    Approval marks the document verified and re-evaluates onboarding
    completion. The employee is notified by email after commit.

    Raises:
        - 400 Bad Request: INVALID_ACTION, REJECTION_REASON_REQUIRED
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    use_case = ReviewDocumentUseCase(uow, completion_policy, email_sender)
    result = await use_case.execute(
        identity, document_id, request.action, request.rejection_reason
    )

    if result.is_err():
        raise http_error(result.error)

    return result.value
