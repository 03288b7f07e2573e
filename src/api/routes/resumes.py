from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import http_error
from src.api.utils.files import file_response, read_upload
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Identity
from src.app.use_cases.documents import (
    DownloadResumeUseCase,
    ListResumesUseCase,
    ResumeResponse,
    ResumeSubmission,
    UpdateResumeUseCase,
    UploadResumeUseCase,
)
from src.depends import get_identity, get_unit_of_work

router = APIRouter(prefix="/resumes", tags=["Resumes"])


class UpdateResumeRequest(BaseModel):
    status: str = Field(..., description="pending, reviewed, shortlisted or rejected")
    notes: Optional[str] = Field(None, max_length=5000)


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=ResumeResponse)
async def upload_resume(
    company_id: UUID = Form(...),
    name: str = Form(...),
    email: str = Form(...),
    position: str = Form(...),
    phone: Optional[str] = Form(None),
    cover_letter: Optional[str] = Form(None),
    file: UploadFile = File(...),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Public resume submission for an active company

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, EMPTY_FILE, FILE_TOO_LARGE, INVALID_FILE_TYPE
        - 404 Not Found: COMPANY_NOT_FOUND
    """
    upload = await read_upload(file, ApplicationConfig.MAX_UPLOAD_BYTES)
    applicant = ResumeSubmission(
        name=name, email=email, position=position, phone=phone, cover_letter=cover_letter
    )

    use_case = UploadResumeUseCase(uow, max_bytes=ApplicationConfig.MAX_UPLOAD_BYTES)
    result = await use_case.execute(company_id, applicant, upload)

    if result.is_err():
        raise http_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[ResumeResponse])
async def list_resumes(
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListResumesUseCase(uow).execute(identity)
    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get("/{file_id}", status_code=status.HTTP_200_OK)
async def download_resume(
    file_id: UUID,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DownloadResumeUseCase(uow).execute(identity, file_id)
    if result.is_err():
        raise http_error(result.error)
    return file_response(result.value)


@router.put("/{file_id}", status_code=status.HTTP_200_OK, response_model=ResumeResponse)
async def update_resume(
    file_id: UUID,
    request: UpdateResumeRequest,
    identity: Identity = Depends(get_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a resume's review status and notes

    Raises:
        - 400 Bad Request: INVALID_STATUS
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: FILE_NOT_FOUND
    """
    use_case = UpdateResumeUseCase(uow)
    result = await use_case.execute(identity, file_id, request.status, request.notes)

    if result.is_err():
        raise http_error(result.error)

    return result.value
