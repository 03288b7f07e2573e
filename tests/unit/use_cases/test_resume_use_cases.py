from uuid import uuid4

import pytest

from src.app.use_cases.documents import (
    ResumeSubmission,
    UpdateResumeUseCase,
    UploadResumeUseCase,
    UploadedFile,
)
from src.domain.entities import FileBucket, ResumeMetadata, StoredFile


@pytest.fixture
def applicant():
    return ResumeSubmission(name="Ada Lovelace", email=" Ada@Example.com ", position="Engineer")


@pytest.fixture
def resume_upload():
    return UploadedFile(filename="ada.pdf", content_type="application/pdf", data=b"%PDF resume")


@pytest.fixture
def stored_resume(company):
    return StoredFile(
        id=uuid4(),
        bucket=FileBucket.resumes,
        company_id=company.id,
        filename="ada.pdf",
        content_type="application/pdf",
        size=11,
        status="pending",
        file_metadata=ResumeMetadata(
            applicant_name="Ada Lovelace", applicant_email="ada@example.com", position="Engineer"
        ).model_dump(mode="json"),
    )


@pytest.mark.asyncio
async def test_public_upload(mock_uow, company, applicant, resume_upload):
    mock_uow.companies.get_by_id.return_value = company

    result = await UploadResumeUseCase(mock_uow).execute(company.id, applicant, resume_upload)

    assert result.is_ok()
    assert result.value.status == "pending"
    assert result.value.applicant_email == "ada@example.com"
    stored = mock_uow.files.store.call_args[0][0]
    assert stored.bucket == FileBucket.resumes
    assert stored.company_id == company.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_upload_to_inactive_company(mock_uow, company, applicant, resume_upload):
    company.is_active = False
    mock_uow.companies.get_by_id.return_value = company

    result = await UploadResumeUseCase(mock_uow).execute(company.id, applicant, resume_upload)

    assert result.error.code == "COMPANY_NOT_FOUND"
    mock_uow.files.store.assert_not_called()


@pytest.mark.asyncio
async def test_upload_validation(mock_uow, company, resume_upload):
    blank = ResumeSubmission(name=" ", email="a@b.com", position="Engineer")
    result = await UploadResumeUseCase(mock_uow).execute(company.id, blank, resume_upload)
    assert result.error.code == "VALIDATION_ERROR"

    image = UploadedFile(filename="me.png", content_type="image/png", data=b"\x89PNG")
    applicant = ResumeSubmission(name="Ada", email="a@b.com", position="Engineer")
    result = await UploadResumeUseCase(mock_uow).execute(company.id, applicant, image)
    assert result.error.code == "INVALID_FILE_TYPE"


@pytest.mark.asyncio
async def test_hr_review_records_reviewer(mock_uow, hr_identity, stored_resume):
    mock_uow.files.get.return_value = stored_resume

    result = await UpdateResumeUseCase(mock_uow).execute(
        hr_identity, stored_resume.id, "shortlisted", "Strong systems background"
    )

    assert result.is_ok()
    assert result.value.status == "shortlisted"
    assert result.value.notes == "Strong systems background"
    assert result.value.reviewed_by == "Helen HR"
    assert result.value.reviewed_at is not None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_review_rejects_unknown_status(mock_uow, hr_identity, stored_resume):
    result = await UpdateResumeUseCase(mock_uow).execute(hr_identity, stored_resume.id, "hired")

    assert result.error.code == "INVALID_STATUS"
    mock_uow.files.get.assert_not_called()


@pytest.mark.asyncio
async def test_employees_cannot_review(mock_uow, employee_identity, stored_resume):
    result = await UpdateResumeUseCase(mock_uow).execute(
        employee_identity, stored_resume.id, "reviewed"
    )

    assert result.error.code == "INSUFFICIENT_ROLE"
