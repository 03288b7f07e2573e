from datetime import datetime
from uuid import uuid4

import pytest

from src.app.use_cases.documents import SubmitDocumentUseCase, UploadedFile
from src.domain.entities import (
    DocumentStatus,
    FileBucket,
    OnboardingDocument,
    OnboardingStatus,
    StoredFile,
)

PDF = "application/pdf"


def _upload(data=b"%PDF-1.4 id", content_type=PDF, filename="passport.pdf"):
    return UploadedFile(filename=filename, content_type=content_type, data=data)


@pytest.mark.asyncio
async def test_first_upload_opens_onboarding(mock_uow, company, employee_identity):
    mock_uow.companies.get_by_id.return_value = company
    mock_uow.onboarding.get_record.return_value = None
    mock_uow.onboarding.get_document_by_type.return_value = None

    result = await SubmitDocumentUseCase(mock_uow).execute(employee_identity, "id_proof", _upload())

    assert result.is_ok()
    response = result.value
    assert response.message == "Document uploaded successfully! Awaiting HR approval."
    assert response.document.status == "pending"
    assert response.document.document_type == "id_proof"
    assert response.onboarding_status == OnboardingStatus.in_progress.value

    stored, data = mock_uow.files.store.call_args[0]
    assert stored.bucket == FileBucket.employee_documents
    assert stored.company_id == company.id
    assert stored.owner_id == employee_identity.user_id
    assert stored.file_metadata["document_type"] == "id_proof"
    assert data == b"%PDF-1.4 id"

    document = mock_uow.onboarding.create_document.call_args[0][0]
    assert document.file_id == stored.id
    assert document.company_id == company.id
    mock_uow.onboarding.create_record.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_same_type_replaces_previous_document(
    mock_uow, company, employee_identity, in_progress_record
):
    previous_file = StoredFile(
        id=uuid4(),
        bucket=FileBucket.employee_documents,
        company_id=company.id,
        owner_id=employee_identity.user_id,
        filename="old.pdf",
        content_type=PDF,
        size=3,
    )
    previous = OnboardingDocument(
        id=uuid4(),
        record_id=in_progress_record.id,
        company_id=company.id,
        employee_id=employee_identity.user_id,
        file_id=previous_file.id,
        document_type="id_proof",
        filename="old.pdf",
        content_type=PDF,
        size=3,
        status=DocumentStatus.rejected,
        uploaded_at=datetime.utcnow(),
    )
    mock_uow.companies.get_by_id.return_value = company
    mock_uow.onboarding.get_record.return_value = in_progress_record
    mock_uow.onboarding.get_document_by_type.return_value = previous
    mock_uow.files.get.return_value = previous_file

    result = await SubmitDocumentUseCase(mock_uow).execute(employee_identity, "id_proof", _upload())

    assert result.is_ok()
    mock_uow.onboarding.delete_document.assert_called_once_with(previous)
    mock_uow.files.delete.assert_called_once_with(previous_file)
    mock_uow.onboarding.create_record.assert_not_called()
    assert result.value.document.id != str(previous.id)


@pytest.mark.asyncio
async def test_verified_document_is_not_replaced(
    mock_uow, company, employee_identity, in_progress_record
):
    verified = OnboardingDocument(
        id=uuid4(),
        record_id=in_progress_record.id,
        company_id=company.id,
        employee_id=employee_identity.user_id,
        file_id=uuid4(),
        document_type="id_proof",
        filename="passport.pdf",
        content_type=PDF,
        size=3,
        status=DocumentStatus.verified,
        uploaded_at=datetime.utcnow(),
    )
    mock_uow.companies.get_by_id.return_value = company
    mock_uow.onboarding.get_record.return_value = in_progress_record
    mock_uow.onboarding.get_document_by_type.return_value = verified

    result = await SubmitDocumentUseCase(mock_uow).execute(employee_identity, "id_proof", _upload())

    assert result.is_err()
    assert result.error.code == "DOCUMENT_VERIFIED"
    mock_uow.onboarding.delete_document.assert_not_called()
    mock_uow.files.delete.assert_not_called()
    mock_uow.files.store.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_only_employees_upload(mock_uow, hr_identity, unaffiliated_identity):
    result = await SubmitDocumentUseCase(mock_uow).execute(hr_identity, "id_proof", _upload())
    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"

    result = await SubmitDocumentUseCase(mock_uow).execute(unaffiliated_identity, "id_proof", _upload())
    assert result.is_err()
    assert result.error.code == "NO_COMPANY"

    mock_uow.files.store.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_uploads_store_nothing(mock_uow, employee_identity):
    use_case = SubmitDocumentUseCase(mock_uow, max_bytes=8)

    cases = [
        ("id_proof", _upload(data=b""), "EMPTY_FILE"),
        ("id_proof", _upload(data=b"123456789"), "FILE_TOO_LARGE"),
        ("id_proof", _upload(data=b"1", content_type="text/html"), "INVALID_FILE_TYPE"),
        ("  ", _upload(data=b"1"), "VALIDATION_ERROR"),
    ]
    for document_type, upload, code in cases:
        result = await use_case.execute(employee_identity, document_type, upload)
        assert result.is_err()
        assert result.error.code == code

    mock_uow.files.store.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_missing_company(mock_uow, employee_identity):
    mock_uow.companies.get_by_id.return_value = None

    result = await SubmitDocumentUseCase(mock_uow).execute(employee_identity, "id_proof", _upload())

    assert result.is_err()
    assert result.error.code == "COMPANY_NOT_FOUND"
