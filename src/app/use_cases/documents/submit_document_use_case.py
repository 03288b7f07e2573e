"""
Submit Document Use Case

An employee uploads a verification document for HR review.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.onboarding_progress import open_record
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.app.use_cases.onboarding.dtos import DocumentResponse
from src.domain.access import Capability
from src.domain.entities import (
    DocumentStatus,
    EmployeeDocumentMetadata,
    FileBucket,
    OnboardingDocument,
    StoredFile,
)

from .dtos import SubmitDocumentResponse, UploadedFile
from .upload_validation import (
    EMPLOYEE_DOCUMENT_TYPES,
    MAX_UPLOAD_BYTES,
    normalize_content_type,
    safe_filename,
    validate_upload,
)

logger = logging.getLogger(__name__)

UPLOAD_MESSAGE = "Document uploaded successfully! Awaiting HR approval."


class SubmitDocumentUseCase:
    """
    Business Rules:
    - Only employees upload verification documents
    - At most MAX_UPLOAD_BYTES; PDF, DOC, DOCX, JPEG or PNG
    - A document of the same type replaces the previous one and its file,
      unless the previous one is already verified
    - The onboarding record is created or started on first upload
    - Bytes, metadata and the record change commit together
    """

    def __init__(self, uow: UnitOfWork, max_bytes: int = MAX_UPLOAD_BYTES):
        self.uow = uow
        self.max_bytes = max_bytes

    async def execute(
        self, identity: Identity, document_type: str, upload: UploadedFile
    ) -> Result[SubmitDocumentResponse]:
        denied = require_capability(identity, Capability.employee)
        if denied:
            return Return.err(denied)

        document_type = (document_type or "").strip()
        if not document_type or len(document_type) > 100:
            return Return.err(Error("VALIDATION_ERROR", "A document type is required"))

        invalid = validate_upload(
            upload.size, upload.content_type, EMPLOYEE_DOCUMENT_TYPES, self.max_bytes
        )
        if invalid:
            return Return.err(invalid)

        content_type = normalize_content_type(upload.content_type)
        filename = safe_filename(upload.filename, default=f"{document_type}")
        now = datetime.utcnow()

        async with self.uow:
            company = await self.uow.companies.get_by_id(identity.company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            record = await open_record(self.uow, identity.user_id, company, now)

            previous = await self.uow.onboarding.get_document_by_type(record.id, document_type)
            if previous is not None:
                if previous.status == DocumentStatus.verified:
                    return Return.err(
                        Error(
                            "DOCUMENT_VERIFIED",
                            f"Your {document_type} document is already verified",
                        )
                    )
                previous_file = await self.uow.files.get(previous.file_id, company.id)
                await self.uow.onboarding.delete_document(previous)
                if previous_file is not None:
                    await self.uow.files.delete(previous_file)
                logger.info(f"Replacing {document_type} document {previous.id} of {identity.user_id}")

            stored = await self.uow.files.store(
                StoredFile(
                    bucket=FileBucket.employee_documents,
                    company_id=company.id,
                    owner_id=identity.user_id,
                    filename=filename,
                    content_type=content_type,
                    size=upload.size,
                    status=DocumentStatus.pending.value,
                    file_metadata=EmployeeDocumentMetadata(
                        document_type=document_type, original_name=filename
                    ).model_dump(mode="json"),
                    upload_date=now,
                ),
                upload.data,
            )

            document = await self.uow.onboarding.create_document(
                OnboardingDocument(
                    record_id=record.id,
                    company_id=company.id,
                    employee_id=identity.user_id,
                    file_id=stored.id,
                    document_type=document_type,
                    filename=filename,
                    content_type=content_type,
                    size=upload.size,
                    status=DocumentStatus.pending,
                    uploaded_at=now,
                )
            )

            await self.uow.commit()

            logger.info(f"Document {document.id} ({document_type}) uploaded by {identity.user_id}")
            return Return.ok(
                SubmitDocumentResponse(
                    message=UPLOAD_MESSAGE,
                    document=DocumentResponse.from_entity(document),
                    onboarding_status=record.status.value,
                )
            )
