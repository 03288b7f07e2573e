"""
Applicant resumes: public upload, HR review.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.domain.access import Capability
from src.domain.entities import FileBucket, ResumeMetadata, ResumeStatus, StoredFile

from .dtos import FileDownload, ResumeResponse, ResumeSubmission, UploadedFile
from .upload_validation import (
    MAX_UPLOAD_BYTES,
    RESUME_TYPES,
    normalize_content_type,
    safe_filename,
    validate_upload,
)

logger = logging.getLogger(__name__)


class UploadResumeUseCase:
    """
    Business Rules:
    - Public: applicants have no account
    - Target company must exist and be active
    - PDF, DOC or DOCX, at most MAX_UPLOAD_BYTES
    - New resumes are pending
    """

    def __init__(self, uow: UnitOfWork, max_bytes: int = MAX_UPLOAD_BYTES):
        self.uow = uow
        self.max_bytes = max_bytes

    async def execute(
        self, company_id: UUID, applicant: ResumeSubmission, upload: UploadedFile
    ) -> Result[ResumeResponse]:
        if not applicant.name.strip() or not applicant.email.strip() or not applicant.position.strip():
            return Return.err(
                Error("VALIDATION_ERROR", "Name, email and position are required")
            )

        invalid = validate_upload(upload.size, upload.content_type, RESUME_TYPES, self.max_bytes)
        if invalid:
            return Return.err(invalid)

        filename = safe_filename(upload.filename, default="resume")

        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None or not company.is_active:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            stored = await self.uow.files.store(
                StoredFile(
                    bucket=FileBucket.resumes,
                    company_id=company.id,
                    filename=filename,
                    content_type=normalize_content_type(upload.content_type),
                    size=upload.size,
                    status=ResumeStatus.pending.value,
                    file_metadata=ResumeMetadata(
                        applicant_name=applicant.name.strip(),
                        applicant_email=applicant.email.strip().lower(),
                        position=applicant.position.strip(),
                        phone=applicant.phone,
                        cover_letter=applicant.cover_letter,
                    ).model_dump(mode="json"),
                ),
                upload.data,
            )
            await self.uow.commit()

            logger.info(f"Resume {stored.id} received for company {company.id}")
            return Return.ok(ResumeResponse.from_entity(stored))


class ListResumesUseCase:
    """HR lists the company's resumes, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[List[ResumeResponse]]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            files = await self.uow.files.list_files(identity.company_id, FileBucket.resumes)
            return Return.ok([ResumeResponse.from_entity(f) for f in files])


class DownloadResumeUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, file_id: UUID) -> Result[FileDownload]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            stored = await self.uow.files.get(file_id, identity.company_id, FileBucket.resumes)
            if stored is None:
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            data = await self.uow.files.read(stored)
            return Return.ok(
                FileDownload(filename=stored.filename, content_type=stored.content_type, data=data)
            )


class UpdateResumeUseCase:
    """
    Business Rules:
    - Caller must be HR-capable
    - Status must be pending, reviewed, shortlisted or rejected
    - Records who reviewed and when
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        identity: Identity,
        file_id: UUID,
        status: str,
        notes: Optional[str] = None,
    ) -> Result[ResumeResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        try:
            new_status = ResumeStatus(status)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_STATUS",
                    "Status must be one of: pending, reviewed, shortlisted, rejected",
                )
            )

        async with self.uow:
            stored = await self.uow.files.get(file_id, identity.company_id, FileBucket.resumes)
            if stored is None:
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            metadata = stored.metadata_model
            metadata = metadata.model_copy(
                update={
                    "notes": notes if notes is not None else metadata.notes,
                    "reviewed_by": identity.display_name,
                    "reviewed_at": datetime.utcnow(),
                }
            )
            stored.file_metadata = metadata.model_dump(mode="json")
            stored.status = new_status.value
            stored = await self.uow.files.update(stored)
            await self.uow.commit()

            logger.info(f"Resume {stored.id} marked {new_status.value} by {identity.user_id}")
            return Return.ok(ResumeResponse.from_entity(stored))
