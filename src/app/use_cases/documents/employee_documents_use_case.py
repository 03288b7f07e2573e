"""
Employee document access: list, download and delete.
"""

import logging
from typing import List
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_company
from src.app.use_cases.onboarding.dtos import DocumentResponse
from src.domain.access import has_hr_access
from src.domain.entities import DocumentStatus

from .dtos import DeleteFileResponse, FileDownload

logger = logging.getLogger(__name__)


class ListMyDocumentsUseCase:
    """The caller's own submitted documents, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[List[DocumentResponse]]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            record = await self.uow.onboarding.get_record(identity.user_id, identity.company_id)
            if record is None:
                return Return.ok([])
            documents = await self.uow.onboarding.list_documents(record.id)
            return Return.ok([DocumentResponse.from_entity(d) for d in documents])


class DownloadDocumentUseCase:
    """
    Business Rules:
    - Lookup is always filtered by the caller's company
    - The owner and HR-capable users of the company may download
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, document_id: UUID) -> Result[FileDownload]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            document = await self.uow.onboarding.get_document(document_id, identity.company_id)
            if document is None:
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document not found"))

            if document.employee_id != identity.user_id and not has_hr_access(identity.role):
                return Return.err(
                    Error("FORBIDDEN", "You do not have access to this document")
                )

            stored = await self.uow.files.get(document.file_id, identity.company_id)
            if stored is None:
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document file not found"))

            data = await self.uow.files.read(stored)
            return Return.ok(
                FileDownload(filename=stored.filename, content_type=stored.content_type, data=data)
            )


class DeleteDocumentUseCase:
    """
    Business Rules:
    - Only the owner deletes their document
    - Verified documents cannot be deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, document_id: UUID) -> Result[DeleteFileResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            document = await self.uow.onboarding.get_document(document_id, identity.company_id)
            if document is None:
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document not found"))

            if document.employee_id != identity.user_id:
                return Return.err(Error("FORBIDDEN", "You can only delete your own documents"))

            if document.status == DocumentStatus.verified:
                return Return.err(
                    Error("DOCUMENT_VERIFIED", "Verified documents cannot be deleted")
                )

            stored = await self.uow.files.get(document.file_id, identity.company_id)
            await self.uow.onboarding.delete_document(document)
            if stored is not None:
                await self.uow.files.delete(stored)
            await self.uow.commit()

            logger.info(f"Document {document_id} deleted by {identity.user_id}")
            return Return.ok(DeleteFileResponse(status="deleted", deleted_ids=[str(document_id)]))
