"""
Company policy files: upload with text extraction, listing, download and
cascading delete.

A policy is stored as its original file plus, when extraction succeeds, a
``.txt`` sibling whose original_file_id points back at the original.
"""

import asyncio
import logging
import os
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.text_extractor import ExtractedText, ITextExtractor, TextExtractionError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability, require_company
from src.domain.access import Capability
from src.domain.entities import FileBucket, PolicyFileType, PolicyMetadata, StoredFile

from .dtos import (
    DeleteFileResponse,
    FileDownload,
    PolicyFileResponse,
    PolicyListResponse,
    PolicyTextResponse,
    PolicyUploadResponse,
    UploadedFile,
)
from .upload_validation import (
    MAX_UPLOAD_BYTES,
    POLICY_TYPES,
    normalize_content_type,
    safe_filename,
    validate_upload,
)

logger = logging.getLogger(__name__)


def _is_extracted_text(stored_file: StoredFile) -> bool:
    return stored_file.original_file_id is not None


class UploadPolicyUseCase:
    """
    Business Rules:
    - Caller must be HR-capable
    - PDF, DOC, DOCX or plain text, at most MAX_UPLOAD_BYTES
    - Extraction failure still keeps the original; text_extracted is False
    - Original and text sibling commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        text_extractor: ITextExtractor,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self.uow = uow
        self.text_extractor = text_extractor
        self.max_bytes = max_bytes

    async def execute(
        self, identity: Identity, upload: UploadedFile
    ) -> Result[PolicyUploadResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        invalid = validate_upload(upload.size, upload.content_type, POLICY_TYPES, self.max_bytes)
        if invalid:
            return Return.err(invalid)

        content_type = normalize_content_type(upload.content_type)
        filename = safe_filename(upload.filename, default="policy")

        extracted: Optional[ExtractedText] = None
        try:
            extracted = await asyncio.to_thread(
                self.text_extractor.extract, upload.data, content_type, filename
            )
        except TextExtractionError as e:
            logger.warning(f"Text extraction failed for policy {filename}: {e}")

        now = datetime.utcnow()

        async with self.uow:
            original = await self.uow.files.store(
                StoredFile(
                    bucket=FileBucket.policies,
                    company_id=identity.company_id,
                    owner_id=identity.user_id,
                    filename=filename,
                    content_type=content_type,
                    size=upload.size,
                    file_metadata=PolicyMetadata(
                        file_type=PolicyFileType.original,
                        original_name=filename,
                        text_length=extracted.length if extracted else None,
                        word_count=extracted.word_count if extracted else None,
                        extraction_method=extracted.method if extracted else None,
                    ).model_dump(mode="json"),
                    upload_date=now,
                ),
                upload.data,
            )

            text_file = None
            if extracted is not None:
                text_name = f"{os.path.splitext(filename)[0]}.txt"
                text_bytes = extracted.text.encode("utf-8")
                text_file = await self.uow.files.store(
                    StoredFile(
                        bucket=FileBucket.policies,
                        company_id=identity.company_id,
                        owner_id=identity.user_id,
                        filename=text_name,
                        content_type="text/plain",
                        size=len(text_bytes),
                        original_file_id=original.id,
                        file_metadata=PolicyMetadata(
                            file_type=PolicyFileType.extracted_text,
                            original_name=filename,
                            text_length=extracted.length,
                            word_count=extracted.word_count,
                            extraction_method=extracted.method,
                        ).model_dump(mode="json"),
                        upload_date=now,
                    ),
                    text_bytes,
                )

            await self.uow.commit()

            logger.info(f"Policy {original.id} uploaded for company {identity.company_id}")
            return Return.ok(
                PolicyUploadResponse(
                    policy_file_id=str(original.id),
                    text_file_id=str(text_file.id) if text_file else None,
                    filename=filename,
                    text_extracted=extracted is not None,
                    text_length=extracted.length if extracted else 0,
                    word_count=extracted.word_count if extracted else 0,
                    extraction_method=extracted.method if extracted else None,
                    warnings=extracted.warnings if extracted else [],
                )
            )


class ListPoliciesUseCase:
    """Originals of the company, each joined with its text sibling, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[PolicyListResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            files = await self.uow.files.list_files(identity.company_id, FileBucket.policies)

            siblings = {f.original_file_id: f for f in files if _is_extracted_text(f)}
            entries = []
            for stored in files:
                if _is_extracted_text(stored):
                    continue
                sibling = siblings.get(stored.id)
                metadata = sibling.metadata_model if sibling else stored.metadata_model
                entries.append(
                    PolicyFileResponse(
                        id=str(stored.id),
                        filename=stored.filename,
                        content_type=stored.content_type,
                        size=stored.size,
                        upload_date=stored.upload_date.isoformat(),
                        text_file_id=str(sibling.id) if sibling else None,
                        text_length=metadata.text_length,
                        word_count=metadata.word_count,
                    )
                )
            return Return.ok(PolicyListResponse(files=entries, total=len(entries)))


class DownloadPolicyUseCase:
    """Any member of the company reads its policies"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, file_id: UUID) -> Result[FileDownload]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            stored = await self.uow.files.get(file_id, identity.company_id, FileBucket.policies)
            if stored is None:
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            data = await self.uow.files.read(stored)
            return Return.ok(
                FileDownload(filename=stored.filename, content_type=stored.content_type, data=data)
            )


class GetPolicyTextUseCase:
    """Extracted text of a policy, addressed by the original or the text file"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, file_id: UUID) -> Result[PolicyTextResponse]:
        denied = require_company(identity)
        if denied:
            return Return.err(denied)

        async with self.uow:
            stored = await self.uow.files.get(file_id, identity.company_id, FileBucket.policies)
            if stored is None:
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            if not _is_extracted_text(stored):
                stored = await self.uow.files.get_derived(stored.id, identity.company_id)
                if stored is None:
                    return Return.err(
                        Error("TEXT_NOT_FOUND", "No extracted text for this policy")
                    )

            data = await self.uow.files.read(stored)
            return Return.ok(
                PolicyTextResponse(file_id=str(stored.id), text=data.decode("utf-8", "replace"))
            )


class DeletePolicyUseCase:
    """
    Business Rules:
    - Caller must be HR-capable
    - Deleting an original also deletes its text sibling
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, file_id: UUID) -> Result[DeleteFileResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        async with self.uow:
            stored = await self.uow.files.get(file_id, identity.company_id, FileBucket.policies)
            if stored is None:
                return Return.err(Error("FILE_NOT_FOUND", "File not found"))

            deleted = []
            if not _is_extracted_text(stored):
                sibling = await self.uow.files.get_derived(stored.id, identity.company_id)
                if sibling is not None:
                    await self.uow.files.delete(sibling)
                    deleted.append(str(sibling.id))

            await self.uow.files.delete(stored)
            deleted.append(str(stored.id))
            await self.uow.commit()

            logger.info(f"Policy files {deleted} deleted by {identity.user_id}")
            return Return.ok(DeleteFileResponse(status="deleted", deleted_ids=deleted))
