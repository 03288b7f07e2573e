"""
Document review by HR.
"""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.email_sender import DocumentReviewedEmail, IEmailSender
from src.app.services.onboarding_progress import apply_completion
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import Identity
from src.app.use_cases.guards import require_capability
from src.app.use_cases.onboarding.dtos import DocumentResponse
from src.domain.access import Capability
from src.domain.entities import CompletionPolicy, DocumentStatus

from .dtos import CompanyDocumentResponse, ReviewDocumentResponse

logger = logging.getLogger(__name__)

REVIEW_ACTIONS = {"approve": DocumentStatus.verified, "reject": DocumentStatus.rejected}


class ListCompanyDocumentsUseCase:
    """HR review queue: every document of the company, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, status: Optional[str] = None
    ) -> Result[List[CompanyDocumentResponse]]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        status_filter = None
        if status:
            try:
                status_filter = DocumentStatus(status)
            except ValueError:
                return Return.err(
                    Error("INVALID_STATUS", "Status must be one of: pending, verified, rejected")
                )

        async with self.uow:
            documents = await self.uow.onboarding.list_documents_by_company(
                identity.company_id, status_filter
            )
            employees = {
                u.id: u
                for u in await self.uow.users.get_by_ids(
                    list({d.employee_id for d in documents})
                )
            }

            rows = []
            for document in documents:
                employee = employees.get(document.employee_id)
                rows.append(
                    CompanyDocumentResponse(
                        **DocumentResponse.from_entity(document).model_dump(),
                        employee_id=str(document.employee_id),
                        employee_name=employee.name if employee else None,
                        employee_email=employee.email if employee else None,
                    )
                )
            return Return.ok(rows)


class ReviewDocumentUseCase:
    """
    Use case for approving or rejecting an employee document.

    Business Rules:
    - Caller must be HR-capable; documents of other companies are not found
    - approve -> verified; with the single_approved_document policy this
      completes the onboarding record immediately
    - reject -> rejected, requires a reason, record stays open
    - Completion never reverts, whatever the later decisions
    - The employee is notified after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        completion_policy: CompletionPolicy = CompletionPolicy.single_approved_document,
        email_sender: Optional[IEmailSender] = None,
    ):
        self.uow = uow
        self.completion_policy = completion_policy
        self.email_sender = email_sender

    async def execute(
        self,
        identity: Identity,
        document_id: UUID,
        action: str,
        rejection_reason: Optional[str] = None,
    ) -> Result[ReviewDocumentResponse]:
        denied = require_capability(identity, Capability.hr)
        if denied:
            return Return.err(denied)

        new_status = REVIEW_ACTIONS.get(action)
        if new_status is None:
            return Return.err(Error("INVALID_ACTION", "Action must be approve or reject"))

        reason = (rejection_reason or "").strip()
        if new_status == DocumentStatus.rejected and not reason:
            return Return.err(
                Error("REJECTION_REASON_REQUIRED", "A reason is required to reject a document")
            )

        now = datetime.utcnow()

        async with self.uow:
            document = await self.uow.onboarding.get_document(document_id, identity.company_id)
            if document is None:
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document not found"))

            record = await self.uow.onboarding.get_record(document.employee_id, document.company_id)
            if record is None:
                return Return.err(Error("ONBOARDING_NOT_FOUND", "Onboarding record not found"))

            document.status = new_status
            document.verified_by = identity.display_name
            document.verified_at = now
            document.rejection_reason = reason if new_status == DocumentStatus.rejected else None
            document = await self.uow.onboarding.update_document(document)

            stored = await self.uow.files.get(document.file_id, identity.company_id)
            if stored is not None:
                stored.status = new_status.value
                await self.uow.files.update(stored)

            tasks = await self.uow.onboarding.list_tasks(record.id)
            policies = await self.uow.onboarding.list_policies(record.id)
            documents = await self.uow.onboarding.list_documents(record.id)
            if apply_completion(record, self.completion_policy, tasks, policies, documents, now):
                record = await self.uow.onboarding.update_record(record)

            employee = await self.uow.users.get_by_id(document.employee_id)
            await self.uow.commit()

            logger.info(
                f"Document {document.id} {new_status.value} by {identity.user_id}; "
                f"onboarding {record.id} is {record.status.value}"
            )

            response = ReviewDocumentResponse(
                document=DocumentResponse.from_entity(document),
                onboarding_status=record.status.value,
            )
            message = None
            if employee is not None:
                message = DocumentReviewedEmail(
                    to=employee.email,
                    employee_name=employee.name,
                    document_type=document.document_type,
                    approved=new_status == DocumentStatus.verified,
                    rejection_reason=document.rejection_reason,
                )

        if self.email_sender is not None and message is not None:
            await asyncio.to_thread(self.email_sender.send_document_reviewed, message)

        return Return.ok(response)
