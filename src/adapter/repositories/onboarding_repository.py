from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.onboarding_repository import IOnboardingRepository
from src.domain.entities import (
    DocumentStatus,
    OnboardingDocument,
    OnboardingRecord,
    OnboardingStatus,
    OnboardingTask,
    PolicyAcknowledgment,
)


class OnboardingRepository(IOnboardingRepository):
    """Onboarding repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    # Records

    async def get_record(self, employee_id: UUID, company_id: UUID) -> Optional[OnboardingRecord]:
        stmt = select(OnboardingRecord).where(
            OnboardingRecord.employee_id == employee_id,
            OnboardingRecord.company_id == company_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_records_by_company(self, company_id: UUID) -> List[OnboardingRecord]:
        stmt = (
            select(OnboardingRecord)
            .where(OnboardingRecord.company_id == company_id)
            .order_by(col(OnboardingRecord.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_records_by_status(self, company_id: UUID, status: OnboardingStatus) -> int:
        stmt = (
            select(func.count())
            .select_from(OnboardingRecord)
            .where(
                OnboardingRecord.company_id == company_id,
                OnboardingRecord.status == status,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create_record(self, record: OnboardingRecord) -> OnboardingRecord:
        return await self._save(record)

    async def update_record(self, record: OnboardingRecord) -> OnboardingRecord:
        return await self._save(record)

    # Checklist

    async def list_tasks(self, record_id: UUID) -> List[OnboardingTask]:
        stmt = (
            select(OnboardingTask)
            .where(OnboardingTask.record_id == record_id)
            .order_by(col(OnboardingTask.position))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_policies(self, record_id: UUID) -> List[PolicyAcknowledgment]:
        stmt = (
            select(PolicyAcknowledgment)
            .where(PolicyAcknowledgment.record_id == record_id)
            .order_by(col(PolicyAcknowledgment.position))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def add_checklist(
        self, tasks: List[OnboardingTask], policies: List[PolicyAcknowledgment]
    ) -> None:
        self.session.add_all([*tasks, *policies])
        await self.session.flush()

    async def update_task(self, task: OnboardingTask) -> OnboardingTask:
        return await self._save(task)

    async def update_policy(self, policy: PolicyAcknowledgment) -> PolicyAcknowledgment:
        return await self._save(policy)

    # Documents

    async def list_documents(self, record_id: UUID) -> List[OnboardingDocument]:
        stmt = (
            select(OnboardingDocument)
            .where(OnboardingDocument.record_id == record_id)
            .order_by(col(OnboardingDocument.uploaded_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_documents_by_company(
        self, company_id: UUID, status: Optional[DocumentStatus] = None
    ) -> List[OnboardingDocument]:
        stmt = select(OnboardingDocument).where(OnboardingDocument.company_id == company_id)
        if status is not None:
            stmt = stmt.where(OnboardingDocument.status == status)
        stmt = stmt.order_by(col(OnboardingDocument.uploaded_at).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_documents_by_status(self, company_id: UUID, status: DocumentStatus) -> int:
        stmt = (
            select(func.count())
            .select_from(OnboardingDocument)
            .where(
                OnboardingDocument.company_id == company_id,
                OnboardingDocument.status == status,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def get_document(self, document_id: UUID, company_id: UUID) -> Optional[OnboardingDocument]:
        stmt = select(OnboardingDocument).where(
            OnboardingDocument.id == document_id,
            OnboardingDocument.company_id == company_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_document_by_type(
        self, record_id: UUID, document_type: str
    ) -> Optional[OnboardingDocument]:
        stmt = select(OnboardingDocument).where(
            OnboardingDocument.record_id == record_id,
            OnboardingDocument.document_type == document_type,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create_document(self, document: OnboardingDocument) -> OnboardingDocument:
        return await self._save(document)

    async def update_document(self, document: OnboardingDocument) -> OnboardingDocument:
        return await self._save(document)

    async def delete_document(self, document: OnboardingDocument) -> None:
        await self.session.delete(document)
        await self.session.flush()
