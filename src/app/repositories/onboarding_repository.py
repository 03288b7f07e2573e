from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import (
    DocumentStatus,
    OnboardingDocument,
    OnboardingRecord,
    OnboardingStatus,
    OnboardingTask,
    PolicyAcknowledgment,
)


class IOnboardingRepository(ABC):
    """Onboarding record repository interface - application layer"""

    # Records

    @abstractmethod
    async def get_record(self, employee_id: UUID, company_id: UUID) -> Optional[OnboardingRecord]:
        """Get the record of an employee in a company"""
        pass

    @abstractmethod
    async def list_records_by_company(self, company_id: UUID) -> List[OnboardingRecord]:
        """All records of a company, newest first"""
        pass

    @abstractmethod
    async def count_records_by_status(self, company_id: UUID, status: OnboardingStatus) -> int:
        """Number of records of a company in a status"""
        pass

    @abstractmethod
    async def create_record(self, record: OnboardingRecord) -> OnboardingRecord:
        """Create a new record"""
        pass

    @abstractmethod
    async def update_record(self, record: OnboardingRecord) -> OnboardingRecord:
        """Update existing record"""
        pass

    # Checklist

    @abstractmethod
    async def list_tasks(self, record_id: UUID) -> List[OnboardingTask]:
        """Tasks of a record in checklist order"""
        pass

    @abstractmethod
    async def list_policies(self, record_id: UUID) -> List[PolicyAcknowledgment]:
        """Policy acknowledgments of a record in checklist order"""
        pass

    @abstractmethod
    async def add_checklist(
        self, tasks: List[OnboardingTask], policies: List[PolicyAcknowledgment]
    ) -> None:
        """Insert seeded tasks and policies"""
        pass

    @abstractmethod
    async def update_task(self, task: OnboardingTask) -> OnboardingTask:
        """Update existing task"""
        pass

    @abstractmethod
    async def update_policy(self, policy: PolicyAcknowledgment) -> PolicyAcknowledgment:
        """Update existing policy acknowledgment"""
        pass

    # Documents

    @abstractmethod
    async def list_documents(self, record_id: UUID) -> List[OnboardingDocument]:
        """Documents of a record, newest first"""
        pass

    @abstractmethod
    async def list_documents_by_company(
        self, company_id: UUID, status: Optional[DocumentStatus] = None
    ) -> List[OnboardingDocument]:
        """Documents across all records of a company, newest first"""
        pass

    @abstractmethod
    async def count_documents_by_status(self, company_id: UUID, status: DocumentStatus) -> int:
        """Number of documents of a company in a status"""
        pass

    @abstractmethod
    async def get_document(self, document_id: UUID, company_id: UUID) -> Optional[OnboardingDocument]:
        """Get a document by ID within a company"""
        pass

    @abstractmethod
    async def get_document_by_type(
        self, record_id: UUID, document_type: str
    ) -> Optional[OnboardingDocument]:
        """Get the document of a given type in a record"""
        pass

    @abstractmethod
    async def create_document(self, document: OnboardingDocument) -> OnboardingDocument:
        """Create a new document"""
        pass

    @abstractmethod
    async def update_document(self, document: OnboardingDocument) -> OnboardingDocument:
        """Update existing document"""
        pass

    @abstractmethod
    async def delete_document(self, document: OnboardingDocument) -> None:
        """Delete a document row"""
        pass
