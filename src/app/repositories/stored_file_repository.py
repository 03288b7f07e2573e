from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import FileBucket, StoredFile


class IStoredFileRepository(ABC):
    """Binary object store interface - application layer

    Every lookup takes the company ID: files of other companies are
    indistinguishable from missing files.
    """

    @abstractmethod
    async def store(self, stored_file: StoredFile, data: bytes) -> StoredFile:
        """Persist metadata and bytes"""
        pass

    @abstractmethod
    async def get(
        self, file_id: UUID, company_id: UUID, bucket: Optional[FileBucket] = None
    ) -> Optional[StoredFile]:
        """Get file metadata by ID within a company"""
        pass

    @abstractmethod
    async def read(self, stored_file: StoredFile) -> bytes:
        """Read the bytes of a file"""
        pass

    @abstractmethod
    async def list_files(
        self, company_id: UUID, bucket: FileBucket, owner_id: Optional[UUID] = None
    ) -> List[StoredFile]:
        """Files of a bucket within a company, newest first"""
        pass

    @abstractmethod
    async def get_derived(self, original_file_id: UUID, company_id: UUID) -> Optional[StoredFile]:
        """Get the file derived from an original, if any"""
        pass

    @abstractmethod
    async def update(self, stored_file: StoredFile) -> StoredFile:
        """Update file metadata"""
        pass

    @abstractmethod
    async def delete(self, stored_file: StoredFile) -> None:
        """Delete metadata and bytes"""
        pass
