from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.stored_file_repository import IStoredFileRepository
from src.domain.entities import CHUNK_SIZE, FileBucket, StoredFile, StoredFileChunk


class StoredFileRepository(IStoredFileRepository):
    """Chunked binary store on top of the relational database.

    Metadata lives in ``stored_files`` and bytes in ``stored_file_chunks``,
    split into CHUNK_SIZE pieces. Both are written through the same session,
    so they commit or roll back together with the rest of the unit of work.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def store(self, stored_file: StoredFile, data: bytes) -> StoredFile:
        stored_file.size = len(data)
        self.session.add(stored_file)
        await self.session.flush()

        chunks = [
            StoredFileChunk(file_id=stored_file.id, n=n, data=data[offset : offset + CHUNK_SIZE])
            for n, offset in enumerate(range(0, len(data), CHUNK_SIZE))
        ]
        if not chunks:
            chunks = [StoredFileChunk(file_id=stored_file.id, n=0, data=b"")]
        self.session.add_all(chunks)
        await self.session.flush()
        await self.session.refresh(stored_file)
        return stored_file

    async def get(
        self, file_id: UUID, company_id: UUID, bucket: Optional[FileBucket] = None
    ) -> Optional[StoredFile]:
        stmt = select(StoredFile).where(
            StoredFile.id == file_id,
            StoredFile.company_id == company_id,
        )
        if bucket is not None:
            stmt = stmt.where(StoredFile.bucket == bucket)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def read(self, stored_file: StoredFile) -> bytes:
        stmt = (
            select(StoredFileChunk)
            .where(StoredFileChunk.file_id == stored_file.id)
            .order_by(col(StoredFileChunk.n))
        )
        result = await self.session.exec(stmt)
        return b"".join(chunk.data for chunk in result.all())

    async def list_files(
        self, company_id: UUID, bucket: FileBucket, owner_id: Optional[UUID] = None
    ) -> List[StoredFile]:
        stmt = select(StoredFile).where(
            StoredFile.company_id == company_id,
            StoredFile.bucket == bucket,
        )
        if owner_id is not None:
            stmt = stmt.where(StoredFile.owner_id == owner_id)
        stmt = stmt.order_by(col(StoredFile.upload_date).desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_derived(self, original_file_id: UUID, company_id: UUID) -> Optional[StoredFile]:
        stmt = select(StoredFile).where(
            StoredFile.original_file_id == original_file_id,
            StoredFile.company_id == company_id,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, stored_file: StoredFile) -> StoredFile:
        self.session.add(stored_file)
        await self.session.flush()
        await self.session.refresh(stored_file)
        return stored_file

    async def delete(self, stored_file: StoredFile) -> None:
        await self.session.execute(
            delete(StoredFileChunk).where(StoredFileChunk.file_id == stored_file.id)
        )
        await self.session.delete(stored_file)
        await self.session.flush()
