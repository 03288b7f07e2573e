"""
StoredFile Entities

Binary object store: file metadata plus fixed-size data chunks.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import LargeBinary
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from .enums import FileBucket
from .file_metadata import FileMetadata, parse_file_metadata

CHUNK_SIZE = 255 * 1024


class StoredFile(SQLModel, table=True):
    """
    StoredFile entity - metadata for one binary object.

    Business Rules:
    - Every read filters by company_id
    - file_metadata is a tagged variant validated on write and read
    - original_file_id links an extracted-text file to its policy original
    """

    __tablename__ = "stored_files"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    bucket: FileBucket = Field(nullable=False)
    company_id: UUID = Field(foreign_key="companies.id", nullable=False, index=True)
    owner_id: Optional[UUID] = Field(default=None, index=True)

    filename: str = Field(max_length=255)
    content_type: str = Field(max_length=100)
    size: int
    status: Optional[str] = Field(default=None, max_length=50)

    original_file_id: Optional[UUID] = Field(
        default=None, foreign_key="stored_files.id", index=True
    )
    file_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    upload_date: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_stored_file_company_bucket", "company_id", "bucket"),)

    @property
    def metadata_model(self) -> FileMetadata:
        return parse_file_metadata(self.file_metadata)


class StoredFileChunk(SQLModel, table=True):
    """Data chunk n of a stored file"""

    __tablename__ = "stored_file_chunks"

    file_id: UUID = Field(foreign_key="stored_files.id", primary_key=True)
    n: int = Field(primary_key=True)
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
