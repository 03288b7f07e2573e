from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.company_repository import ICompanyRepository
from src.domain.entities import Company


def _contains_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CompanyRepository(ICompanyRepository):
    """Company repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        """Get company by ID"""
        stmt = select(Company).where(Company.id == company_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_domain(self, domain: str) -> Optional[Company]:
        """Get company by domain"""
        stmt = select(Company).where(Company.domain == domain)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def search(self, query: str, limit: int = 10) -> List[Company]:
        """Case-insensitive substring search over name and domain"""
        pattern = _contains_pattern(query)
        stmt = (
            select(Company)
            .where(
                Company.is_active == True,  # noqa: E712
                or_(
                    col(Company.name).ilike(pattern, escape="\\"),
                    col(Company.domain).ilike(pattern, escape="\\"),
                ),
            )
            .order_by(col(Company.name))
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, company: Company) -> Company:
        """Create a new company"""
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def update(self, company: Company) -> Company:
        """Update existing company"""
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company
