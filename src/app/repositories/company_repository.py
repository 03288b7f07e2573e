from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Company


class ICompanyRepository(ABC):
    """Company repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        """Get company by ID"""
        pass

    @abstractmethod
    async def get_by_domain(self, domain: str) -> Optional[Company]:
        """Get company by domain"""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> List[Company]:
        """Active companies whose name or domain contains query, sorted by name"""
        pass

    @abstractmethod
    async def create(self, company: Company) -> Company:
        """Create a new company"""
        pass

    @abstractmethod
    async def update(self, company: Company) -> Company:
        """Update existing company"""
        pass
