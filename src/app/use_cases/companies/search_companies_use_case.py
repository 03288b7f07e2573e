from typing import List

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import CompanySummary

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


class SearchCompaniesUseCase:
    """Active companies matching name or domain; short queries return nothing"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, query: str) -> Result[List[CompanySummary]]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return Return.ok([])

        async with self.uow:
            companies = await self.uow.companies.search(query, limit=MAX_RESULTS)
            return Return.ok(
                [
                    CompanySummary(
                        id=str(c.id), name=c.name, domain=c.domain, industry=c.industry
                    )
                    for c in companies
                ]
            )
