from typing import List, Optional

from sqlalchemy import func, select

from jobboard.models import Company, Job
from jobboard.repositories.base import BaseRepository, translate_storage_errors


class CompanyRepository(BaseRepository):
    @translate_storage_errors
    async def list_all(self) -> List[Company]:
        result = await self.session.execute(select(Company).order_by(Company.name.asc(), Company.id.asc()))
        return list(result.scalars().all())

    @translate_storage_errors
    async def get(self, company_id: str) -> Optional[Company]:
        query = (
            select(Company)
            .where(Company.id == company_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def create(self, data: dict) -> Company:
        company = Company(**data)
        self.session.add(company)
        await self.session.commit()
        return await self.get(company.id)

    @translate_storage_errors
    async def update(self, company_id: str, data: dict) -> Optional[Company]:
        company = await self.session.get(Company, company_id)
        if company is None:
            return None
        for field, value in data.items():
            setattr(company, field, value)
        await self.session.commit()
        return await self.get(company_id)

    @translate_storage_errors
    async def count_jobs(self, company_id: str) -> int:
        result = await self.session.execute(
            select(func.count(Job.id)).where(Job.company_id == company_id)
        )
        return result.scalar() or 0

    @translate_storage_errors
    async def delete(self, company_id: str) -> bool:
        company = await self.session.get(Company, company_id)
        if company is None:
            return False
        await self.session.delete(company)
        await self.session.commit()
        return True
