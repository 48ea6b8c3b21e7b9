"""
Domain and Skill Repositories

Both taxonomies support CRUD plus a "popular" query ranking entries by the
number of active jobs referencing them.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from jobboard.models import Domain, Job, JobSkill, Skill, Subdomain, job_domains
from jobboard.repositories.base import BaseRepository, translate_storage_errors

SKILL_SORT_COLUMNS = {
    "name": Skill.name,
    "category": Skill.category,
}


class DomainRepository(BaseRepository):
    def _select(self):
        return select(Domain).options(selectinload(Domain.subdomains))

    @translate_storage_errors
    async def list_all(self) -> List[Domain]:
        result = await self.session.execute(self._select().order_by(Domain.name.asc()))
        return list(result.scalars().all())

    @translate_storage_errors
    async def get(self, domain_id: str) -> Optional[Domain]:
        query = (
            self._select()
            .where(Domain.id == domain_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def get_by_name(self, name: str) -> Optional[Domain]:
        result = await self.session.execute(self._select().where(Domain.name == name))
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def create(self, data: dict, subdomains: Optional[List[dict]] = None) -> Domain:
        domain = Domain(**data)
        domain.subdomains = [Subdomain(**sub) for sub in subdomains or []]
        self.session.add(domain)
        await self.session.commit()
        return await self.get(domain.id)

    @translate_storage_errors
    async def update(self, domain_id: str, data: dict) -> Optional[Domain]:
        domain = await self.session.get(Domain, domain_id)
        if domain is None:
            return None
        for field, value in data.items():
            setattr(domain, field, value)
        await self.session.commit()
        return await self.get(domain_id)

    @translate_storage_errors
    async def add_subdomain(self, domain_id: str, data: dict) -> Optional[Subdomain]:
        if await self.session.get(Domain, domain_id) is None:
            return None
        subdomain = Subdomain(domain_id=domain_id, **data)
        self.session.add(subdomain)
        await self.session.commit()
        await self.session.refresh(subdomain)
        return subdomain

    @translate_storage_errors
    async def delete(self, domain_id: str) -> bool:
        domain = await self.session.get(Domain, domain_id)
        if domain is None:
            return False
        await self.session.delete(domain)
        await self.session.commit()
        return True

    @translate_storage_errors
    async def popular(self, limit: int = 5) -> List[Tuple[Domain, int]]:
        """Domains with the most active jobs, most popular first."""
        job_count = func.count(Job.id).label("job_count")
        query = (
            select(Domain, job_count)
            .join(job_domains, job_domains.c.domain_id == Domain.id)
            .join(Job, Job.id == job_domains.c.job_id)
            .where(Job.is_active.is_(True))
            .group_by(Domain.id)
            .order_by(job_count.desc(), Domain.name.asc())
            .limit(limit)
            .options(selectinload(Domain.subdomains))
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]


class SkillRepository(BaseRepository):
    def _filtered(self, query, category: Optional[str], search: Optional[str]):
        if category:
            query = query.where(Skill.category == category)
        if search:
            query = query.where(Skill.name.icontains(search, autoescape=True))
        return query

    @translate_storage_errors
    async def count(self, category: Optional[str] = None, search: Optional[str] = None) -> int:
        query = self._filtered(select(func.count(Skill.id)), category, search)
        result = await self.session.execute(query)
        return result.scalar() or 0

    @translate_storage_errors
    async def find_many(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        take: int = 50,
        order_by: str = "name",
        order_direction: str = "asc",
    ) -> List[Skill]:
        column = SKILL_SORT_COLUMNS.get(order_by)
        if column is None:
            column, order_direction = Skill.name, "asc"
        primary = column.desc() if order_direction == "desc" else column.asc()

        query = self._filtered(select(Skill), category, search)
        query = query.order_by(primary, Skill.name.asc(), Skill.id.asc()).offset(skip).limit(take)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    @translate_storage_errors
    async def get(self, skill_id: str) -> Optional[Skill]:
        query = select(Skill).where(Skill.id == skill_id).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def get_by_name(self, name: str) -> Optional[Skill]:
        result = await self.session.execute(select(Skill).where(Skill.name == name))
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def create(self, data: dict) -> Skill:
        skill = Skill(**data)
        self.session.add(skill)
        await self.session.commit()
        return await self.get(skill.id)

    @translate_storage_errors
    async def update(self, skill_id: str, data: dict) -> Optional[Skill]:
        skill = await self.session.get(Skill, skill_id)
        if skill is None:
            return None
        for field, value in data.items():
            setattr(skill, field, value)
        await self.session.commit()
        return await self.get(skill_id)

    @translate_storage_errors
    async def delete(self, skill_id: str) -> bool:
        skill = await self.session.get(Skill, skill_id)
        if skill is None:
            return False
        await self.session.delete(skill)
        await self.session.commit()
        return True

    @translate_storage_errors
    async def popular(self, limit: int = 10) -> List[Tuple[Skill, int]]:
        """Skills used by the most active jobs, most popular first."""
        job_count = func.count(JobSkill.id).label("job_count")
        query = (
            select(Skill, job_count)
            .join(JobSkill, JobSkill.skill_id == Skill.id)
            .join(Job, Job.id == JobSkill.job_id)
            .where(Job.is_active.is_(True))
            .group_by(Skill.id)
            .order_by(job_count.desc(), Skill.name.asc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]
