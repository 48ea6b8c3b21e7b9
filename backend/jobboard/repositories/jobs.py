"""
Job Repository - persistence access for job listings.

Operations:
    count(predicate)                              -> int
    find_many(predicate, skip, take, order_by)    -> list[Job]
    find_unique(job_id)                           -> Job | None
    create(job) / save(job) / delete(job_id)
    increment(job_id, field, amount)              -> bool

Relations are loaded with the explicit ``JOB_RELATIONS`` loader options so
the result assembler never triggers lazy loads.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import selectinload

from jobboard.models import Domain, Job, JobSkill, Skill, Subdomain
from jobboard.repositories.base import BaseRepository, translate_storage_errors
from jobboard.services.predicates import JobPredicate

logger = logging.getLogger(__name__)

JOB_RELATIONS = (
    selectinload(Job.company),
    selectinload(Job.domains),
    selectinload(Job.subdomains).selectinload(Subdomain.domain),
    selectinload(Job.skills).selectinload(JobSkill.skill),
)

COUNTER_FIELDS = ("view_count", "click_count")


class JobRepository(BaseRepository):
    """Job persistence operations over one AsyncSession."""

    @translate_storage_errors
    async def count(self, predicate: JobPredicate) -> int:
        query = predicate.apply(select(func.count(Job.id)))
        result = await self.session.execute(query)
        return result.scalar() or 0

    @translate_storage_errors
    async def find_many(
        self,
        predicate: JobPredicate,
        skip: int = 0,
        take: Optional[int] = None,
        order_by: Sequence = (),
    ) -> List[Job]:
        query = predicate.apply(select(Job)).options(*JOB_RELATIONS)
        if order_by:
            query = query.order_by(*order_by)
        if skip:
            query = query.offset(skip)
        if take is not None:
            query = query.limit(take)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    @translate_storage_errors
    async def find_unique(self, job_id: str) -> Optional[Job]:
        query = (
            select(Job)
            .where(Job.id == job_id)
            .options(*JOB_RELATIONS)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def exists(self, job_id: str) -> bool:
        result = await self.session.execute(select(Job.id).where(Job.id == job_id))
        return result.scalar_one_or_none() is not None

    @translate_storage_errors
    async def create(self, job: Job) -> Job:
        self.session.add(job)
        await self.session.commit()
        return await self.find_unique(job.id)

    @translate_storage_errors
    async def save(self, job: Job) -> Job:
        """Commit pending changes to an already-loaded job and reload it."""
        await self.session.commit()
        return await self.find_unique(job.id)

    @translate_storage_errors
    async def delete(self, job_id: str) -> bool:
        job = await self.session.get(Job, job_id)
        if job is None:
            return False
        await self.session.delete(job)
        await self.session.commit()
        return True

    @translate_storage_errors
    async def increment(self, job_id: str, field: str, amount: int = 1) -> bool:
        """
        Atomically add ``amount`` to a counter column.

        Issued as a single ``UPDATE jobs SET col = col + :amount`` so
        concurrent requests never lose an increment.

        Returns:
            True if a row was updated, False if the job does not exist
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Not a counter field: {field}")

        column = getattr(Job, field)
        query = (
            update(Job)
            .where(Job.id == job_id)
            .values({field: column + amount})
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(query)
        await self.session.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def get_domains(self, domain_ids: Sequence[str]) -> List[Domain]:
        if not domain_ids:
            return []
        result = await self.session.execute(select(Domain).where(Domain.id.in_(domain_ids)))
        return list(result.scalars().all())

    @translate_storage_errors
    async def get_subdomains(self, subdomain_ids: Sequence[str]) -> List[Subdomain]:
        if not subdomain_ids:
            return []
        result = await self.session.execute(
            select(Subdomain).where(Subdomain.id.in_(subdomain_ids))
        )
        return list(result.scalars().all())

    @translate_storage_errors
    async def get_skills(self, skill_ids: Sequence[str]) -> List[Skill]:
        if not skill_ids:
            return []
        result = await self.session.execute(select(Skill).where(Skill.id.in_(skill_ids)))
        return list(result.scalars().all())

    @translate_storage_errors
    async def counter_totals(self) -> dict:
        """Aggregate numbers for the admin dashboard."""
        query = select(
            func.count(Job.id),
            func.coalesce(func.sum(Job.view_count), 0),
            func.coalesce(func.sum(Job.click_count), 0),
        )
        total, views, clicks = (await self.session.execute(query)).one()

        active_result = await self.session.execute(
            select(func.count(Job.id)).where(Job.is_active.is_(True))
        )
        type_result = await self.session.execute(
            select(Job.job_type, func.count(Job.id)).group_by(Job.job_type)
        )
        return {
            "total_jobs": total or 0,
            "active_jobs": active_result.scalar() or 0,
            "total_views": int(views or 0),
            "total_clicks": int(clicks or 0),
            "jobs_by_type": {row[0]: row[1] for row in type_result.all()},
        }
