"""
Shared fixtures: an in-memory SQLite database per test and helpers that
seed companies, domains, skills and jobs.
"""

from datetime import datetime, timedelta
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobboard.database import Base
from jobboard.models import Company, Domain, Job, JobSkill, Skill, Subdomain

BASE_DATE = datetime(2024, 6, 1, 12, 0, 0)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


class Seeder:
    """Creates rows directly through the ORM for test setup."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._job_counter = 0

    async def company(self, name: str = "Acme Corp", **fields) -> Company:
        company = Company(name=name, industry=fields.pop("industry", ["Technology"]), **fields)
        self.session.add(company)
        await self.session.commit()
        return company

    async def domain(self, name: str, subdomains: Optional[List[str]] = None) -> Domain:
        domain = Domain(name=name)
        domain.subdomains = [Subdomain(name=s) for s in subdomains or []]
        self.session.add(domain)
        await self.session.commit()
        return domain

    async def skill(self, name: str, category: Optional[str] = "technical") -> Skill:
        skill = Skill(name=name, category=category)
        self.session.add(skill)
        await self.session.commit()
        return skill

    async def job(
        self,
        company: Company,
        title: Optional[str] = None,
        domains: Optional[List[Domain]] = None,
        skills: Optional[List[Skill]] = None,
        days_ago: Optional[int] = None,
        **fields,
    ) -> Job:
        self._job_counter += 1
        if days_ago is None:
            days_ago = self._job_counter
        job = Job(
            title=title or f"Job {self._job_counter}",
            description=fields.pop("description", "A job description"),
            company_id=company.id,
            application_link=fields.pop("application_link", "https://jobs.example.com/apply"),
            posted_date=fields.pop("posted_date", BASE_DATE - timedelta(days=days_ago)),
            **fields,
        )
        job.domains = list(domains or [])
        job.skills = [
            JobSkill(skill=skill, is_primary=(i == 0), position=i)
            for i, skill in enumerate(skills or [])
        ]
        self.session.add(job)
        await self.session.commit()
        return job


@pytest.fixture
def seed(session):
    return Seeder(session)
