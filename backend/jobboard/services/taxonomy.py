"""
Taxonomy Service - companies, domains and skills.

Listings that feed the filter widgets are read through the Redis cache;
every admin write invalidates the affected kind.

Usage:
    service = TaxonomyService(session, cache)
    domains = await service.list_domains()
    popular = await service.popular_skills(limit=10)
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.exceptions import EntityInUse, JobValidationError
from jobboard.repositories import CompanyRepository, DomainRepository, SkillRepository
from jobboard.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from jobboard.schemas.taxonomy import (
    DomainCreate,
    DomainResponse,
    DomainUpdate,
    PopularDomainResponse,
    PopularSkillResponse,
    SkillCreate,
    SkillListResponse,
    SkillResponse,
    SkillUpdate,
    SubdomainCreate,
    SubdomainResponse,
)
from jobboard.services.cache import CacheLayer, TaxonomyCache
from jobboard.services.pagination import Pagination, page_window

logger = logging.getLogger(__name__)

DEFAULT_SKILL_PAGE_SIZE = 50

# NOT NULL columns; an explicit null in an update leaves them unchanged
REQUIRED_COMPANY_FIELDS = {"name", "industry"}
REQUIRED_NAME_FIELDS = {"name"}

POPULAR_DOMAINS_LIMIT = 5
POPULAR_SKILLS_LIMIT = 10


def _changes(data, required: set) -> dict:
    return {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field not in required
    }


class TaxonomyService:
    """
    CRUD and cached listings for companies, domains and skills.

    Attributes:
        companies: CompanyRepository
        domains: DomainRepository
        skills: SkillRepository
        cache: Optional TaxonomyCache (None disables caching)
    """

    def __init__(self, session: AsyncSession, cache: Optional[TaxonomyCache] = None):
        self.session = session
        self.companies = CompanyRepository(session)
        self.domains = DomainRepository(session)
        self.skills = SkillRepository(session)
        self.cache = cache

    async def _cached(self, layer: CacheLayer, kind: str, params: dict):
        if self.cache is None:
            return None
        return await self.cache.get(layer, kind, params)

    async def _store(self, layer: CacheLayer, kind: str, params: dict, value) -> None:
        if self.cache is not None:
            await self.cache.set(layer, kind, params, value)

    async def _invalidate(self, *kinds: str) -> None:
        if self.cache is None:
            return
        for kind in kinds:
            await self.cache.invalidate(kind)

    async def invalidate_popular(self) -> None:
        """Job writes change the popular-domain/skill counts."""
        await self._invalidate("popular_domains", "popular_skills")

    # ==================== Companies ====================

    async def list_companies(self) -> List[CompanyResponse]:
        cached = await self._cached(CacheLayer.TAXONOMY, "companies", {})
        if cached is not None:
            return [CompanyResponse.model_validate(c) for c in cached]

        companies = [CompanyResponse.model_validate(c) for c in await self.companies.list_all()]
        await self._store(
            CacheLayer.TAXONOMY, "companies", {}, [c.model_dump(mode="json") for c in companies]
        )
        return companies

    async def get_company(self, company_id: str) -> Optional[CompanyResponse]:
        company = await self.companies.get(company_id)
        return CompanyResponse.model_validate(company) if company else None

    async def create_company(self, data: CompanyCreate) -> CompanyResponse:
        company = await self.companies.create(data.model_dump())
        await self._invalidate("companies")
        logger.info(f"Created company {company.id}: {company.name}")
        return CompanyResponse.model_validate(company)

    async def update_company(self, company_id: str, data: CompanyUpdate) -> Optional[CompanyResponse]:
        company = await self.companies.update(company_id, _changes(data, REQUIRED_COMPANY_FIELDS))
        if company is None:
            return None
        await self._invalidate("companies")
        return CompanyResponse.model_validate(company)

    async def delete_company(self, company_id: str) -> bool:
        """
        Raises:
            EntityInUse: the company still owns job listings
        """
        job_count = await self.companies.count_jobs(company_id)
        if job_count:
            raise EntityInUse(f"Company {company_id} still has {job_count} job(s)")
        deleted = await self.companies.delete(company_id)
        if deleted:
            await self._invalidate("companies")
        return deleted

    # ==================== Domains ====================

    async def list_domains(self) -> List[DomainResponse]:
        cached = await self._cached(CacheLayer.TAXONOMY, "domains", {})
        if cached is not None:
            return [DomainResponse.model_validate(d) for d in cached]

        domains = [DomainResponse.model_validate(d) for d in await self.domains.list_all()]
        await self._store(
            CacheLayer.TAXONOMY, "domains", {}, [d.model_dump(mode="json") for d in domains]
        )
        return domains

    async def get_domain(self, domain_id: str) -> Optional[DomainResponse]:
        domain = await self.domains.get(domain_id)
        return DomainResponse.model_validate(domain) if domain else None

    async def get_domain_by_name(self, name: str) -> Optional[DomainResponse]:
        domain = await self.domains.get_by_name(name)
        return DomainResponse.model_validate(domain) if domain else None

    async def create_domain(self, data: DomainCreate) -> DomainResponse:
        try:
            domain = await self.domains.create(
                data.model_dump(exclude={"subdomains"}),
                subdomains=[s.model_dump() for s in data.subdomains],
            )
        except IntegrityError as e:
            await self.session.rollback()
            raise JobValidationError(f"Domain '{data.name}' already exists", field="name") from e
        await self._invalidate("domains", "popular_domains")
        return DomainResponse.model_validate(domain)

    async def update_domain(self, domain_id: str, data: DomainUpdate) -> Optional[DomainResponse]:
        try:
            domain = await self.domains.update(domain_id, _changes(data, REQUIRED_NAME_FIELDS))
        except IntegrityError as e:
            await self.session.rollback()
            raise JobValidationError("Domain name already exists", field="name") from e
        if domain is None:
            return None
        await self._invalidate("domains", "popular_domains")
        return DomainResponse.model_validate(domain)

    async def add_subdomain(self, domain_id: str, data: SubdomainCreate) -> Optional[SubdomainResponse]:
        subdomain = await self.domains.add_subdomain(domain_id, data.model_dump())
        if subdomain is None:
            return None
        await self._invalidate("domains", "popular_domains")
        return SubdomainResponse.model_validate(subdomain)

    async def delete_domain(self, domain_id: str) -> bool:
        deleted = await self.domains.delete(domain_id)
        if deleted:
            await self._invalidate("domains", "popular_domains")
        return deleted

    async def popular_domains(self, limit: int = POPULAR_DOMAINS_LIMIT) -> List[PopularDomainResponse]:
        params = {"limit": limit}
        cached = await self._cached(CacheLayer.POPULAR, "popular_domains", params)
        if cached is not None:
            return [PopularDomainResponse.model_validate(d) for d in cached]

        popular = [
            PopularDomainResponse(
                **DomainResponse.model_validate(domain).model_dump(),
                job_count=job_count,
            )
            for domain, job_count in await self.domains.popular(limit)
        ]
        await self._store(
            CacheLayer.POPULAR, "popular_domains", params, [d.model_dump(mode="json") for d in popular]
        )
        return popular

    # ==================== Skills ====================

    async def list_skills(
        self,
        page: int = 1,
        page_size: int = DEFAULT_SKILL_PAGE_SIZE,
        category: Optional[str] = None,
        search: Optional[str] = None,
        order_by: str = "name",
        order_direction: str = "asc",
    ) -> SkillListResponse:
        params = {
            "page": page,
            "page_size": page_size,
            "category": category,
            "search": search,
            "order_by": order_by,
            "order_direction": order_direction,
        }
        cached = await self._cached(CacheLayer.TAXONOMY, "skills", params)
        if cached is not None:
            return SkillListResponse.model_validate(cached)

        total = await self.skills.count(category=category, search=search)
        pagination = Pagination.build(total, page, page_size)
        skip, take = page_window(pagination.page, pagination.page_size)
        skills = await self.skills.find_many(
            category=category,
            search=search,
            skip=skip,
            take=take,
            order_by=order_by,
            order_direction=order_direction,
        )

        response = SkillListResponse(
            skills=[SkillResponse.model_validate(s) for s in skills],
            total=pagination.total,
            page=pagination.page,
            page_size=pagination.page_size,
            page_count=pagination.page_count,
        )
        await self._store(CacheLayer.TAXONOMY, "skills", params, response.model_dump(mode="json"))
        return response

    async def get_skill(self, skill_id: str) -> Optional[SkillResponse]:
        skill = await self.skills.get(skill_id)
        return SkillResponse.model_validate(skill) if skill else None

    async def get_skill_by_name(self, name: str) -> Optional[SkillResponse]:
        skill = await self.skills.get_by_name(name)
        return SkillResponse.model_validate(skill) if skill else None

    async def create_skill(self, data: SkillCreate) -> SkillResponse:
        try:
            skill = await self.skills.create(data.model_dump())
        except IntegrityError as e:
            await self.session.rollback()
            raise JobValidationError(f"Skill '{data.name}' already exists", field="name") from e
        await self._invalidate("skills", "popular_skills")
        return SkillResponse.model_validate(skill)

    async def update_skill(self, skill_id: str, data: SkillUpdate) -> Optional[SkillResponse]:
        try:
            skill = await self.skills.update(skill_id, _changes(data, REQUIRED_NAME_FIELDS))
        except IntegrityError as e:
            await self.session.rollback()
            raise JobValidationError("Skill name already exists", field="name") from e
        if skill is None:
            return None
        await self._invalidate("skills", "popular_skills")
        return SkillResponse.model_validate(skill)

    async def delete_skill(self, skill_id: str) -> bool:
        deleted = await self.skills.delete(skill_id)
        if deleted:
            await self._invalidate("skills", "popular_skills")
        return deleted

    async def popular_skills(self, limit: int = POPULAR_SKILLS_LIMIT) -> List[PopularSkillResponse]:
        params = {"limit": limit}
        cached = await self._cached(CacheLayer.POPULAR, "popular_skills", params)
        if cached is not None:
            return [PopularSkillResponse.model_validate(s) for s in cached]

        popular = [
            PopularSkillResponse(
                **SkillResponse.model_validate(skill).model_dump(),
                job_count=job_count,
            )
            for skill, job_count in await self.skills.popular(limit)
        ]
        await self._store(
            CacheLayer.POPULAR, "popular_skills", params, [s.model_dump(mode="json") for s in popular]
        )
        return popular
