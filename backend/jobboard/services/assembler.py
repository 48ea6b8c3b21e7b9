"""
Result Assembler - ORM rows to response schemas.

Maps a Job and its loaded relations (company, domains, subdomains,
skill pairs) into ``JobResponse`` field by field. The mapping only reads
from the ORM objects; nothing is written back.

Normalization:
    - optional text that is None or blank becomes None
    - a missing relation becomes None (company) or [] (collections)
    - skills keep their stored order, primary flag carried per entry
"""

from typing import Iterable, List, Optional

from sqlalchemy import inspect

from jobboard.models import Company, Domain, Job, JobSkill, Subdomain
from jobboard.schemas.company import CompanyResponse
from jobboard.schemas.job import (
    DomainRef,
    JobListResponse,
    JobResponse,
    JobSkillResponse,
    SubdomainRef,
)
from jobboard.services.pagination import Pagination
from jobboard.utils import format_salary_range


def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip() if isinstance(value, str) else value
    return value or None


def _loaded(obj, attribute: str):
    """Relation value if already loaded, else None (never triggers IO)."""
    state = inspect(obj)
    if attribute in state.unloaded:
        return None
    return getattr(obj, attribute)


def assemble_company(company: Optional[Company]) -> Optional[CompanyResponse]:
    if company is None:
        return None
    return CompanyResponse(
        id=company.id,
        name=company.name,
        logo=_text(company.logo),
        website=_text(company.website),
        description=_text(company.description),
        industry=list(company.industry or []),
        size=_text(company.size),
        location=_text(company.location),
        created_at=company.created_at,
        updated_at=company.updated_at,
    )


def assemble_domain(domain: Domain) -> DomainRef:
    return DomainRef(id=domain.id, name=domain.name, description=_text(domain.description))


def assemble_subdomain(subdomain: Subdomain) -> SubdomainRef:
    parent = _loaded(subdomain, "domain")
    return SubdomainRef(
        id=subdomain.id,
        name=subdomain.name,
        description=_text(subdomain.description),
        domain_id=subdomain.domain_id,
        domain_name=parent.name if parent is not None else None,
    )


def assemble_job_skill(job_skill: JobSkill) -> Optional[JobSkillResponse]:
    skill = _loaded(job_skill, "skill")
    if skill is None:
        return None
    return JobSkillResponse(
        id=skill.id,
        name=skill.name,
        category=_text(skill.category),
        is_primary=bool(job_skill.is_primary),
    )


def assemble_job(job: Job) -> JobResponse:
    domains = _loaded(job, "domains") or []
    subdomains = _loaded(job, "subdomains") or []
    job_skills = _loaded(job, "skills") or []
    skills = [s for s in (assemble_job_skill(js) for js in job_skills) if s is not None]

    return JobResponse(
        id=job.id,
        title=job.title,
        description=job.description,
        responsibilities=_text(job.responsibilities),
        requirements=_text(job.requirements),
        preferred_skills=_text(job.preferred_skills),
        company=assemble_company(_loaded(job, "company")),
        location=_text(job.location),
        location_type=job.location_type,
        salary_min=job.salary_min,
        salary_max=job.salary_max,
        salary_currency=job.salary_currency,
        salary_period=job.salary_period,
        salary_display=format_salary_range(
            job.salary_min, job.salary_max, job.salary_currency, job.salary_period
        ),
        job_type=job.job_type,
        experience_level=job.experience_level,
        application_link=job.application_link,
        application_deadline=job.application_deadline,
        posted_date=job.posted_date,
        is_active=bool(job.is_active),
        view_count=job.view_count or 0,
        click_count=job.click_count or 0,
        image_url=_text(job.image_url),
        qr_code_url=_text(job.qr_code_url),
        domains=[assemble_domain(d) for d in domains],
        subdomains=[assemble_subdomain(s) for s in subdomains],
        skills=skills,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


def assemble_jobs(jobs: Iterable[Job]) -> List[JobResponse]:
    return [assemble_job(job) for job in jobs]


def assemble_page(jobs: Iterable[Job], pagination: Pagination) -> JobListResponse:
    return JobListResponse(
        items=assemble_jobs(jobs),
        total=pagination.total,
        page=pagination.page,
        page_size=pagination.page_size,
        page_count=pagination.page_count,
    )
