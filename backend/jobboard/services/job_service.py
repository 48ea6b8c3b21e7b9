"""
Job Service - operations the page layer calls for job listings.

Read side:
    search(filters)          -> JobListResponse  (items + page metadata)
    get_by_id(job_id)        -> JobResponse | None
    get_similar(job_id, n)   -> list[JobResponse], len <= n, never the job itself
    list_applications(user)  -> list[ApplicationResponse]

Side effects (fire-and-forget, failures logged and swallowed):
    increment_view(job_id), increment_click(job_id)
    record_application_click(user_id, job_id)

Apply flow:
    track_apply(job_id, user_id) -> URL to redirect to

Admin:
    create_job, update_job, delete_job, set_share_image, stats

Missing jobs are reported as None/[]/False; only StorageUnavailable
propagates from the read side.

Usage:
    service = JobService(session)
    page = await service.search(parse_filter_params(request.query_params))
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.exceptions import JobBoardError, JobValidationError
from jobboard.middleware.metrics import record_job_event
from jobboard.models import Job, JobSkill
from jobboard.repositories import (
    ApplicationRepository,
    CompanyRepository,
    JobRepository,
)
from jobboard.schemas.application import ApplicationResponse
from jobboard.schemas.job import (
    JobCreate,
    JobListResponse,
    JobResponse,
    JobSkillInput,
    JobUpdate,
)
from jobboard.services.assembler import assemble_job, assemble_jobs, assemble_page
from jobboard.services.filters import FilterOptions
from jobboard.services.pagination import Pagination, job_ordering, page_window
from jobboard.services.predicates import build_job_predicate
from jobboard.services.similarity import SimilarityRanker
from jobboard.utils import utcnow

logger = logging.getLogger(__name__)

JOBS_FALLBACK_URL = "/jobs"
REQUIRED_JOB_FIELDS = {
    "title", "description", "company_id", "location_type", "salary_currency",
    "salary_period", "job_type", "experience_level", "application_link", "is_active",
}
DEFAULT_SIMILAR_LIMIT = 3
COUNTER_EVENTS = {"view_count": "view", "click_count": "click"}


class JobService:
    """
    Job listing operations over one request session.

    Attributes:
        jobs: JobRepository
        applications: ApplicationRepository
        companies: CompanyRepository
        ranker: SimilarityRanker
    """

    def __init__(
        self,
        session: AsyncSession,
        jobs: Optional[JobRepository] = None,
        applications: Optional[ApplicationRepository] = None,
        companies: Optional[CompanyRepository] = None,
        ranker: Optional[SimilarityRanker] = None,
    ):
        self.session = session
        self.jobs = jobs or JobRepository(session)
        self.applications = applications or ApplicationRepository(session)
        self.companies = companies or CompanyRepository(session)
        self.ranker = ranker or SimilarityRanker(session)

    # ==================== Read Side ====================

    async def search(
        self,
        filters: Optional[FilterOptions] = None,
        include_inactive: bool = False,
    ) -> JobListResponse:
        """
        Filtered, paginated, deterministically ordered job listing.

        A page past the last one returns no items but still reports the
        real total and page count.
        """
        filters = filters or FilterOptions()
        predicate = build_job_predicate(filters, include_inactive=include_inactive)

        total = await self.jobs.count(predicate)
        pagination = Pagination.build(total, filters.page, filters.page_size)

        if total == 0 or pagination.is_out_of_range:
            return assemble_page([], pagination)

        skip, take = page_window(pagination.page, pagination.page_size)
        jobs = await self.jobs.find_many(
            predicate,
            skip=skip,
            take=take,
            order_by=job_ordering(filters.sort_by, filters.sort_dir),
        )
        return assemble_page(jobs, pagination)

    async def get_by_id(self, job_id: str) -> Optional[JobResponse]:
        job = await self.jobs.find_unique(job_id)
        if job is None:
            return None
        return assemble_job(job)

    async def get_similar(self, job_id: str, n: int = DEFAULT_SIMILAR_LIMIT) -> List[JobResponse]:
        jobs = await self.ranker.rank(job_id, limit=n)
        return assemble_jobs(jobs)

    async def list_applications(self, user_id: str) -> List[ApplicationResponse]:
        applications = await self.applications.list_for_user(user_id)
        return [
            ApplicationResponse(
                id=a.id,
                job_id=a.job_id,
                status=a.status,
                notes=a.notes,
                clicked_at=a.clicked_at,
                status_updated_at=a.status_updated_at,
                job=assemble_job(a.job) if a.job is not None else None,
            )
            for a in applications
        ]

    # ==================== Side Effects ====================

    async def increment_view(self, job_id: str) -> None:
        await self._increment(job_id, "view_count")

    async def increment_click(self, job_id: str) -> None:
        await self._increment(job_id, "click_count")

    async def _increment(self, job_id: str, field: str) -> None:
        try:
            updated = await self.jobs.increment(job_id, field)
            if not updated:
                logger.info(f"Skipped {field} increment for unknown job {job_id}")
                return
            record_job_event(COUNTER_EVENTS[field])
        except JobBoardError as e:
            logger.error(f"Error incrementing {field} for job {job_id}: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error incrementing {field} for job {job_id}: {e}")

    async def record_application_click(self, user_id: str, job_id: str) -> None:
        """Idempotent (user, job) application upsert; never raises."""
        try:
            await self.applications.upsert_click(user_id, job_id, clicked_at=utcnow())
            record_job_event("application")
        except JobBoardError as e:
            logger.error(f"Error recording application click for job {job_id}: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error recording application click for job {job_id}: {e}")

    async def track_apply(self, job_id: str, user_id: Optional[str] = None) -> str:
        """
        Apply-button flow: count the click, remember the application for
        signed-in users, and return where to send the browser.

        Returns:
            The job's application link, or "/jobs" when the job cannot be found
        """
        try:
            job = await self.jobs.find_unique(job_id)
        except JobBoardError as e:
            logger.error(f"Error tracking job application for {job_id}: {e}")
            return JOBS_FALLBACK_URL

        if job is None:
            logger.info(f"Apply clicked for unknown job {job_id}")
            return JOBS_FALLBACK_URL
        application_link = job.application_link

        await self.increment_click(job_id)
        if user_id:
            await self.record_application_click(user_id, job_id)

        logger.info(f"User {user_id or 'anonymous'} clicked apply for job {job_id}")
        return application_link

    # ==================== Admin ====================

    async def create_job(self, data: JobCreate) -> JobResponse:
        """
        Create a job listing.

        Raises:
            JobValidationError: an invariant is violated or a referenced
                company, domain, subdomain or skill does not exist
        """
        now = utcnow()
        posted_date = _naive(data.posted_date) or now

        if posted_date > now:
            raise JobValidationError("Posted date cannot be in the future", field="posted_date")
        _check_salary_range(data.salary_min, data.salary_max)
        if not data.domain_ids:
            raise JobValidationError("A job needs at least one domain", field="domain_ids")

        if await self.companies.get(data.company_id) is None:
            raise JobValidationError("Company not found", field="company_id")

        fields = data.model_dump(exclude={"domain_ids", "subdomain_ids", "skills", "posted_date"})
        fields["application_link"] = str(data.application_link)
        fields["application_deadline"] = _naive(data.application_deadline)

        job = Job(**fields, posted_date=posted_date)
        job.domains = await self._resolve_domains(data.domain_ids)
        job.subdomains = await self._resolve_subdomains(data.subdomain_ids)
        job.skills = await self._resolve_skills(data.skills)

        created = await self.jobs.create(job)
        logger.info(f"Created job {created.id}: {created.title}")
        return assemble_job(created)

    async def update_job(self, job_id: str, data: JobUpdate) -> Optional[JobResponse]:
        job = await self.jobs.find_unique(job_id)
        if job is None:
            return None

        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_JOB_FIELDS
        }
        domain_ids = update_data.pop("domain_ids", None)
        subdomain_ids = update_data.pop("subdomain_ids", None)
        skills = update_data.pop("skills", None)

        if domain_ids is not None and not domain_ids:
            raise JobValidationError("A job needs at least one domain", field="domain_ids")
        _check_salary_range(
            update_data.get("salary_min", job.salary_min),
            update_data.get("salary_max", job.salary_max),
        )
        if "company_id" in update_data and await self.companies.get(update_data["company_id"]) is None:
            raise JobValidationError("Company not found", field="company_id")
        if "application_link" in update_data:
            update_data["application_link"] = str(update_data["application_link"])
        if "application_deadline" in update_data:
            update_data["application_deadline"] = _naive(update_data["application_deadline"])

        for field, value in update_data.items():
            setattr(job, field, value)

        if domain_ids is not None:
            job.domains = await self._resolve_domains(domain_ids)
        if subdomain_ids is not None:
            job.subdomains = await self._resolve_subdomains(subdomain_ids)
        if skills is not None:
            job.skills = await self._resolve_skills(
                [JobSkillInput(**s) for s in skills], existing=job.skills
            )

        saved = await self.jobs.save(job)
        return assemble_job(saved)

    async def delete_job(self, job_id: str) -> bool:
        deleted = await self.jobs.delete(job_id)
        if deleted:
            logger.info(f"Deleted job {job_id}")
        return deleted

    async def stats(self) -> dict:
        """Dashboard totals: job counts, summed counters and applications by status."""
        totals = await self.jobs.counter_totals()
        totals["applications_by_status"] = await self.applications.count_by_status()
        return totals

    async def set_share_image(
        self,
        job_id: str,
        image_url: Optional[str],
        qr_code_url: Optional[str] = None,
    ) -> Optional[JobResponse]:
        job = await self.jobs.find_unique(job_id)
        if job is None:
            return None
        job.image_url = image_url
        if qr_code_url is not None:
            job.qr_code_url = qr_code_url
        saved = await self.jobs.save(job)
        return assemble_job(saved)

    # ==================== Reference Resolution ====================

    async def _resolve_domains(self, domain_ids: List[str]):
        domains = await self.jobs.get_domains(_unique(domain_ids))
        _check_all_found("domain_ids", domain_ids, {d.id for d in domains})
        return domains

    async def _resolve_subdomains(self, subdomain_ids: List[str]):
        subdomains = await self.jobs.get_subdomains(_unique(subdomain_ids))
        _check_all_found("subdomain_ids", subdomain_ids, {s.id for s in subdomains})
        return subdomains

    async def _resolve_skills(
        self,
        inputs: List[JobSkillInput],
        existing: Optional[List[JobSkill]] = None,
    ) -> List[JobSkill]:
        """
        Build the ordered JobSkill list. Rows already attached to the job are
        reused so the (job_id, skill_id) unique key is never re-inserted.
        """
        seen = {}
        for item in inputs:
            # Duplicate skill ids collapse; primary wins
            seen[item.skill_id] = seen.get(item.skill_id, False) or item.is_primary

        skills = await self.jobs.get_skills(list(seen))
        by_id = {s.id: s for s in skills}
        _check_all_found("skills", list(seen), set(by_id))

        current = {js.skill_id: js for js in existing or []}
        resolved = []
        for position, (skill_id, is_primary) in enumerate(seen.items()):
            job_skill = current.get(skill_id) or JobSkill(skill=by_id[skill_id])
            job_skill.is_primary = is_primary
            job_skill.position = position
            resolved.append(job_skill)
        return resolved


def _unique(ids: List[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def _naive(value: Optional[datetime]) -> Optional[datetime]:
    """Timezone-aware input converted to naive UTC, as stored."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _check_salary_range(salary_min: Optional[int], salary_max: Optional[int]) -> None:
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise JobValidationError("Minimum salary cannot exceed maximum salary", field="salary_min")


def _check_all_found(field: str, requested: List[str], found: set) -> None:
    missing = [i for i in requested if i not in found]
    if missing:
        raise JobValidationError(f"Unknown {field}: {', '.join(missing)}", field=field)
