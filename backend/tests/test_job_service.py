"""
Tests for JobService admin operations and the result assembler.
"""

from datetime import timedelta, timezone

import pytest

from jobboard.exceptions import JobValidationError
from jobboard.schemas import JobCreate, JobUpdate
from jobboard.services.assembler import assemble_job
from jobboard.services.job_service import JobService
from jobboard.utils import utcnow


@pytest.fixture
async def refs(seed):
    company = await seed.company("Acme Corp", website="https://acme.example.com")
    engineering = await seed.domain("Engineering", subdomains=["Backend", "Frontend"])
    design = await seed.domain("Design")
    python = await seed.skill("Python")
    sql = await seed.skill("SQL")
    return {
        "company": company,
        "engineering": engineering,
        "design": design,
        "backend": engineering.subdomains[0],
        "python": python,
        "sql": sql,
    }


def job_payload(refs, **overrides) -> JobCreate:
    data = {
        "title": "Backend Engineer",
        "description": "Build APIs",
        "company_id": refs["company"].id,
        "application_link": "https://acme.example.com/careers/1",
        "salary_min": 90000,
        "salary_max": 120000,
        "domain_ids": [refs["engineering"].id],
        "subdomain_ids": [refs["backend"].id],
        "skills": [
            {"skill_id": refs["python"].id, "is_primary": True},
            {"skill_id": refs["sql"].id},
        ],
    }
    data.update(overrides)
    return JobCreate(**data)


class TestCreateJob:
    @pytest.mark.asyncio
    async def test_creates_with_relations(self, session, refs):
        job = await JobService(session).create_job(job_payload(refs))

        assert job.title == "Backend Engineer"
        assert job.company.name == "Acme Corp"
        assert [d.name for d in job.domains] == ["Engineering"]
        assert job.subdomains[0].domain_name == "Engineering"
        assert [(s.name, s.is_primary) for s in job.skills] == [("Python", True), ("SQL", False)]
        assert job.salary_display == "$90,000 - $120,000/year"
        assert job.view_count == 0
        assert job.is_active is True

    @pytest.mark.asyncio
    async def test_created_job_is_searchable(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        found = await service.get_by_id(created.id)
        assert found is not None
        assert found.application_link == "https://acme.example.com/careers/1"

    @pytest.mark.asyncio
    async def test_future_posted_date_rejected(self, session, refs):
        payload = job_payload(refs, posted_date=utcnow() + timedelta(days=2))
        with pytest.raises(JobValidationError) as exc:
            await JobService(session).create_job(payload)
        assert exc.value.field == "posted_date"

    @pytest.mark.asyncio
    async def test_aware_posted_date_normalized(self, session, refs):
        posted = (utcnow() - timedelta(days=1)).replace(tzinfo=timezone.utc)
        job = await JobService(session).create_job(job_payload(refs, posted_date=posted))
        assert job.posted_date.tzinfo is None
        assert job.posted_date == posted.replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_inverted_salary_rejected(self, session, refs):
        with pytest.raises(JobValidationError) as exc:
            await JobService(session).create_job(job_payload(refs, salary_min=150000))
        assert exc.value.field == "salary_min"

    @pytest.mark.asyncio
    async def test_requires_a_domain(self, session, refs):
        with pytest.raises(JobValidationError) as exc:
            await JobService(session).create_job(job_payload(refs, domain_ids=[]))
        assert exc.value.field == "domain_ids"

    @pytest.mark.asyncio
    async def test_unknown_company(self, session, refs):
        with pytest.raises(JobValidationError) as exc:
            await JobService(session).create_job(job_payload(refs, company_id="nope"))
        assert exc.value.field == "company_id"

    @pytest.mark.asyncio
    async def test_unknown_skill(self, session, refs):
        with pytest.raises(JobValidationError) as exc:
            await JobService(session).create_job(job_payload(refs, skills=[{"skill_id": "nope"}]))
        assert exc.value.field == "skills"
        assert "nope" in exc.value.message

    @pytest.mark.asyncio
    async def test_duplicate_skill_collapses(self, session, refs):
        skills = [{"skill_id": refs["python"].id}, {"skill_id": refs["python"].id, "is_primary": True}]
        job = await JobService(session).create_job(job_payload(refs, skills=skills))
        assert [(s.name, s.is_primary) for s in job.skills] == [("Python", True)]


class TestUpdateJob:
    @pytest.mark.asyncio
    async def test_partial_update(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))

        updated = await service.update_job(created.id, JobUpdate(title="Senior Backend Engineer"))
        assert updated.title == "Senior Backend Engineer"
        assert updated.description == "Build APIs"
        assert len(updated.skills) == 2

    @pytest.mark.asyncio
    async def test_replace_skills_keeps_existing_rows(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))

        updated = await service.update_job(
            created.id,
            JobUpdate(skills=[{"skill_id": refs["sql"].id, "is_primary": True}, {"skill_id": refs["python"].id}]),
        )
        assert [(s.name, s.is_primary) for s in updated.skills] == [("SQL", True), ("Python", False)]

    @pytest.mark.asyncio
    async def test_replace_domains(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        updated = await service.update_job(created.id, JobUpdate(domain_ids=[refs["design"].id]))
        assert [d.name for d in updated.domains] == ["Design"]

    @pytest.mark.asyncio
    async def test_cannot_remove_all_domains(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        with pytest.raises(JobValidationError):
            await service.update_job(created.id, JobUpdate(domain_ids=[]))

    @pytest.mark.asyncio
    async def test_salary_checked_against_stored_value(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        with pytest.raises(JobValidationError):
            await service.update_job(created.id, JobUpdate(salary_max=50000))

    @pytest.mark.asyncio
    async def test_null_for_required_field_ignored(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        updated = await service.update_job(created.id, JobUpdate(title=None, location=None))
        assert updated.title == "Backend Engineer"

    @pytest.mark.asyncio
    async def test_missing_job(self, session, refs):
        assert await JobService(session).update_job("missing", JobUpdate(title="x")) is None


class TestDeleteAndShareImage:
    @pytest.mark.asyncio
    async def test_delete(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        assert await service.delete_job(created.id) is True
        assert await service.get_by_id(created.id) is None
        assert await service.delete_job(created.id) is False

    @pytest.mark.asyncio
    async def test_set_share_image(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        updated = await service.set_share_image(
            created.id, "https://blobs.example.com/share.png", "https://blobs.example.com/qr.png"
        )
        assert updated.image_url == "https://blobs.example.com/share.png"
        assert updated.qr_code_url == "https://blobs.example.com/qr.png"
        assert await service.set_share_image("missing", "x") is None

    @pytest.mark.asyncio
    async def test_stats(self, session, refs):
        service = JobService(session)
        created = await service.create_job(job_payload(refs))
        await service.increment_view(created.id)
        await service.track_apply(created.id, "user-1")

        stats = await service.stats()
        assert stats["total_jobs"] == 1
        assert stats["active_jobs"] == 1
        assert stats["total_views"] == 1
        assert stats["total_clicks"] == 1
        assert stats["jobs_by_type"] == {"Full-time": 1}
        assert stats["applications_by_status"] == {"CLICKED": 1}


class TestAssembler:
    @pytest.mark.asyncio
    async def test_blank_text_becomes_none(self, session, seed):
        company = await seed.company("Blank Co", description="   ")
        job = await seed.job(company, requirements="", location="  ")
        loaded = await JobService(session).jobs.find_unique(job.id)

        response = assemble_job(loaded)
        assert response.requirements is None
        assert response.location is None
        assert response.company.description is None
        assert response.domains == []
        assert response.skills == []
        assert response.salary_display == "Salary not specified"
