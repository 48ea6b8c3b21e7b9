"""
Tests for the predicate builder, run against an in-memory SQLite database.

Tests cover:
- Each filter clause in isolation
- Monotonic narrowing: adding a filter never grows the result
- Associativity of predicate composition
- Salary containment semantics
"""

import pytest
from sqlalchemy import select

from jobboard.models import Job
from jobboard.services.filters import FilterOptions, parse_filter_params
from jobboard.services.predicates import (
    JobPredicate,
    active_clause,
    build_job_predicate,
    search_clause,
)
from jobboard.utils import utcnow


async def matching_ids(session, predicate: JobPredicate) -> set:
    result = await session.execute(predicate.apply(select(Job.id)))
    return set(result.scalars().all())


@pytest.fixture
async def catalog(seed):
    acme = await seed.company("Acme Corp")
    globex = await seed.company("Globex")
    engineering = await seed.domain("Engineering")
    design = await seed.domain("Design")
    python = await seed.skill("Python")
    figma = await seed.skill("Figma", category="creative")

    jobs = {
        "backend": await seed.job(
            acme, "Backend Engineer", domains=[engineering], skills=[python],
            salary_min=95000, salary_max=130000, location_type="Remote",
        ),
        "frontend": await seed.job(
            globex, "Frontend Engineer", domains=[engineering, design], skills=[figma],
            salary_min=80000, salary_max=100000, experience_level="Senior",
        ),
        "designer": await seed.job(
            globex, "Product Designer", domains=[design], skills=[figma],
            job_type="Contract", salary_min=None, salary_max=90000,
        ),
        "intern": await seed.job(
            acme, "Data Intern", domains=[engineering], skills=[python],
            job_type="Internship", experience_level="Entry", posted_date=utcnow(),
        ),
        "closed": await seed.job(
            acme, "Closed Role", domains=[engineering], is_active=False,
        ),
    }
    return {"jobs": jobs, "python": python, "engineering": engineering}


class TestClauses:
    @pytest.mark.asyncio
    async def test_empty_filters_only_active(self, session, catalog):
        ids = await matching_ids(session, build_job_predicate(FilterOptions()))
        jobs = catalog["jobs"]
        assert jobs["closed"].id not in ids
        assert len(ids) == 4

    @pytest.mark.asyncio
    async def test_include_inactive_has_no_clauses(self, session, catalog):
        predicate = build_job_predicate(FilterOptions(), include_inactive=True)
        assert len(predicate) == 0
        assert len(await matching_ids(session, predicate)) == 5

    @pytest.mark.asyncio
    async def test_domain_by_name_and_id(self, session, catalog):
        jobs = catalog["jobs"]
        by_name = await matching_ids(session, build_job_predicate(FilterOptions(domain="Design")))
        assert by_name == {jobs["frontend"].id, jobs["designer"].id}

        engineering_id = catalog["engineering"].id
        by_id = await matching_ids(session, build_job_predicate(FilterOptions(domain=engineering_id)))
        assert by_id == {jobs["backend"].id, jobs["frontend"].id, jobs["intern"].id}

    @pytest.mark.asyncio
    async def test_skill_by_name_and_id(self, session, catalog):
        jobs = catalog["jobs"]
        expected = {jobs["backend"].id, jobs["intern"].id}
        assert await matching_ids(session, build_job_predicate(FilterOptions(skill="Python"))) == expected
        python_id = catalog["python"].id
        assert await matching_ids(session, build_job_predicate(FilterOptions(skill=python_id))) == expected

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_across_fields(self, session, catalog):
        jobs = catalog["jobs"]
        by_title = await matching_ids(session, build_job_predicate(FilterOptions(search="ENGINEER")))
        assert by_title == {jobs["backend"].id, jobs["frontend"].id}

        by_company = await matching_ids(session, build_job_predicate(FilterOptions(search="globex")))
        assert by_company == {jobs["frontend"].id, jobs["designer"].id}

    @pytest.mark.asyncio
    async def test_search_escapes_wildcards(self, session, catalog):
        ids = await matching_ids(session, JobPredicate.of(search_clause("%")))
        assert ids == set()

    @pytest.mark.asyncio
    async def test_remote_maps_to_location_type(self, session, catalog):
        ids = await matching_ids(session, build_job_predicate(FilterOptions(remote=True)))
        assert ids == {catalog["jobs"]["backend"].id}

    @pytest.mark.asyncio
    async def test_posted_within(self, session, catalog):
        ids = await matching_ids(session, build_job_predicate(FilterOptions(posted_within=1)))
        assert ids == {catalog["jobs"]["intern"].id}

    @pytest.mark.asyncio
    async def test_salary_containment(self, session, catalog):
        jobs = catalog["jobs"]
        min_ids = await matching_ids(session, build_job_predicate(FilterOptions(min_salary=90000)))
        assert min_ids == {jobs["backend"].id}

        max_ids = await matching_ids(session, build_job_predicate(FilterOptions(max_salary=100000)))
        # Jobs without salary_max never match a max filter
        assert max_ids == {jobs["frontend"].id, jobs["designer"].id}

    @pytest.mark.asyncio
    async def test_zero_salary_is_unset(self, session, catalog):
        predicate = build_job_predicate(FilterOptions(min_salary=0))
        assert len(predicate) == 1


class TestComposition:
    @pytest.mark.asyncio
    async def test_monotonic_narrowing(self, session, catalog):
        steps = [
            {},
            {"domain": "Engineering"},
            {"domain": "Engineering", "skill": "Python"},
            {"domain": "Engineering", "skill": "Python", "minSalary": "90000"},
            {"domain": "Engineering", "skill": "Python", "minSalary": "90000", "remote": "true"},
        ]
        previous = None
        for raw in steps:
            ids = await matching_ids(session, build_job_predicate(parse_filter_params(raw)))
            if previous is not None:
                assert ids <= previous
            previous = ids
        assert previous == {catalog["jobs"]["backend"].id}

    @pytest.mark.asyncio
    async def test_associative(self, session, catalog):
        a = JobPredicate.of(active_clause())
        b = build_job_predicate(FilterOptions(domain="Engineering"), include_inactive=True)
        c = build_job_predicate(FilterOptions(job_type="Full-time"), include_inactive=True)

        left = (a & b) & c
        right = a & (b & c)
        assert await matching_ids(session, left) == await matching_ids(session, right)
        assert len(left) == len(right) == 3

    @pytest.mark.asyncio
    async def test_clause_order_irrelevant(self, session, catalog):
        b = build_job_predicate(FilterOptions(domain="Design"), include_inactive=True)
        c = build_job_predicate(FilterOptions(max_salary=95000), include_inactive=True)
        assert await matching_ids(session, b & c) == await matching_ids(session, c & b)

    def test_empty_predicate_expression(self):
        assert str(JobPredicate().to_expression().compile()) in ("true", "1")

    def test_and_with_other_type_not_supported(self):
        with pytest.raises(TypeError):
            JobPredicate() & "is_active"
