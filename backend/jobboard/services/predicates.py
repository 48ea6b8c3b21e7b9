"""
Predicate Builder - FilterOptions to composable SQL predicates.

A ``JobPredicate`` is an immutable conjunction of SQLAlchemy boolean
clauses over the ``jobs`` table. Predicates combine with ``&``; since the
result is a plain AND of all clauses, composition is associative and the
order clauses were added in never changes which rows match.

Clause rules:
    - is_active = true, unless the caller is an admin listing
    - domain / skill: job has a related row with that exact name or id
    - job_type / experience_level / location_type: exact match
    - remote: location_type == "Remote"
    - posted_within: posted in the last N days
    - min_salary: salary_min >= value   (jobs without salary_min never match)
    - max_salary: salary_max <= value   (jobs without salary_max never match)
    - search: case-insensitive substring of title OR description OR company name

Salary filters use range containment, not overlap. A job that only records
one bound cannot satisfy a filter on the other bound. A salary filter of 0
is treated as unset.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from jobboard.models import Company, Domain, Job, JobSkill, Skill
from jobboard.services.filters import FilterOptions
from jobboard.utils import utcnow

REMOTE_LOCATION_TYPE = "Remote"


@dataclass(frozen=True)
class JobPredicate:
    """Logical AND of zero or more clauses against Job."""

    clauses: Tuple[ColumnElement, ...] = ()

    def __and__(self, other: "JobPredicate") -> "JobPredicate":
        if not isinstance(other, JobPredicate):
            return NotImplemented
        return JobPredicate(self.clauses + other.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    @classmethod
    def of(cls, *clauses: ColumnElement) -> "JobPredicate":
        return cls(tuple(clauses))

    def to_expression(self) -> ColumnElement:
        """Single SQL expression; an empty predicate matches every row."""
        if not self.clauses:
            return true()
        return and_(*self.clauses)

    def apply(self, statement):
        """Add the predicate's WHERE clauses to a select/update statement."""
        if not self.clauses:
            return statement
        return statement.where(*self.clauses)


def active_clause() -> ColumnElement:
    return Job.is_active.is_(True)


def domain_clause(domain: str) -> ColumnElement:
    return Job.domains.any(or_(Domain.name == domain, Domain.id == domain))


def skill_clause(skill: str) -> ColumnElement:
    return Job.skills.any(
        or_(JobSkill.skill_id == skill, JobSkill.skill.has(Skill.name == skill))
    )


def search_clause(search: str) -> ColumnElement:
    return or_(
        Job.title.icontains(search, autoescape=True),
        Job.description.icontains(search, autoescape=True),
        Job.company.has(Company.name.icontains(search, autoescape=True)),
    )


def posted_within_clause(days: int) -> ColumnElement:
    return Job.posted_date >= utcnow() - timedelta(days=days)


def build_job_predicate(
    filters: Optional[FilterOptions] = None,
    include_inactive: bool = False,
) -> JobPredicate:
    """
    Translate FilterOptions into a JobPredicate.

    No clause is added for an unset filter, so an empty FilterOptions only
    carries the is_active clause (or nothing at all for admin listings).

    Args:
        filters: Normalized filters (None behaves like FilterOptions())
        include_inactive: Admin context; skip the is_active clause

    Returns:
        JobPredicate ready for JobRepository.count/find_many
    """
    filters = filters or FilterOptions()
    predicate = JobPredicate()

    if not include_inactive:
        predicate &= JobPredicate.of(active_clause())

    if filters.domain:
        predicate &= JobPredicate.of(domain_clause(filters.domain))

    if filters.skill:
        predicate &= JobPredicate.of(skill_clause(filters.skill))

    if filters.job_type:
        predicate &= JobPredicate.of(Job.job_type == filters.job_type)

    if filters.experience_level:
        predicate &= JobPredicate.of(Job.experience_level == filters.experience_level)

    if filters.location_type:
        predicate &= JobPredicate.of(Job.location_type == filters.location_type)

    if filters.remote:
        predicate &= JobPredicate.of(Job.location_type == REMOTE_LOCATION_TYPE)

    if filters.posted_within:
        predicate &= JobPredicate.of(posted_within_clause(filters.posted_within))

    if filters.min_salary:
        predicate &= JobPredicate.of(Job.salary_min >= filters.min_salary)

    if filters.max_salary:
        predicate &= JobPredicate.of(Job.salary_max <= filters.max_salary)

    if filters.search:
        predicate &= JobPredicate.of(search_clause(filters.search))

    return predicate
