"""
Pagination & Ordering Engine

Computes offset/limit windows, page metadata and a deterministic ORDER BY
for job listings.

Ordering:
    primary key (postedDate | salary | title | viewCount) in the requested
    direction, then posted_date desc, then id asc.

The trailing id makes the order total. Rows that tie on the primary key
always come back in the same sequence, so walking every page visits each
matching job exactly once.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy.sql.elements import ColumnElement

from jobboard.models import Job
from jobboard.services.filters import DEFAULT_SORT_BY, DEFAULT_SORT_DIR

SORT_COLUMNS = {
    "postedDate": Job.posted_date,
    "salary": Job.salary_min,
    "title": Job.title,
    "viewCount": Job.view_count,
}


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    total: int
    page_count: int

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> "Pagination":
        page_size = max(1, page_size)
        return cls(
            page=max(1, page),
            page_size=page_size,
            total=total,
            page_count=math.ceil(total / page_size) if total else 0,
        )

    @property
    def is_out_of_range(self) -> bool:
        return self.page > self.page_count


def page_window(page: int, page_size: int) -> Tuple[int, int]:
    """
    Offset/limit for a 1-based page.

    Returns:
        (skip, take)
    """
    page = max(1, page)
    page_size = max(1, page_size)
    return (page - 1) * page_size, page_size


def job_ordering(
    sort_by: str = DEFAULT_SORT_BY,
    sort_dir: str = DEFAULT_SORT_DIR,
) -> List[ColumnElement]:
    """
    ORDER BY clauses for a job listing.

    Unknown sort keys fall back to posted_date desc. Salary sorts keep jobs
    without a salary at the end in both directions.
    """
    column = SORT_COLUMNS.get(sort_by)
    if column is None:
        column, sort_dir = Job.posted_date, "desc"

    primary = column.asc() if sort_dir == "asc" else column.desc()
    ordering: List[ColumnElement] = []

    if column is Job.salary_min:
        ordering.append(Job.salary_min.is_(None).asc())
    ordering.append(primary)

    if column is not Job.posted_date:
        ordering.append(Job.posted_date.desc())
    ordering.append(Job.id.asc())
    return ordering
